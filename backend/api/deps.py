"""Shared FastAPI dependencies: storage handle and admin guard."""
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import HTTPConnection

from core.auth import tokens
from storage.base import Storage

_bearer = HTTPBearer(auto_error=False)


def get_storage(conn: HTTPConnection) -> Storage:
    """Storage built at startup; works for HTTP and WebSocket routes."""
    return conn.app.state.storage


def client_address(conn: HTTPConnection) -> str:
    forwarded = conn.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return conn.client.host if conn.client else "unknown"


def require_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer)) -> str:
    if credentials is None or not tokens.is_valid(credentials.credentials):
        raise HTTPException(
            status_code=401,
            detail="Admin authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials
