"""
Admin authentication: PBKDF2 password check, expiring bearer tokens,
and per-client throttling of failed logins. All state is in-process.
"""
import hashlib
import hmac
import logging
import secrets
import threading
import time
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Return "salt$hexdigest", the format expected in ADMIN_PASSWORD_HASH."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    if "$" not in stored:
        return False
    salt, _ = stored.split("$", 1)
    return hmac.compare_digest(hash_password(password, salt), stored)


def verify_credentials(username: str, password: str) -> bool:
    if not settings.ADMIN_PASSWORD_HASH:
        logger.warning("Admin login attempted but ADMIN_PASSWORD_HASH is not set")
        return False
    user_ok = hmac.compare_digest(username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8"))
    pass_ok = verify_password(password, settings.ADMIN_PASSWORD_HASH)
    return user_ok and pass_ok


class TokenStore:
    """Opaque bearer tokens with an absolute expiry."""

    def __init__(self):
        self._tokens: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def issue(self) -> tuple[str, datetime]:
        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.ADMIN_TOKEN_TTL_MINUTES)
        with self._lock:
            self._purge()
            self._tokens[token] = expires_at
        return token, expires_at

    def is_valid(self, token: str) -> bool:
        with self._lock:
            expires_at = self._tokens.get(token)
            if expires_at is None:
                return False
            if expires_at <= datetime.now(timezone.utc):
                del self._tokens[token]
                return False
            return True

    def revoke(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()

    def _purge(self) -> None:
        now = datetime.now(timezone.utc)
        for token in [t for t, exp in self._tokens.items() if exp <= now]:
            del self._tokens[token]


class LoginThrottle:
    """Sliding-window count of failed logins per client address."""

    def __init__(self):
        self._failures: dict[str, list[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def _recent(self, client: str) -> list[float]:
        cutoff = time.monotonic() - settings.LOGIN_WINDOW_SECONDS
        recent = [t for t in self._failures.get(client, []) if t > cutoff]
        if recent:
            self._failures[client] = recent
        else:
            self._failures.pop(client, None)
        return recent

    def is_blocked(self, client: str) -> bool:
        with self._lock:
            return len(self._recent(client)) >= settings.LOGIN_MAX_FAILURES

    def record_failure(self, client: str) -> None:
        with self._lock:
            self._purge()
            self._failures[client].append(time.monotonic())

    def __len__(self) -> int:
        return len(self._failures)

    def _purge(self) -> None:
        for client in list(self._failures):
            self._recent(client)

    def reset(self, client: Optional[str] = None) -> None:
        with self._lock:
            if client is None:
                self._failures.clear()
            else:
                self._failures.pop(client, None)


tokens = TokenStore()
login_throttle = LoginThrottle()
