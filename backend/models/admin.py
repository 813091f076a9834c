"""Pydantic schemas for admin auth and the singleton provider config."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import Field, field_validator

from models.common import CamelModel

LLMProvider = Literal["gemini", "openai"]
MASK_PREFIX = "****"


class LoginRequest(CamelModel):
    username: str
    password: str


class LoginResponse(CamelModel):
    success: bool = True
    token: str
    expires_at: datetime


class AdminConfigUpdate(CamelModel):
    webhook_url: Optional[str] = None
    llm_provider: Optional[LLMProvider] = None
    llm_api_key: Optional[str] = None
    assistant_prompt: Optional[str] = None

    @field_validator("webhook_url", "llm_api_key")
    @classmethod
    def _blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return (v.strip() or None) if v is not None else None

    @field_validator("webhook_url")
    @classmethod
    def _http_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("webhookUrl must be an http(s) URL")
        return v


class AdminConfig(CamelModel):
    id: str
    webhook_url: Optional[str] = None
    llm_provider: LLMProvider = "gemini"
    llm_api_key: Optional[str] = None
    assistant_prompt: Optional[str] = None
    updated_at: datetime


class AdminConfigView(CamelModel):
    """AdminConfig as shown to the dashboard, with the key masked."""
    id: str
    webhook_url: Optional[str] = None
    llm_provider: LLMProvider
    llm_api_key: Optional[str] = Field(None, description="Masked, last 4 chars only")
    has_api_key: bool
    assistant_prompt: Optional[str] = None
    updated_at: datetime

    @classmethod
    def from_config(cls, config: AdminConfig) -> "AdminConfigView":
        key = (config.llm_api_key or "").strip()
        return cls(
            id=config.id,
            webhook_url=config.webhook_url,
            llm_provider=config.llm_provider,
            llm_api_key=f"{MASK_PREFIX}{key[-4:]}" if key else None,
            has_api_key=bool(key),
            assistant_prompt=config.assistant_prompt,
            updated_at=config.updated_at,
        )
