"""
Shared plumbing for the hosted LLM REST clients.
POST with bounded retry and exponential back-off; subclasses shape the payloads.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from config import settings
from models.admin import AdminConfig

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """The provider could not produce a usable reply."""


class LLMClient(ABC):
    """Base for vision-capable chat models reached over HTTPS."""

    provider = "base"

    def __init__(self, api_key: str, host: str, model: str):
        if not api_key:
            raise LLMError(f"No API key configured for provider '{self.provider}'")
        self.api_key = api_key
        self.host = host.rstrip("/")
        self.model = model
        self.timeout = settings.LLM_TIMEOUT_SECONDS
        self.max_attempts = max(1, settings.LLM_MAX_ATTEMPTS)

    @abstractmethod
    def generate(self, prompt: str, image_b64: Optional[str] = None, mime_type: str = "image/jpeg") -> str:
        """Single-turn completion, optionally grounded on one image."""

    @abstractmethod
    def chat(self, messages: list[dict], system: Optional[str] = None) -> str:
        """Multi-turn completion over [{role: user|assistant, content}] messages."""

    def _headers(self) -> dict:
        return {"Content-Type": "application/json"}

    def _post(self, url: str, payload: dict) -> dict:
        last_err: Optional[Exception] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                logger.debug("%s request attempt %d", self.provider, attempt)
                resp = httpx.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
                if resp.status_code < 500 and resp.status_code != 429:
                    resp.raise_for_status()
                    return resp.json()
                last_err = httpx.HTTPStatusError(
                    f"{resp.status_code} from {self.provider}", request=resp.request, response=resp
                )
            except httpx.HTTPStatusError as e:
                # 4xx other than 429 will not succeed on retry
                raise LLMError(f"{self.provider} rejected the request: {e.response.status_code}") from e
            except (httpx.TransportError, ValueError) as e:
                last_err = e
            logger.warning("%s attempt %d/%d failed: %s", self.provider, attempt, self.max_attempts, last_err)
            if attempt < self.max_attempts:
                time.sleep(2 ** attempt)
        raise LLMError(f"{self.provider} failed after {self.max_attempts} attempts: {last_err}")


def resolve_api_key(config: AdminConfig) -> str:
    """Admin-configured key when non-blank, else the provider's environment key."""
    key = (config.llm_api_key or "").strip()
    return key or settings.provider_api_key(config.llm_provider).strip()


def client_for_config(config: AdminConfig) -> LLMClient:
    return build_llm_client(config.llm_provider, resolve_api_key(config))


def build_llm_client(provider: str, api_key: str) -> LLMClient:
    """Instantiate the client for an AdminConfig.llm_provider value."""
    from integrations.gemini_client import GeminiClient
    from integrations.openai_client import OpenAIClient

    if provider == "gemini":
        return GeminiClient(api_key)
    if provider == "openai":
        return OpenAIClient(api_key)
    raise LLMError(f"Unsupported LLM provider '{provider}'")
