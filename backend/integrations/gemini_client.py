"""
Google Gemini REST client.
Wraps POST /v1beta/models/{model}:generateContent with inline image parts.
"""
import logging
from typing import Optional

from config import settings
from integrations.llm_client import LLMClient, LLMError

logger = logging.getLogger(__name__)


class GeminiClient(LLMClient):
    """Thin client for the Gemini generateContent API."""

    provider = "gemini"

    def __init__(self, api_key: str):
        super().__init__(api_key, settings.GEMINI_HOST, settings.GEMINI_MODEL)

    def _headers(self) -> dict:
        return {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

    @property
    def _url(self) -> str:
        return f"{self.host}/v1beta/models/{self.model}:generateContent"

    def generate(self, prompt: str, image_b64: Optional[str] = None, mime_type: str = "image/jpeg") -> str:
        parts: list[dict] = [{"text": prompt}]
        if image_b64:
            parts.append({"inline_data": {"mime_type": mime_type, "data": image_b64}})
        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {"temperature": 0.2},
        }
        return self._extract_text(self._post(self._url, payload))

    def chat(self, messages: list[dict], system: Optional[str] = None) -> str:
        contents = [
            {"role": "model" if m["role"] == "assistant" else "user", "parts": [{"text": m["content"]}]}
            for m in messages
        ]
        payload: dict = {"contents": contents, "generationConfig": {"temperature": 0.4}}
        if system:
            payload["systemInstruction"] = {"parts": [{"text": system}]}
        return self._extract_text(self._post(self._url, payload))

    @staticmethod
    def _extract_text(data: dict) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            reason = (data.get("promptFeedback") or {}).get("blockReason", "no candidates")
            raise LLMError(f"Gemini returned no answer ({reason})")
        parts = (candidates[0].get("content") or {}).get("parts") or []
        text = "".join(p.get("text", "") for p in parts).strip()
        if not text:
            raise LLMError("Gemini returned an empty answer")
        logger.debug("Gemini response length: %d chars", len(text))
        return text
