"""OpenAI chat-completions REST client with data-URI image input."""
import logging
from typing import Optional

from config import settings
from integrations.llm_client import LLMClient, LLMError

logger = logging.getLogger(__name__)


class OpenAIClient(LLMClient):

    provider = "openai"

    def __init__(self, api_key: str):
        super().__init__(api_key, settings.OPENAI_HOST, settings.OPENAI_MODEL)

    def _headers(self) -> dict:
        return {"Content-Type": "application/json", "Authorization": f"Bearer {self.api_key}"}

    def generate(self, prompt: str, image_b64: Optional[str] = None, mime_type: str = "image/jpeg") -> str:
        content: list[dict] = [{"type": "text", "text": prompt}]
        if image_b64:
            content.append({
                "type": "image_url",
                "image_url": {"url": f"data:{mime_type};base64,{image_b64}"},
            })
        return self._complete([{"role": "user", "content": content}], temperature=0.2)

    def chat(self, messages: list[dict], system: Optional[str] = None) -> str:
        payload_messages = [{"role": "system", "content": system}] if system else []
        payload_messages += [{"role": m["role"], "content": m["content"]} for m in messages]
        return self._complete(payload_messages, temperature=0.4)

    def _complete(self, messages: list[dict], temperature: float) -> str:
        payload = {"model": self.model, "messages": messages, "temperature": temperature}
        data = self._post(f"{self.host}/v1/chat/completions", payload)
        try:
            text = (data["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Unexpected OpenAI response shape: {e}") from e
        if not text:
            raise LLMError("OpenAI returned an empty answer")
        return text
