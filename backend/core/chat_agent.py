"""
Chat agent: persists each turn and produces the assistant reply.
Uses the configured LLM when enabled; otherwise, or when the LLM fails, a canned reply.
"""
import logging
from typing import Optional

from config import settings
from integrations.llm_client import LLMError, client_for_config, resolve_api_key
from models.chat import ChatMessage, ChatMessageCreate
from prompts.pricing_analysis import CANNED_CHAT_REPLY
from storage.base import DEFAULT_ASSISTANT_PROMPT, Storage

logger = logging.getLogger(__name__)


def canned_reply(content: str) -> str:
    return CANNED_CHAT_REPLY.format(content=content)


def _recent_history(storage: Storage, session_id: str) -> list[ChatMessage]:
    """Last CHAT_HISTORY_LIMIT turns, trimmed so the window opens on a user turn."""
    history = storage.list_chat_messages(session_id)[-max(1, settings.CHAT_HISTORY_LIMIT):]
    while history and history[0].role == "assistant":
        history = history[1:]
    return history


def _llm_reply(storage: Storage, session_id: str) -> Optional[str]:
    """Assistant reply from the configured provider, or None when unavailable."""
    if not settings.CHAT_USE_LLM:
        return None
    config = storage.get_admin_config()
    if not resolve_api_key(config):
        logger.debug("Chat LLM enabled but no API key configured")
        return None

    messages = [{"role": m.role, "content": m.content} for m in _recent_history(storage, session_id)]
    try:
        client = client_for_config(config)
        return client.chat(messages, system=config.assistant_prompt or DEFAULT_ASSISTANT_PROMPT)
    except LLMError as e:
        logger.warning("Chat LLM failed for session %s, using canned reply: %s", session_id, e)
        return None


def handle_chat_message(storage: Storage, session_id: str, content: str) -> ChatMessage:
    """Store the user turn, generate and store the assistant turn, return the latter."""
    storage.create_chat_message(ChatMessageCreate(session_id=session_id, role="user", content=content))
    reply = _llm_reply(storage, session_id) or canned_reply(content)
    logger.info("Chat reply for session %s (%d chars)", session_id, len(reply))
    return storage.create_chat_message(
        ChatMessageCreate(session_id=session_id, role="assistant", content=reply)
    )
