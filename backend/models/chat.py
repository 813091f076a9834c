"""Pydantic schemas for the chat relay."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import Field

from models.common import CamelModel

ChatRole = Literal["user", "assistant"]


class ChatMessageCreate(CamelModel):
    session_id: str = Field(..., min_length=1)
    role: ChatRole
    content: str


class ChatMessage(ChatMessageCreate):
    id: int
    timestamp: datetime


class ChatFrame(CamelModel):
    """Inbound socket frame: {type, sessionId, content}. Only type "chat" is handled."""
    type: str
    session_id: Optional[str] = None
    content: Optional[str] = None


class ChatReply(CamelModel):
    type: Literal["chat"] = "chat"
    session_id: str
    role: ChatRole
    content: str
    timestamp: datetime
