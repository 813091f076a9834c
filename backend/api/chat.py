"""
WS /ws — chat relay socket.
GET /api/chat/{session_id} — stored history of one chat session.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from api.deps import get_storage
from core.chat_agent import handle_chat_message
from models.chat import ChatFrame, ChatMessage, ChatReply
from storage.base import Storage

router = APIRouter()
ws_router = APIRouter()
logger = logging.getLogger(__name__)

# Open sockets: connection id → WebSocket
_clients: dict[str, WebSocket] = {}


def connected_clients() -> int:
    return len(_clients)


@router.get("/chat/{session_id}", response_model=list[ChatMessage])
def get_chat_history(session_id: str, storage: Storage = Depends(get_storage)):
    try:
        return storage.list_chat_messages(session_id)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to fetch chat messages: {e}")


@ws_router.websocket("/ws")
async def chat_socket(websocket: WebSocket, storage: Storage = Depends(get_storage)):
    await websocket.accept()
    client_id = str(uuid.uuid4())
    _clients[client_id] = websocket
    logger.info("Chat client %s connected (%d open)", client_id, len(_clients))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            raw = message.get("text")
            if raw is None:
                await websocket.send_json({"type": "error", "message": "Chat frames must be text"})
                continue
            try:
                frame = ChatFrame.model_validate_json(raw)
            except ValidationError as e:
                logger.warning("Malformed chat frame from %s: %s", client_id, e.error_count())
                await websocket.send_json({"type": "error", "message": "Malformed chat message"})
                continue
            if frame.type != "chat":
                continue
            if not frame.session_id or not (frame.content or "").strip():
                await websocket.send_json({"type": "error", "message": "sessionId and content are required"})
                continue

            try:
                stored = await run_in_threadpool(handle_chat_message, storage, frame.session_id, frame.content)
            except Exception:
                logger.exception("Chat message handling failed for session %s", frame.session_id)
                await websocket.send_json({"type": "error", "message": "Failed to process message"})
                continue

            reply = ChatReply(
                session_id=stored.session_id,
                role=stored.role,
                content=stored.content,
                timestamp=stored.timestamp,
            )
            await websocket.send_json(reply.model_dump(mode="json", by_alias=True))
    except WebSocketDisconnect:
        pass
    finally:
        _clients.pop(client_id, None)
        logger.info("Chat client %s disconnected", client_id)
