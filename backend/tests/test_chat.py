from unittest.mock import MagicMock, patch

from config import settings
from core.chat_agent import canned_reply, handle_chat_message
from integrations.llm_client import LLMError
from models.admin import AdminConfigUpdate


def test_websocket_chat_round_trip(client, storage):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "chat", "sessionId": "sess-1", "content": "Do you refinish tubs?"})
        reply = ws.receive_json()

    assert reply["type"] == "chat"
    assert reply["sessionId"] == "sess-1"
    assert reply["role"] == "assistant"
    assert "Do you refinish tubs?" in reply["content"]
    assert "timestamp" in reply

    history = client.get("/api/chat/sess-1").json()
    assert [(m["role"], m["content"]) for m in history] == [
        ("user", "Do you refinish tubs?"),
        ("assistant", reply["content"]),
    ]


def test_websocket_ignores_other_frame_types(client, storage):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "typing", "sessionId": "sess-2"})
        ws.send_json({"type": "chat", "sessionId": "sess-2", "content": "hello"})
        reply = ws.receive_json()

    assert reply["content"] == canned_reply("hello")
    assert len(storage.list_chat_messages("sess-2")) == 2


def test_websocket_reports_malformed_frames(client, storage):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("{not json")
        assert ws.receive_json() == {"type": "error", "message": "Malformed chat message"}

        ws.send_json({"type": "chat", "sessionId": "sess-3", "content": "   "})
        assert ws.receive_json()["type"] == "error"

        ws.send_json({"type": "chat", "sessionId": "sess-3", "content": "still here"})
        assert ws.receive_json()["type"] == "chat"


def test_websocket_rejects_binary_frames(client, storage):
    with client.websocket_connect("/ws") as ws:
        ws.send_bytes(b'{"type": "chat", "sessionId": "sess-5", "content": "hi"}')
        assert ws.receive_json() == {"type": "error", "message": "Chat frames must be text"}

        ws.send_json({"type": "chat", "sessionId": "sess-5", "content": "hi"})
        assert ws.receive_json()["type"] == "chat"

    assert len(storage.list_chat_messages("sess-5")) == 2


def test_health_counts_open_sockets(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "chat", "sessionId": "sess-4", "content": "ping"})
        ws.receive_json()
        assert client.get("/api/health").json()["chat_clients"] == 1


def test_handle_chat_message_uses_llm_when_enabled(storage, monkeypatch):
    monkeypatch.setattr(settings, "CHAT_USE_LLM", True)
    storage.update_admin_config(AdminConfigUpdate(llm_api_key="sk-chat", assistant_prompt="Be brief."))
    llm = MagicMock()
    llm.chat.return_value = "Yes, we refinish tubs."

    with patch("core.chat_agent.client_for_config", return_value=llm):
        reply = handle_chat_message(storage, "s1", "Do you refinish tubs?")

    assert reply.content == "Yes, we refinish tubs."
    messages, kwargs = llm.chat.call_args.args[0], llm.chat.call_args.kwargs
    assert messages == [{"role": "user", "content": "Do you refinish tubs?"}]
    assert kwargs["system"] == "Be brief."


def test_handle_chat_message_falls_back_on_llm_error(storage, monkeypatch):
    monkeypatch.setattr(settings, "CHAT_USE_LLM", True)
    storage.update_admin_config(AdminConfigUpdate(llm_api_key="sk-chat"))
    llm = MagicMock()
    llm.chat.side_effect = LLMError("rate limited")

    with patch("core.chat_agent.client_for_config", return_value=llm):
        reply = handle_chat_message(storage, "s1", "hi")

    assert reply.content == canned_reply("hi")
    assert reply.role == "assistant"


def test_handle_chat_message_canned_without_llm(storage):
    with patch("core.chat_agent.client_for_config") as mock_factory:
        reply = handle_chat_message(storage, "s1", "hi")
    mock_factory.assert_not_called()
    assert reply.content == canned_reply("hi")


def _seed_exchange(storage, session_id, turns):
    from models.chat import ChatMessageCreate
    for i in range(turns):
        storage.create_chat_message(ChatMessageCreate(session_id=session_id, role="user", content=f"q{i}"))
        storage.create_chat_message(ChatMessageCreate(session_id=session_id, role="assistant", content=f"a{i}"))


def test_llm_history_window_starts_on_user_turn(storage, monkeypatch):
    monkeypatch.setattr(settings, "CHAT_USE_LLM", True)
    monkeypatch.setattr(settings, "CHAT_HISTORY_LIMIT", 4)
    storage.update_admin_config(AdminConfigUpdate(llm_api_key="sk-chat"))
    _seed_exchange(storage, "s1", 2)
    llm = MagicMock()
    llm.chat.return_value = "ok"

    with patch("core.chat_agent.client_for_config", return_value=llm):
        handle_chat_message(storage, "s1", "q2")

    messages = llm.chat.call_args.args[0]
    assert [m["role"] for m in messages] == ["user", "assistant", "user"]
    assert [m["content"] for m in messages] == ["q1", "a1", "q2"]


def test_llm_history_limit_zero_sends_only_latest_turn(storage, monkeypatch):
    monkeypatch.setattr(settings, "CHAT_USE_LLM", True)
    monkeypatch.setattr(settings, "CHAT_HISTORY_LIMIT", 0)
    storage.update_admin_config(AdminConfigUpdate(llm_api_key="sk-chat"))
    _seed_exchange(storage, "s1", 3)
    llm = MagicMock()
    llm.chat.return_value = "ok"

    with patch("core.chat_agent.client_for_config", return_value=llm):
        handle_chat_message(storage, "s1", "latest")

    assert llm.chat.call_args.args[0] == [{"role": "user", "content": "latest"}]
