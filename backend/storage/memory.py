"""In-process storage backend. Data lives only as long as the process."""
import threading
import uuid
from datetime import datetime, timezone
from typing import Optional

from models.admin import AdminConfig, AdminConfigUpdate
from models.chat import ChatMessage, ChatMessageCreate
from models.quote import Quote, QuoteCreate, QuoteUpdate
from models.service_type import ServiceType, ServiceTypeCreate, ServiceTypeUpdate
from storage.base import DEFAULT_ASSISTANT_PROMPT, Storage, config_changes


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):

    def __init__(self):
        self._lock = threading.Lock()
        self._service_types: dict[str, ServiceType] = {}
        self._quotes: dict[str, Quote] = {}
        self._messages: list[ChatMessage] = []
        self._config: Optional[AdminConfig] = None

    # ── Service types ─────────────────────────────────────────────────────────

    def list_service_types(self, active_only: bool = True) -> list[ServiceType]:
        return [s for s in self._service_types.values() if s.active or not active_only]

    def get_service_type(self, service_type_id: str) -> Optional[ServiceType]:
        return self._service_types.get(service_type_id)

    def create_service_type(self, data: ServiceTypeCreate) -> ServiceType:
        service_type = ServiceType(id=str(uuid.uuid4()), **data.model_dump())
        with self._lock:
            self._service_types[service_type.id] = service_type
        return service_type

    def update_service_type(self, service_type_id: str, patch: ServiceTypeUpdate) -> Optional[ServiceType]:
        with self._lock:
            current = self._service_types.get(service_type_id)
            if current is None:
                return None
            updated = current.model_copy(update=patch.model_dump(exclude_unset=True, exclude_none=True))
            self._service_types[service_type_id] = updated
            return updated

    # ── Quotes ────────────────────────────────────────────────────────────────

    def list_quotes(self) -> list[Quote]:
        return sorted(self._quotes.values(), key=lambda q: q.created_at, reverse=True)

    def get_quote(self, quote_id: str) -> Optional[Quote]:
        return self._quotes.get(quote_id)

    def create_quote(self, data: QuoteCreate) -> Quote:
        if data.service_type_id not in self._service_types:
            raise ValueError(f"Unknown service type '{data.service_type_id}'")
        quote = Quote(id=str(uuid.uuid4()), created_at=_now(), **data.model_dump())
        with self._lock:
            self._quotes[quote.id] = quote
        return quote

    def update_quote(self, quote_id: str, patch: QuoteUpdate) -> Optional[Quote]:
        with self._lock:
            current = self._quotes.get(quote_id)
            if current is None:
                return None
            updated = current.model_copy(update=patch.model_dump(exclude_unset=True, exclude_none=True))
            self._quotes[quote_id] = updated
            return updated

    def search_quotes(self, email: Optional[str] = None, name: Optional[str] = None) -> list[Quote]:
        email_l = email.strip().lower() if email else None
        name_l = name.strip().lower() if name else None

        def matches(q: Quote) -> bool:
            if email_l and q.customer_email.lower() == email_l:
                return True
            return bool(name_l) and name_l in q.customer_name.lower()

        return [q for q in self.list_quotes() if matches(q)]

    # ── Chat ──────────────────────────────────────────────────────────────────

    def list_chat_messages(self, session_id: str) -> list[ChatMessage]:
        return [m for m in self._messages if m.session_id == session_id]

    def create_chat_message(self, data: ChatMessageCreate) -> ChatMessage:
        with self._lock:
            message = ChatMessage(id=len(self._messages) + 1, timestamp=_now(), **data.model_dump())
            self._messages.append(message)
        return message

    # ── Admin config ──────────────────────────────────────────────────────────

    def get_admin_config(self) -> AdminConfig:
        with self._lock:
            if self._config is None:
                self._config = AdminConfig(
                    id=str(uuid.uuid4()),
                    llm_provider="gemini",
                    assistant_prompt=DEFAULT_ASSISTANT_PROMPT,
                    updated_at=_now(),
                )
            return self._config

    def update_admin_config(self, patch: AdminConfigUpdate) -> AdminConfig:
        current = self.get_admin_config()
        with self._lock:
            self._config = current.model_copy(
                update={**config_changes(patch), "updated_at": _now()}
            )
            return self._config
