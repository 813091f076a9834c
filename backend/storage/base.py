"""
Storage contract: every persistence backend implements this CRUD surface.
Routes and services depend on `Storage`, never on a concrete backend.
"""
from abc import ABC, abstractmethod
from typing import Optional

from models.admin import AdminConfig, AdminConfigUpdate
from models.chat import ChatMessage, ChatMessageCreate
from models.quote import Quote, QuoteCreate, QuoteUpdate
from models.service_type import ServiceType, ServiceTypeCreate, ServiceTypeUpdate

DEFAULT_SERVICE_TYPES = [
    ServiceTypeCreate(name="Bathtub Refinishing", base_price=450),
    ServiceTypeCreate(name="Shower Refinishing", base_price=300),
    ServiceTypeCreate(name="Tile Refinishing", base_price=700),
    ServiceTypeCreate(name="Countertop Refinishing", base_price=500),
]

DEFAULT_ASSISTANT_PROMPT = (
    "You are a helpful AI assistant for RefineAI, a bathroom refinishing company. "
    "Help customers understand our services and guide them through the quote process."
)


def config_changes(patch: AdminConfigUpdate) -> dict:
    """Fields to write. An explicit null clears the optional text fields but never the provider."""
    values = patch.model_dump(exclude_unset=True)
    if values.get("llm_provider") is None:
        values.pop("llm_provider", None)
    return values


class Storage(ABC):

    # ── Service types ─────────────────────────────────────────────────────────

    @abstractmethod
    def list_service_types(self, active_only: bool = True) -> list[ServiceType]: ...

    @abstractmethod
    def get_service_type(self, service_type_id: str) -> Optional[ServiceType]: ...

    @abstractmethod
    def create_service_type(self, data: ServiceTypeCreate) -> ServiceType: ...

    @abstractmethod
    def update_service_type(self, service_type_id: str, patch: ServiceTypeUpdate) -> Optional[ServiceType]: ...

    # ── Quotes ────────────────────────────────────────────────────────────────

    @abstractmethod
    def list_quotes(self) -> list[Quote]:
        """All quotes, newest first."""

    @abstractmethod
    def get_quote(self, quote_id: str) -> Optional[Quote]: ...

    @abstractmethod
    def create_quote(self, data: QuoteCreate) -> Quote: ...

    @abstractmethod
    def update_quote(self, quote_id: str, patch: QuoteUpdate) -> Optional[Quote]: ...

    @abstractmethod
    def search_quotes(self, email: Optional[str] = None, name: Optional[str] = None) -> list[Quote]:
        """
        Email matches case-insensitively and exactly, name as a case-insensitive
        substring. A quote matching either supplied filter is returned.
        """

    # ── Chat ──────────────────────────────────────────────────────────────────

    @abstractmethod
    def list_chat_messages(self, session_id: str) -> list[ChatMessage]:
        """Messages of one session in append order."""

    @abstractmethod
    def create_chat_message(self, data: ChatMessageCreate) -> ChatMessage: ...

    # ── Admin config (singleton) ──────────────────────────────────────────────

    @abstractmethod
    def get_admin_config(self) -> AdminConfig:
        """Return the singleton row, creating the default one if absent."""

    @abstractmethod
    def update_admin_config(self, patch: AdminConfigUpdate) -> AdminConfig: ...

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def seed_defaults(self) -> None:
        """Insert the default service types and config row on an empty store."""
        if not self.list_service_types(active_only=False):
            for service_type in DEFAULT_SERVICE_TYPES:
                self.create_service_type(service_type)
        self.get_admin_config()

    def close(self) -> None:
        pass
