"""
Durable storage backend: SQLAlchemy engine factory and ORM-backed CRUD.
Works with any SQLAlchemy URL; SQLite by default, PostgreSQL via psycopg2.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import create_engine, event, func, or_, select, text
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from models.admin import AdminConfig, AdminConfigUpdate
from models.chat import ChatMessage, ChatMessageCreate
from models.quote import Quote, QuoteCreate, QuoteUpdate
from models.service_type import ServiceType, ServiceTypeCreate, ServiceTypeUpdate
from storage.base import DEFAULT_ASSISTANT_PROMPT, Storage, config_changes
from storage.tables import AdminConfigRow, Base, ChatMessageRow, QuoteRow, ServiceTypeRow

logger = logging.getLogger(__name__)


def create_engine_from_url(url: str):
    """Build and test a SQLAlchemy engine."""
    kwargs: dict = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):
        # SQLite ignores REFERENCES unless asked per connection
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except OperationalError as e:
        engine.dispose()
        raise ValueError(f"Could not connect to database: {e}") from e
    return engine


class SqlStorage(Storage):

    def __init__(self, url: str):
        self.engine = create_engine_from_url(url)
        Base.metadata.create_all(self.engine)
        self._session = sessionmaker(self.engine, expire_on_commit=False)
        logger.info("SQL storage ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        self.engine.dispose()

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    # ── Service types ─────────────────────────────────────────────────────────

    def list_service_types(self, active_only: bool = True) -> list[ServiceType]:
        stmt = select(ServiceTypeRow)
        if active_only:
            stmt = stmt.where(ServiceTypeRow.active.is_(True))
        with self._session() as s:
            return [ServiceType.model_validate(r) for r in s.scalars(stmt)]

    def get_service_type(self, service_type_id: str) -> Optional[ServiceType]:
        with self._session() as s:
            row = s.get(ServiceTypeRow, service_type_id)
            return ServiceType.model_validate(row) if row else None

    def create_service_type(self, data: ServiceTypeCreate) -> ServiceType:
        with self._session() as s:
            row = ServiceTypeRow(**data.model_dump())
            s.add(row)
            s.commit()
            return ServiceType.model_validate(row)

    def update_service_type(self, service_type_id: str, patch: ServiceTypeUpdate) -> Optional[ServiceType]:
        with self._session() as s:
            row = s.get(ServiceTypeRow, service_type_id)
            if row is None:
                return None
            for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(row, field, value)
            s.commit()
            return ServiceType.model_validate(row)

    # ── Quotes ────────────────────────────────────────────────────────────────

    def list_quotes(self) -> list[Quote]:
        stmt = select(QuoteRow).order_by(QuoteRow.created_at.desc())
        with self._session() as s:
            return [Quote.model_validate(r) for r in s.scalars(stmt)]

    def get_quote(self, quote_id: str) -> Optional[Quote]:
        with self._session() as s:
            row = s.get(QuoteRow, quote_id)
            return Quote.model_validate(row) if row else None

    def create_quote(self, data: QuoteCreate) -> Quote:
        values = data.model_dump(exclude={"ai_analysis"})
        values["ai_analysis"] = data.ai_analysis.model_dump(mode="json") if data.ai_analysis else None
        with self._session() as s:
            row = QuoteRow(**values)
            s.add(row)
            try:
                s.commit()
            except IntegrityError as e:
                s.rollback()
                raise ValueError(f"Unknown service type '{data.service_type_id}'") from e
            return Quote.model_validate(row)

    def update_quote(self, quote_id: str, patch: QuoteUpdate) -> Optional[Quote]:
        with self._session() as s:
            row = s.get(QuoteRow, quote_id)
            if row is None:
                return None
            for field, value in patch.model_dump(exclude_unset=True, exclude_none=True).items():
                setattr(row, field, value)
            s.commit()
            return Quote.model_validate(row)

    def search_quotes(self, email: Optional[str] = None, name: Optional[str] = None) -> list[Quote]:
        clauses = []
        if email and email.strip():
            clauses.append(func.lower(QuoteRow.customer_email) == email.strip().lower())
        if name and name.strip():
            clauses.append(func.lower(QuoteRow.customer_name).contains(name.strip().lower(), autoescape=True))
        if not clauses:
            return []
        stmt = select(QuoteRow).where(or_(*clauses)).order_by(QuoteRow.created_at.desc())
        with self._session() as s:
            return [Quote.model_validate(r) for r in s.scalars(stmt)]

    # ── Chat ──────────────────────────────────────────────────────────────────

    def list_chat_messages(self, session_id: str) -> list[ChatMessage]:
        stmt = (
            select(ChatMessageRow)
            .where(ChatMessageRow.session_id == session_id)
            .order_by(ChatMessageRow.id)
        )
        with self._session() as s:
            return [ChatMessage.model_validate(r) for r in s.scalars(stmt)]

    def create_chat_message(self, data: ChatMessageCreate) -> ChatMessage:
        with self._session() as s:
            row = ChatMessageRow(**data.model_dump())
            s.add(row)
            s.commit()
            return ChatMessage.model_validate(row)

    # ── Admin config ──────────────────────────────────────────────────────────

    def _config_row(self, s) -> AdminConfigRow:
        row = s.scalars(select(AdminConfigRow).limit(1)).first()
        if row is None:
            row = AdminConfigRow(llm_provider="gemini", assistant_prompt=DEFAULT_ASSISTANT_PROMPT)
            s.add(row)
            s.commit()
        return row

    def get_admin_config(self) -> AdminConfig:
        with self._session() as s:
            return AdminConfig.model_validate(self._config_row(s))

    def update_admin_config(self, patch: AdminConfigUpdate) -> AdminConfig:
        with self._session() as s:
            row = self._config_row(s)
            for field, value in config_changes(patch).items():
                setattr(row, field, value)
            row.updated_at = datetime.now(timezone.utc)
            s.commit()
            return AdminConfig.model_validate(row)
