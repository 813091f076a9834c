from datetime import timedelta

import pytest

from models.admin import AdminConfigUpdate
from models.chat import ChatMessageCreate
from models.quote import QuoteCreate, QuoteUpdate
from models.service_type import ServiceTypeCreate, ServiceTypeUpdate
from storage import build_storage
from storage.base import DEFAULT_ASSISTANT_PROMPT
from storage.memory import MemoryStorage
from storage.sql import SqlStorage, create_engine_from_url


@pytest.fixture(params=["memory", "sql"])
def store(request):
    return request.getfixturevalue("storage" if request.param == "memory" else "sql_storage")


def _quote(store, email="dana@example.com", name="Dana Reyes", price=450):
    service_id = store.list_service_types()[0].id
    return store.create_quote(QuoteCreate(
        customer_email=email, customer_name=name, service_type_id=service_id, total_price=price,
    ))


def test_seed_defaults(store):
    prices = {s.name: s.base_price for s in store.list_service_types()}
    assert prices == {
        "Bathtub Refinishing": 450,
        "Shower Refinishing": 300,
        "Tile Refinishing": 700,
        "Countertop Refinishing": 500,
    }
    config = store.get_admin_config()
    assert config.llm_provider == "gemini"
    assert config.assistant_prompt == DEFAULT_ASSISTANT_PROMPT


def test_seed_defaults_is_idempotent(store):
    store.seed_defaults()
    assert len(store.list_service_types(active_only=False)) == 4
    assert store.get_admin_config().id == store.get_admin_config().id


def test_service_type_create_update_and_active_filter(store):
    created = store.create_service_type(ServiceTypeCreate(name="Sink Refinishing", base_price=250))
    assert store.get_service_type(created.id).name == "Sink Refinishing"

    updated = store.update_service_type(created.id, ServiceTypeUpdate(base_price=275, active=False))
    assert updated.base_price == 275
    assert updated.name == "Sink Refinishing"
    assert created.id not in {s.id for s in store.list_service_types()}
    assert created.id in {s.id for s in store.list_service_types(active_only=False)}

    assert store.update_service_type("missing", ServiceTypeUpdate(base_price=1)) is None


def test_quote_create_get_update(store):
    quote = _quote(store)
    assert quote.status == "pending"
    assert quote.created_at is not None
    assert store.get_quote(quote.id).customer_name == "Dana Reyes"

    updated = store.update_quote(quote.id, QuoteUpdate(status="approved", total_price=480))
    assert updated.status == "approved"
    assert updated.total_price == 480
    assert updated.customer_email == "dana@example.com"

    assert store.get_quote("missing") is None
    assert store.update_quote("missing", QuoteUpdate(status="rejected")) is None


def test_quote_keeps_ai_analysis(store):
    from models.analysis import AIAnalysis
    analysis = AIAnalysis.model_validate({
        "totalPrice": 520.5,
        "complexity": 5,
        "breakdown": {"basePrice": 450, "complexityMultiplier": 1.1},
    })
    service_id = store.list_service_types()[0].id
    quote = store.create_quote(QuoteCreate(
        customer_email="eve@example.com", customer_name="Eve", service_type_id=service_id,
        ai_analysis=analysis, total_price=521, photo_path="/tmp/eve.jpg",
    ))
    stored = store.get_quote(quote.id)
    assert stored.ai_analysis.total_price == 520.5
    assert stored.ai_analysis.breakdown.base_price == 450
    assert stored.photo_path == "/tmp/eve.jpg"


def test_quote_requires_known_service_type(store):
    with pytest.raises(ValueError):
        store.create_quote(QuoteCreate(
            customer_email="x@example.com", customer_name="X", service_type_id="nope", total_price=1,
        ))


def test_search_quotes(store):
    _quote(store, "Frank@Example.com", "Frank Ocean")
    _quote(store, "gina@example.com", "Gina 100%_Tile")

    assert [q.customer_name for q in store.search_quotes(email="frank@example.com")] == ["Frank Ocean"]
    assert [q.customer_name for q in store.search_quotes(name="OCEAN")] == ["Frank Ocean"]
    assert [q.customer_name for q in store.search_quotes(name="100%_")] == ["Gina 100%_Tile"]
    assert len(store.search_quotes(email="gina@example.com", name="frank")) == 2
    assert store.search_quotes(email="frank@example") == []
    assert store.search_quotes() == []


def test_chat_messages_in_append_order(store):
    first = store.create_chat_message(ChatMessageCreate(session_id="s1", role="user", content="hi"))
    store.create_chat_message(ChatMessageCreate(session_id="s2", role="user", content="other"))
    second = store.create_chat_message(ChatMessageCreate(session_id="s1", role="assistant", content="hello"))

    history = store.list_chat_messages("s1")
    assert [m.content for m in history] == ["hi", "hello"]
    assert first.id < second.id
    assert store.list_chat_messages("unknown") == []


def test_admin_config_update(store):
    config = store.update_admin_config(AdminConfigUpdate(
        webhook_url="https://hooks.example.com/quotes", llm_provider="openai", llm_api_key="sk-1",
    ))
    assert config.llm_provider == "openai"
    assert config.webhook_url == "https://hooks.example.com/quotes"

    config = store.update_admin_config(AdminConfigUpdate(assistant_prompt="Be brief."))
    assert config.llm_api_key == "sk-1"
    assert config.assistant_prompt == "Be brief."

    config = store.update_admin_config(AdminConfigUpdate(llm_api_key="", llm_provider=None))
    assert config.llm_api_key is None
    assert config.llm_provider == "openai"


def test_build_storage():
    assert isinstance(build_storage("memory", "unused"), MemoryStorage)
    sql = build_storage("sql", "sqlite://")
    try:
        assert isinstance(sql, SqlStorage)
        assert len(sql.list_service_types()) == 4
    finally:
        sql.close()
    with pytest.raises(ValueError):
        build_storage("redis", "")


def test_create_engine_from_url_bad_path():
    with pytest.raises(ValueError):
        create_engine_from_url("sqlite:////nonexistent-dir/sub/refineai.db")


def test_sql_storage_survives_reopen(temp_sqlite_db):
    first = SqlStorage(f"sqlite:///{temp_sqlite_db}")
    first.seed_defaults()
    quote = _quote(first)
    first.close()

    second = SqlStorage(f"sqlite:///{temp_sqlite_db}")
    second.seed_defaults()
    try:
        assert second.get_quote(quote.id).customer_name == "Dana Reyes"
        assert len(second.list_service_types()) == 4
    finally:
        second.close()


def test_timestamps_are_timezone_aware(store):
    quote = _quote(store)
    message = store.create_chat_message(ChatMessageCreate(session_id="tz", role="user", content="hi"))
    store.update_admin_config(AdminConfigUpdate(assistant_prompt="Hello."))

    assert store.get_quote(quote.id).created_at.utcoffset() == timedelta(0)
    assert store.list_quotes()[0].created_at.tzinfo is not None
    assert store.list_chat_messages("tz")[0].timestamp.utcoffset() == timedelta(0)
    assert store.get_admin_config().updated_at.utcoffset() == timedelta(0)
    assert message.timestamp.tzinfo is not None


def test_sql_timestamps_serialise_with_offset(sql_storage):
    quote = _quote(sql_storage)
    dumped = sql_storage.get_quote(quote.id).model_dump(mode="json", by_alias=True)
    assert dumped["createdAt"].endswith("Z") or dumped["createdAt"].endswith("+00:00")
