import pytest
from pydantic import ValidationError

from models.admin import AdminConfig, AdminConfigUpdate, AdminConfigView
from models.analysis import AIAnalysis
from models.chat import ChatFrame
from models.quote import Quote, QuoteCreate, QuoteUpdate
from models.service_type import ServiceTypeCreate


def test_service_type_defaults_and_camel_case():
    service = ServiceTypeCreate.model_validate({"name": "Tub", "basePrice": 450})
    assert service.price_per_sqft == 0
    assert service.complexity_multiplier == 100
    assert service.model_dump(by_alias=True) == {
        "name": "Tub", "basePrice": 450, "pricePerSqft": 0, "complexityMultiplier": 100, "active": True,
    }


def test_quote_create_validation():
    quote = QuoteCreate(customer_email="a@example.com", customer_name="A", service_type_id="s", total_price=10)
    assert quote.status == "pending"
    with pytest.raises(ValidationError):
        QuoteCreate(customer_email="bad", customer_name="A", service_type_id="s", total_price=10)
    with pytest.raises(ValidationError):
        QuoteCreate(customer_email="a@example.com", customer_name="A", service_type_id="s", total_price=-1)


def test_quote_update_only_tracks_supplied_fields():
    patch = QuoteUpdate.model_validate({"status": "completed"})
    assert patch.model_dump(exclude_unset=True) == {"status": "completed"}
    with pytest.raises(ValidationError):
        QuoteUpdate(status="archived")


def test_quote_serializes_camel_case():
    quote = Quote(
        id="q1", created_at="2024-05-01T10:00:00Z", customer_email="a@example.com",
        customer_name="A", service_type_id="s", total_price=450,
    )
    dumped = quote.model_dump(mode="json", by_alias=True)
    assert dumped["createdAt"].startswith("2024-05-01T10:00:00")
    assert dumped["serviceTypeId"] == "s"
    assert dumped["aiAnalysis"] is None


def test_ai_analysis_bounds():
    base = {"totalPrice": 500, "complexity": 5, "breakdown": {"basePrice": 450, "complexityMultiplier": 1.1}}
    analysis = AIAnalysis.model_validate(base)
    assert analysis.condition_assessment.cleanability == "unknown"
    assert analysis.recommendations == []
    for bad in ({"complexity": 0}, {"totalPrice": -5}, {"breakdown": {"basePrice": 450, "complexityMultiplier": 0}}):
        with pytest.raises(ValidationError):
            AIAnalysis.model_validate({**base, **bad})


def test_chat_frame_accepts_partial_frames():
    frame = ChatFrame.model_validate_json('{"type": "typing"}')
    assert frame.session_id is None
    frame = ChatFrame.model_validate_json('{"type": "chat", "sessionId": "s", "content": "hi"}')
    assert frame.session_id == "s"


def test_admin_config_update_normalises_blanks():
    patch = AdminConfigUpdate.model_validate({"webhookUrl": "  ", "llmApiKey": ""})
    assert patch.webhook_url is None
    assert patch.llm_api_key is None
    assert patch.model_fields_set == {"webhook_url", "llm_api_key"}
    with pytest.raises(ValidationError):
        AdminConfigUpdate(webhook_url="hooks.example.com")


def test_admin_config_view_masks_key():
    config = AdminConfig(id="c", updated_at="2024-01-01T00:00:00Z", llm_api_key="sk-abcdef")
    view = AdminConfigView.from_config(config)
    assert view.llm_api_key == "****cdef"
    assert view.has_api_key is True

    empty = AdminConfigView.from_config(AdminConfig(id="c", updated_at="2024-01-01T00:00:00Z"))
    assert empty.llm_api_key is None
    assert empty.has_api_key is False
