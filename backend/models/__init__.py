from models.service_type import ServiceType, ServiceTypeCreate, ServiceTypeUpdate  # noqa: F401
from models.quote import Quote, QuoteCreate, QuoteUpdate  # noqa: F401
from models.analysis import AIAnalysis, PriceBreakdown, ConditionAssessment  # noqa: F401
from models.chat import ChatMessage, ChatMessageCreate, ChatFrame, ChatReply  # noqa: F401
from models.admin import AdminConfig, AdminConfigUpdate, AdminConfigView, LoginRequest, LoginResponse  # noqa: F401
