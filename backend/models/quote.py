"""Pydantic schemas for customer quotes."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import EmailStr, Field

from models.analysis import AIAnalysis
from models.common import CamelModel

QuoteStatus = Literal["pending", "approved", "rejected", "completed"]


class QuoteCreate(CamelModel):
    customer_email: EmailStr
    customer_name: str = Field(..., min_length=1)
    service_type_id: str
    photo_path: Optional[str] = None
    ai_analysis: Optional[AIAnalysis] = None
    total_price: int = Field(..., ge=0)
    status: QuoteStatus = "pending"


class QuoteUpdate(CamelModel):
    """Admin edits; only supplied fields change."""
    customer_email: Optional[EmailStr] = None
    customer_name: Optional[str] = Field(None, min_length=1)
    total_price: Optional[int] = Field(None, ge=0)
    status: Optional[QuoteStatus] = None


class Quote(QuoteCreate):
    id: str
    created_at: datetime
