"""Pydantic schema for the structured price estimate returned by the vision LLM."""
from typing import Optional
from pydantic import Field

from models.common import CamelModel


class PriceBreakdown(CamelModel):
    base_price: float = Field(..., ge=0)
    complexity_multiplier: float = Field(..., gt=0)
    additional_fees: float = Field(0, ge=0)
    labor_hours: float = Field(0, ge=0)


class ConditionAssessment(CamelModel):
    damage: list[str] = Field(default_factory=list)
    cleanability: str = "unknown"        # poor | fair | good | excellent
    existing_finish: str = "Unknown"


class AIAnalysis(CamelModel):
    total_price: float = Field(..., gt=0)
    breakdown: PriceBreakdown
    complexity: int = Field(..., ge=1, le=10)
    surface_area: float = Field(0, ge=0)   # sq ft
    condition_assessment: ConditionAssessment = Field(default_factory=ConditionAssessment)
    recommendations: list[str] = Field(default_factory=list)
    preview_description: Optional[str] = None
