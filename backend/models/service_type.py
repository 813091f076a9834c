"""Pydantic schemas for refinishing service types."""
from typing import Optional
from pydantic import Field

from models.common import CamelModel


class ServiceTypeCreate(CamelModel):
    name: str = Field(..., min_length=1)
    base_price: int = Field(..., ge=0, description="Base price in whole USD")
    price_per_sqft: int = Field(0, ge=0)
    complexity_multiplier: int = Field(100, ge=0, description="Percent, 100 = 1.0x")
    active: bool = True


class ServiceTypeUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    base_price: Optional[int] = Field(None, ge=0)
    price_per_sqft: Optional[int] = Field(None, ge=0)
    complexity_multiplier: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None


class ServiceType(ServiceTypeCreate):
    id: str
