# app/schemas/products.py
from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional
from pydantic import ConfigDict, Field, PlainSerializer
from schemas.base import ApiModel

# JSON clients expect a number, not pydantic's default Decimal string
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ProductIn(ApiModel):
    """Request schema for creating or replacing a product. Tenant is never accepted from the body."""
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    price: Decimal = Field(..., gt=0, max_digits=18, decimal_places=2)
    stock: int = Field(default=0, ge=0)


class ProductOut(ApiModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Money
    stock: int
    tenant_id: str
    created_at: datetime
    updated_at: Optional[datetime] = None
