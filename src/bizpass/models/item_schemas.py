# File: src/bizpass/models/item_schemas.py
"""Pydantic schemas for catalog items."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bizpass.core.validators import sanitize_html, validate_optional_currency, validate_required_text


class ItemFields(BaseModel):
    description: str | None = Field(None, max_length=2000)
    price: Decimal | None = Field(None, description="Empty means no price set")
    unit: str | None = Field(None, max_length=50)
    category: str | None = Field(None, max_length=100)
    sku: str | None = Field(None, max_length=100)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Decimal | None:
        return validate_optional_currency(v)

    @field_validator("description", "unit", "category", "sku")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class ItemCreate(ItemFields):
    """Schema for creating a catalog item."""

    name: str = Field(..., max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_required_text(v, "Item name")


class ItemUpdate(ItemFields):
    """Partial update of a catalog item."""

    name: str | None = Field(None, max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        return validate_required_text(v, "Item name")


class ItemRead(BaseModel):
    id: UUID
    business_id: UUID
    name: str
    description: str | None
    price: Decimal | None
    unit: str | None
    category: str | None
    sku: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
