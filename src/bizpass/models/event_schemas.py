# File: src/bizpass/models/event_schemas.py
"""Pydantic schemas for events."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bizpass.core.validators import (
    blank_to_none,
    sanitize_html,
    validate_optional_currency,
    validate_positive_int,
    validate_required_text,
)
from bizpass.utils.datetime import to_naive_utc


class EventFields(BaseModel):
    description: str | None = Field(None, max_length=5000)
    venue: str | None = Field(None, max_length=200)
    town_city: str | None = Field(None, max_length=100)
    region: str | None = Field(None, max_length=100)
    gps_address: str | None = Field(None, max_length=100)
    start_date: datetime | None = None
    end_date: datetime | None = None
    max_capacity: int | None = None
    entry_fee: Decimal | None = None

    @field_validator("description", "venue", "town_city", "region", "gps_address")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        return sanitize_html(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_dates(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)

    @field_validator("max_capacity", mode="before")
    @classmethod
    def parse_capacity(cls, v: Any) -> int | None:
        return validate_positive_int(v, "Max capacity")

    @field_validator("entry_fee", mode="before")
    @classmethod
    def parse_entry_fee(cls, v: Any) -> Decimal | None:
        return validate_optional_currency(v)

    @model_validator(mode="after")
    def check_schedule(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date cannot be before start date")
        return self


class EventCreate(EventFields):
    """Schema for creating an event. New events are active."""

    name: str = Field(..., max_length=200)
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_required_text(v, "Event name")


class EventUpdate(EventFields):
    """Partial update of an event."""

    name: str | None = Field(None, max_length=200)
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str:
        return validate_required_text(v, "Event name")


class EventRead(BaseModel):
    id: UUID
    business_id: UUID
    name: str
    description: str | None
    venue: str | None
    town_city: str | None
    region: str | None
    gps_address: str | None
    start_date: datetime | None
    end_date: datetime | None
    max_capacity: int | None
    entry_fee: Decimal | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
