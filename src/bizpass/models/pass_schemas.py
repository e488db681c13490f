# File: src/bizpass/models/pass_schemas.py
"""Pydantic schemas for entry passes, scans and verification."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from bizpass.core.validators import (
    blank_to_none,
    sanitize_html,
    validate_email,
    validate_phone,
    validate_required_text,
)
from bizpass.models.entry_pass import EntryPass
from bizpass.models.enums import PassStatus, ScanResult
from bizpass.utils.datetime import to_naive_utc


class PassHolderFields(BaseModel):
    holder_email: str | None = Field(None, max_length=255)
    holder_phone: str | None = Field(None, max_length=50)
    valid_from: datetime | None = None
    valid_until: datetime | None = None

    @field_validator("holder_email")
    @classmethod
    def validate_email_field(cls, v: str | None) -> str | None:
        return validate_email(v)

    @field_validator("holder_phone")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("valid_from", "valid_until", mode="before")
    @classmethod
    def blank_dates(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("valid_from", "valid_until")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v)

    @model_validator(mode="after")
    def check_window(self):
        if self.valid_from and self.valid_until and self.valid_until < self.valid_from:
            raise ValueError("valid_until cannot be before valid_from")
        return self


class PassCreate(PassHolderFields):
    """
    Issue a pass for an event.

    A missing validity bound defaults to the event's own start/end date.
    """

    event_id: UUID
    holder_name: str = Field(..., max_length=200)
    metadata: dict[str, Any] | None = None

    @field_validator("holder_name")
    @classmethod
    def validate_holder_name(cls, v: str) -> str:
        return validate_required_text(v, "Holder name")


class PassUpdate(PassHolderFields):
    """Editable pass fields. Event binding and generated identifiers are rejected."""

    holder_name: str | None = Field(None, max_length=200)

    model_config = ConfigDict(extra="forbid")

    @field_validator("holder_name")
    @classmethod
    def validate_holder_name(cls, v: str | None) -> str:
        return validate_required_text(v, "Holder name")


class PassStatusUpdate(BaseModel):
    status: PassStatus


class PassEventSummary(BaseModel):
    """Event fields needed to render or share a pass."""

    id: UUID
    business_id: UUID
    name: str
    venue: str | None
    town_city: str | None
    start_date: datetime | None
    end_date: datetime | None

    model_config = ConfigDict(from_attributes=True)


class PassRead(BaseModel):
    id: UUID
    event_id: UUID
    pass_code: str
    holder_name: str
    holder_email: str | None
    holder_phone: str | None
    valid_from: datetime | None
    valid_until: datetime | None
    status: PassStatus
    effective_status: Optional[PassStatus] = Field(
        None, description="Status with read-time expiry applied"
    )
    qr_code_url: str
    verification_url: str
    metadata: dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("meta", "metadata")
    )
    event: PassEventSummary
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_model(cls, entry_pass: EntryPass, at: datetime | None = None) -> "PassRead":
        read = cls.model_validate(entry_pass)
        read.effective_status = entry_pass.status_at(at)
        return read


class ScanCreate(BaseModel):
    """Details supplied by the scanning client."""

    scanner_info: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=500)
    metadata: dict[str, Any] | None = None

    @field_validator("scanner_info", "location")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class ScanRead(BaseModel):
    id: UUID
    pass_id: UUID
    scanned_at: datetime
    scanner_info: str | None
    location: str | None
    metadata: dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("meta", "metadata")
    )

    model_config = ConfigDict(from_attributes=True)


class VerificationRead(BaseModel):
    """Outcome of inspecting (no scan) or scanning a pass."""

    entry_pass: PassRead
    result: ScanResult
    accepted: bool
    scan: ScanRead | None = None


class PassShareRead(BaseModel):
    """Structured data handed to the rendering and messaging collaborators."""

    entry_pass: PassRead
    text: str
    verification_url: str
    share_url: str
