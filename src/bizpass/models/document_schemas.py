# File: src/bizpass/models/document_schemas.py
"""Pydantic schemas for invoices and receipts."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bizpass.core.validators import (
    blank_to_none,
    sanitize_html,
    validate_currency,
    validate_email,
    validate_phone,
)
from bizpass.models.enums import DocumentStatus, DocumentType

MAX_LINE_QUANTITY = Decimal("1000000")


class ClientInfo(BaseModel):
    """Billed party. Every field is optional."""

    name: str | None = Field(None, max_length=200)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str | None) -> str | None:
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("name", "address")
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class LineItem(BaseModel):
    """
    One line of a document.

    Lines with a blank description are accepted here and dropped before the
    document is saved.
    """

    id: str | None = Field(None, max_length=64, description="Client-side row key")
    description: str = Field("", max_length=500)
    quantity: Decimal = Field(Decimal("1"), ge=0, le=MAX_LINE_QUANTITY)
    price: Decimal = Field(Decimal("0"))

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v: Any) -> Decimal:
        return validate_currency(v)

    @property
    def amount(self) -> Decimal:
        return self.quantity * self.price


class DocumentContent(BaseModel):
    """Structured document payload stored in ``documents.content``."""

    client: ClientInfo = Field(default_factory=ClientInfo)
    items: list[LineItem] = Field(default_factory=list)
    due_date: date | None = Field(None, description="Invoices only")
    notes: str | None = Field(None, max_length=5000)

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("notes")
    @classmethod
    def sanitize_notes(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class DocumentCreate(BaseModel):
    """Schema for creating a document. Number and total are assigned by the server."""

    type: DocumentType
    title: str | None = Field(None, max_length=200)
    status: DocumentStatus | None = Field(
        None, description="Defaults to draft for invoices, published for receipts"
    )
    content: DocumentContent = Field(default_factory=DocumentContent)
    template_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def sanitize_title(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class DocumentUpdate(BaseModel):
    """Edit in place. Replacing content recomputes the total."""

    title: str | None = Field(None, max_length=200)
    status: DocumentStatus | None = None
    content: DocumentContent | None = None
    pdf_url: str | None = Field(None, max_length=1000)
    template_id: UUID | None = None

    @field_validator("title")
    @classmethod
    def sanitize_title(cls, v: str | None) -> str | None:
        return sanitize_html(v)


class DocumentRead(BaseModel):
    id: UUID
    business_id: UUID
    type: DocumentType
    number: str
    title: str | None
    status: DocumentStatus
    total_amount: Decimal
    content: DocumentContent
    pdf_url: str | None
    template_id: UUID | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
