# File: src/bizpass/models/business_schemas.py
"""Pydantic schemas for Business API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bizpass.core.validators import (
    sanitize_html,
    validate_email,
    validate_phone,
    validate_required_text,
    validate_url,
)


def _clean_social_links(value: dict[str, str | None] | None) -> dict[str, str] | None:
    """Drop platforms with no URL; validate the rest."""
    if not value:
        return None
    links = {}
    for platform, url in value.items():
        cleaned = validate_url(url)
        if cleaned:
            links[platform.strip().lower()] = cleaned
    return links or None


class BusinessFields(BaseModel):
    """Optional profile fields shared by create and update."""

    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=500)
    address: str | None = Field(None, max_length=500)
    town_city: str | None = Field(None, max_length=100)
    region: str | None = Field(None, max_length=100)
    business_category: str | None = Field(None, max_length=100)
    tax_id: str | None = Field(None, max_length=100)
    registration_number: str | None = Field(None, max_length=100)
    social_media_links: dict[str, str | None] | None = None

    @field_validator("email")
    @classmethod
    def validate_email_field(cls, v: str | None) -> str | None:
        return validate_email(v)

    @field_validator("phone")
    @classmethod
    def validate_phone_number(cls, v: str | None) -> str | None:
        return validate_phone(v)

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        return validate_url(v)

    @field_validator(
        "address", "town_city", "region", "business_category", "tax_id", "registration_number"
    )
    @classmethod
    def sanitize_text(cls, v: str | None) -> str | None:
        """Sanitize free text to prevent XSS."""
        return sanitize_html(v)

    @field_validator("social_media_links")
    @classmethod
    def validate_social_links(cls, v: dict[str, str | None] | None) -> dict[str, str] | None:
        return _clean_social_links(v)


class BusinessCreate(BusinessFields):
    """Schema for creating a business profile."""

    name: str = Field(..., max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_required_text(v, "Business name")


class BusinessUpdate(BusinessFields):
    """Schema for updating a business (partial update allowed)."""

    name: str | None = Field(None, max_length=200)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        # Explicit null is treated like an empty name
        return validate_required_text(v, "Business name")


class BusinessRead(BaseModel):
    """Schema for reading a business from the database."""

    id: UUID
    user_id: UUID
    name: str
    email: str | None
    phone: str | None
    website: str | None
    address: str | None
    town_city: str | None
    region: str | None
    business_category: str | None
    tax_id: str | None
    registration_number: str | None
    social_media_links: dict[str, str] | None
    logo_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ActiveBusinessSwitch(BaseModel):
    """Request body for switching the active business."""

    business_id: UUID


class ActiveBusinessRead(BaseModel):
    """Current selection plus the list it was resolved against."""

    active: BusinessRead | None
    businesses: list[BusinessRead]
