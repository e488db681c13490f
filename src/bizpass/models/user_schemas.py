# File: src/bizpass/models/user_schemas.py
"""Pydantic schemas for the current identity."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    """Principal as exposed to clients: id, email and provider metadata."""

    id: UUID
    email: str
    full_name: str
    display_name: str
    metadata: dict[str, Any] | None = Field(
        None, validation_alias=AliasChoices("meta", "metadata")
    )
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
