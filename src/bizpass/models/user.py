# File: src/bizpass/models/user.py
"""User model mirroring the identity provider's principal."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.business import Business


class User(Base):
    """
    Authenticated principal.

    Credentials live with the identity provider; this row only exists so
    that businesses have an owner to reference.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    full_name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        default="",
    )

    # "metadata" is reserved on declarative classes
    meta: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
    )

    # Relationships
    businesses: Mapped[list["Business"]] = relationship(
        "Business",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def display_name(self) -> str:
        """Return full name or email fallback."""
        return self.full_name.strip() or self.email

    def __repr__(self) -> str:
        return f"<User(email={self.email})>"
