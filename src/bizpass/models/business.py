# File: src/bizpass/models/business.py
"""Business profile model, the root of all data scoping."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.business_item import BusinessItem
    from bizpass.models.document import Document, DocumentSequence
    from bizpass.models.event import Event
    from bizpass.models.user import User


class Business(Base):
    """
    A business profile owned by exactly one user.

    Every item, document and event belongs to one business, and every
    read in the system is filtered through ``user_id``.
    """

    __tablename__ = "businesses"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        index=True,
    )

    # Contact
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    town_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Registration
    business_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tax_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    registration_number: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # platform name -> URL
    social_media_links: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)

    logo_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
    )

    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    # Relationships
    owner: Mapped["User"] = relationship(
        "User",
        back_populates="businesses",
    )

    items: Mapped[list["BusinessItem"]] = relationship(
        "BusinessItem",
        back_populates="business",
        cascade="all, delete-orphan",
    )

    documents: Mapped[list["Document"]] = relationship(
        "Document",
        back_populates="business",
        cascade="all, delete-orphan",
    )

    document_sequences: Mapped[list["DocumentSequence"]] = relationship(
        "DocumentSequence",
        cascade="all, delete-orphan",
    )

    events: Mapped[list["Event"]] = relationship(
        "Event",
        back_populates="business",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return self.name
