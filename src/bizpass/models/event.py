# File: src/bizpass/models/event.py
"""Event model: the context passes are issued against."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.business import Business
    from bizpass.models.entry_pass import EntryPass


class Event(Base):
    """Scheduled occasion owned by a business."""

    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("max_capacity IS NULL OR max_capacity > 0", name="event_capacity_positive"),
        CheckConstraint("entry_fee IS NULL OR entry_fee >= 0", name="event_fee_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Location
    venue: Mapped[str | None] = mapped_column(String(200), nullable=True)
    town_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    gps_address: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Schedule (naive UTC)
    start_date: Mapped[datetime | None] = mapped_column(nullable=True)
    end_date: Mapped[datetime | None] = mapped_column(nullable=True)

    max_capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)
    entry_fee: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    is_active: Mapped[bool] = mapped_column(
        default=True,
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    business: Mapped["Business"] = relationship(
        "Business",
        back_populates="events",
    )

    passes: Mapped[list["EntryPass"]] = relationship(
        "EntryPass",
        back_populates="event",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name})>"
