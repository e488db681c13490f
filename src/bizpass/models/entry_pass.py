# File: src/bizpass/models/entry_pass.py
"""Entry pass issued against an event."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.models.enums import PassStatus
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.event import Event
    from bizpass.models.pass_scan import PassScan


class EntryPass(Base):
    """
    Credential for one holder at one event.

    ``event_id``, ``pass_code``, ``qr_code_url`` and ``verification_url``
    are fixed at creation. Expiry is not persisted by a sweep: an active
    pass past ``valid_until`` reads as expired through ``status_at``.
    """

    __tablename__ = "entry_passes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    pass_code: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        unique=True,
        index=True,
    )

    # Holder
    holder_name: Mapped[str] = mapped_column(String(200), nullable=False)
    holder_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    holder_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Validity window (naive UTC)
    valid_from: Mapped[datetime | None] = mapped_column(nullable=True)
    valid_until: Mapped[datetime | None] = mapped_column(nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PassStatus.ACTIVE.value,
        index=True,
    )

    # PNG data URL; empty when encoding failed
    qr_code_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    verification_url: Mapped[str] = mapped_column(String(1000), nullable=False)

    meta: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    event: Mapped["Event"] = relationship(
        "Event",
        back_populates="passes",
        lazy="selectin",
    )

    scans: Mapped[list["PassScan"]] = relationship(
        "PassScan",
        back_populates="entry_pass",
        cascade="all, delete-orphan",
        order_by="PassScan.scanned_at.desc()",
    )

    def status_at(self, at: datetime | None = None) -> PassStatus:
        """Persisted status, with time-based expiry applied at read time."""
        status = PassStatus(self.status)
        at = at or now_utc()
        if status is PassStatus.ACTIVE and self.valid_until is not None and at > self.valid_until:
            return PassStatus.EXPIRED
        return status

    def __repr__(self) -> str:
        return f"<EntryPass(code={self.pass_code}, status={self.status})>"
