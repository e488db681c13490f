# File: src/bizpass/models/pass_scan.py
"""Append-only log of verification attempts against a pass."""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.entry_pass import EntryPass


class PassScan(Base):
    """One scan of a pass. Rows are inserted, never updated or deleted."""

    __tablename__ = "pass_scans"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    pass_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("entry_passes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    scanned_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc, index=True)

    scanner_info: Mapped[str | None] = mapped_column(String(500), nullable=True)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)

    meta: Mapped[dict[str, Any] | None] = mapped_column("metadata", JSON, nullable=True)

    entry_pass: Mapped["EntryPass"] = relationship(
        "EntryPass",
        back_populates="scans",
    )

    def __repr__(self) -> str:
        return f"<PassScan(pass_id={self.pass_id}, scanned_at={self.scanned_at})>"
