# File: src/bizpass/models/document.py
"""Invoice/receipt model and the per-business numbering sequence."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    JSON,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bizpass.core.db import Base
from bizpass.models.enums import DocumentStatus
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.business import Business


class Document(Base):
    """
    Invoice or receipt.

    ``content`` holds the client block, line items, optional due date and
    notes. ``total_amount`` is computed from the line items when the
    document is saved and never recomputed on read, so historical documents
    keep their totals when catalog prices change.
    """

    __tablename__ = "documents"
    __table_args__ = (
        UniqueConstraint("business_id", "number", name="uq_documents_business_number"),
        CheckConstraint("total_amount >= 0", name="document_total_non_negative"),
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

    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    number: Mapped[str] = mapped_column(String(50), nullable=False)

    title: Mapped[str | None] = mapped_column(String(200), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DocumentStatus.DRAFT.value,
        index=True,
    )

    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        default=Decimal("0.00"),
    )

    content: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    pdf_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    # Reserved for document templates, not interpreted here
    template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc, index=True)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    business: Mapped["Business"] = relationship(
        "Business",
        back_populates="documents",
    )

    def __repr__(self) -> str:
        return f"<Document(number={self.number}, type={self.type}, status={self.status})>"


class DocumentSequence(Base):
    """Last issued number per (business, document type)."""

    __tablename__ = "document_sequences"

    business_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        primary_key=True,
    )

    type: Mapped[str] = mapped_column(String(20), primary_key=True)

    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<DocumentSequence(business_id={self.business_id}, type={self.type}, last={self.last_value})>"
