# File: src/bizpass/models/business_item.py
"""Catalog item (product or service) sold by a business."""

import uuid
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from bizpass.core.db import Base
from bizpass.utils.datetime import now_utc

if TYPE_CHECKING:
    from bizpass.models.business import Business


class BusinessItem(Base):
    """Sellable item referenced by document line items."""

    __tablename__ = "business_items"
    __table_args__ = (
        CheckConstraint("price IS NULL OR price >= 0", name="business_item_price_non_negative"),
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

    # NULL means "no price set" (shown as N/A)
    price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)

    unit: Mapped[str | None] = mapped_column(String(50), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    sku: Mapped[str | None] = mapped_column(String(100), nullable=True)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=now_utc)
    updated_at: Mapped[datetime] = mapped_column(
        nullable=False,
        default=now_utc,
        onupdate=now_utc,
    )

    business: Mapped["Business"] = relationship(
        "Business",
        back_populates="items",
    )

    @validates("price")
    def validate_price(self, key: str, value: Decimal | None) -> Decimal | None:
        """Validate that price is non-negative when set."""
        if value is not None and value < 0:
            raise ValueError("Item price cannot be negative")
        return value

    @property
    def display_price(self) -> str:
        return "N/A" if self.price is None else f"{self.price:,.2f}"

    def __repr__(self) -> str:
        return f"<BusinessItem(id={self.id}, name={self.name})>"
