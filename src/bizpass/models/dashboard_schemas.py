# File: src/bizpass/models/dashboard_schemas.py
"""Response schemas for the dashboard aggregate."""

from datetime import datetime
from decimal import Decimal
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class ActivityItem(BaseModel):
    """A document or event normalized for the recent-activity feed."""

    id: UUID
    kind: Literal["document", "event"]
    type: str = Field(..., description="invoice, receipt or event")
    title: str
    created_at: datetime
    total_amount: Decimal | None = None


class DashboardStats(BaseModel):
    total_revenue: Decimal = Decimal("0.00")
    total_invoices: int = 0
    total_receipts: int = 0
    total_events: int = 0
    recent_activity: list[ActivityItem] = Field(default_factory=list)
