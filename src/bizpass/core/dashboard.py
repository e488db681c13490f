# File: src/bizpass/core/dashboard.py
"""Cross-business summary statistics for the dashboard."""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.ownership import owned_business_ids
from bizpass.models import Document, DocumentStatus, DocumentType, Event, User
from bizpass.models.dashboard_schemas import ActivityItem, DashboardStats

RECENT_DOCUMENTS = 3
RECENT_EVENTS = 2
RECENT_ACTIVITY = 5


def _document_activity(document: Document) -> ActivityItem:
    return ActivityItem(
        id=document.id,
        kind="document",
        type=document.type,
        title=document.title or f"{document.type.capitalize()} {document.number}",
        created_at=document.created_at,
        total_amount=document.total_amount,
    )


def _event_activity(event: Event) -> ActivityItem:
    return ActivityItem(
        id=event.id,
        kind="event",
        type="event",
        title=event.name,
        created_at=event.created_at,
    )


async def compute_dashboard_stats(db: AsyncSession, user: User) -> DashboardStats:
    """
    Revenue, counts and recent activity across every business the user owns.

    Recent activity merges the newest 3 documents with the newest 2 events
    and keeps 5. With many recent documents and one older event, the result
    is not the true top 5 across both kinds.
    """
    business_ids = (await db.execute(owned_business_ids(user))).scalars().all()
    if not business_ids:
        return DashboardStats()

    published_docs = (
        select(Document.type, func.count(Document.id), func.sum(Document.total_amount))
        .where(
            Document.business_id.in_(business_ids),
            Document.status == DocumentStatus.PUBLISHED.value,
        )
        .group_by(Document.type)
    )
    totals = {doc_type: (count, amount) for doc_type, count, amount in await db.execute(published_docs)}
    invoice_count, revenue = totals.get(DocumentType.INVOICE.value, (0, None))
    receipt_count, _ = totals.get(DocumentType.RECEIPT.value, (0, None))

    total_events = await db.scalar(
        select(func.count(Event.id)).where(Event.business_id.in_(business_ids))
    )

    recent_docs = await db.execute(
        select(Document)
        .where(Document.business_id.in_(business_ids))
        .order_by(Document.created_at.desc())
        .limit(RECENT_DOCUMENTS)
    )
    recent_events = await db.execute(
        select(Event)
        .where(Event.business_id.in_(business_ids))
        .order_by(Event.created_at.desc())
        .limit(RECENT_EVENTS)
    )
    activity = [_document_activity(doc) for doc in recent_docs.scalars()]
    activity += [_event_activity(event) for event in recent_events.scalars()]
    activity.sort(key=lambda item: item.created_at, reverse=True)

    return DashboardStats(
        total_revenue=Decimal(revenue or 0).quantize(Decimal("0.01")),
        total_invoices=invoice_count,
        total_receipts=receipt_count,
        total_events=total_events or 0,
        recent_activity=activity[:RECENT_ACTIVITY],
    )
