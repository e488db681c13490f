# File: src/bizpass/api/events.py
"""Event registry API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.db import get_db
from bizpass.core.errors import ValidationError
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_business, get_owned_event, owned_business_ids
from bizpass.models import Event, User
from bizpass.models.event_schemas import EventCreate, EventRead, EventUpdate

logger = get_logger(__name__)

router = APIRouter(tags=["events"])


@router.get("/businesses/{business_id}/events", response_model=list[EventRead])
async def list_business_events(
    business_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    business = await get_owned_business(db, current_user, business_id)
    stmt = (
        select(Event)
        .where(Event.business_id == business.id)
        .order_by(Event.created_at.desc())
    )
    return (await db.execute(stmt)).scalars().all()


@router.post(
    "/businesses/{business_id}/events",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    business_id: UUID,
    event: EventCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    business = await get_owned_business(db, current_user, business_id)
    event_obj = Event(business_id=business.id, **event.model_dump())
    db.add(event_obj)
    await db.commit()
    await db.refresh(event_obj)
    logger.info(
        "event.created",
        event_id=str(event_obj.id),
        business_id=str(business.id),
        event_name=event_obj.name,
    )
    return event_obj


@router.get("/events", response_model=list[EventRead])
async def list_owned_events(
    active_only: bool = Query(False),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Events across every business the caller owns, newest first."""
    stmt = select(Event).where(Event.business_id.in_(owned_business_ids(current_user)))
    if active_only:
        stmt = stmt.where(Event.is_active.is_(True))
    stmt = stmt.order_by(Event.created_at.desc())
    return (await db.execute(stmt)).scalars().all()


@router.get("/events/{event_id}", response_model=EventRead)
async def get_event(
    event_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_owned_event(db, current_user, event_id)


@router.put("/events/{event_id}", response_model=EventRead)
async def update_event(
    event_id: UUID,
    event: EventUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event_obj = await get_owned_event(db, current_user, event_id)

    update_data = event.model_dump(exclude_unset=True)
    if update_data.get("is_active", False) is None:
        del update_data["is_active"]

    start_date = update_data.get("start_date", event_obj.start_date)
    end_date = update_data.get("end_date", event_obj.end_date)
    if start_date and end_date and end_date < start_date:
        raise ValidationError(
            "End date cannot be before start date",
            details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
        )

    for key, value in update_data.items():
        setattr(event_obj, key, value)

    await db.commit()
    await db.refresh(event_obj)
    logger.info("event.updated", event_id=str(event_obj.id), fields=sorted(update_data))
    return event_obj


@router.delete("/events/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Hard delete; the event's passes and their scans go with it."""
    event_obj = await get_owned_event(db, current_user, event_id)
    await db.delete(event_obj)
    await db.commit()
    logger.info("event.deleted", event_id=str(event_id), business_id=str(event_obj.business_id))
