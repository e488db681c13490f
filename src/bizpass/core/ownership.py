# File: src/bizpass/core/ownership.py
"""
Owner-scoped lookups.

Every read and write resolves its target through the ownership chain
PassScan -> EntryPass -> Event -> Business -> User. Rows outside the
caller's chain are reported as not found so their existence never leaks.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.errors import NotFoundError
from bizpass.models import Business, BusinessItem, Document, EntryPass, Event, User


def owned_business_ids(user: User) -> Select:
    """Subquery of the business ids owned by user."""
    return select(Business.id).where(Business.user_id == user.id)


def owned_passes(user: User) -> Select:
    """Base select for passes, joined through event and business to the owner."""
    return (
        select(EntryPass)
        .join(Event, EntryPass.event_id == Event.id)
        .join(Business, Event.business_id == Business.id)
        .where(Business.user_id == user.id)
    )


async def get_owned_business(db: AsyncSession, user: User, business_id: UUID) -> Business:
    stmt = select(Business).where(Business.id == business_id, Business.user_id == user.id)
    business = (await db.execute(stmt)).scalar_one_or_none()
    if business is None:
        raise NotFoundError("Business", str(business_id))
    return business


async def get_owned_item(db: AsyncSession, user: User, item_id: UUID) -> BusinessItem:
    stmt = (
        select(BusinessItem)
        .join(Business, BusinessItem.business_id == Business.id)
        .where(BusinessItem.id == item_id, Business.user_id == user.id)
    )
    item = (await db.execute(stmt)).scalar_one_or_none()
    if item is None:
        raise NotFoundError("Item", str(item_id))
    return item


async def get_owned_document(db: AsyncSession, user: User, document_id: UUID) -> Document:
    stmt = (
        select(Document)
        .join(Business, Document.business_id == Business.id)
        .where(Document.id == document_id, Business.user_id == user.id)
    )
    document = (await db.execute(stmt)).scalar_one_or_none()
    if document is None:
        raise NotFoundError("Document", str(document_id))
    return document


async def get_owned_event(db: AsyncSession, user: User, event_id: UUID) -> Event:
    stmt = (
        select(Event)
        .join(Business, Event.business_id == Business.id)
        .where(Event.id == event_id, Business.user_id == user.id)
    )
    event = (await db.execute(stmt)).scalar_one_or_none()
    if event is None:
        raise NotFoundError("Event", str(event_id))
    return event


async def get_owned_pass(
    db: AsyncSession, user: User, pass_id: UUID, for_update: bool = False
) -> EntryPass:
    """
    Owned pass by id.

    With ``for_update`` the row is locked for the rest of the transaction
    and re-read from the database even if the session already holds it.
    """
    stmt = owned_passes(user).where(EntryPass.id == pass_id)
    if for_update:
        stmt = stmt.with_for_update(of=EntryPass).execution_options(populate_existing=True)
    entry_pass = (await db.execute(stmt)).scalar_one_or_none()
    if entry_pass is None:
        raise NotFoundError("EntryPass", str(pass_id))
    return entry_pass
