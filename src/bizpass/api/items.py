# File: src/bizpass/api/items.py
"""Item catalog API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.db import get_db
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_business, get_owned_item
from bizpass.models import BusinessItem, User
from bizpass.models.item_schemas import ItemCreate, ItemRead, ItemUpdate

logger = get_logger(__name__)

router = APIRouter(tags=["items"])


@router.get("/businesses/{business_id}/items", response_model=list[ItemRead])
async def list_items(
    business_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Items of one business, by name."""
    business = await get_owned_business(db, current_user, business_id)
    stmt = (
        select(BusinessItem)
        .where(BusinessItem.business_id == business.id)
        .order_by(BusinessItem.name)
    )
    return (await db.execute(stmt)).scalars().all()


@router.post(
    "/businesses/{business_id}/items",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_item(
    business_id: UUID,
    item: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    business = await get_owned_business(db, current_user, business_id)
    item_obj = BusinessItem(business_id=business.id, **item.model_dump())
    db.add(item_obj)
    await db.commit()
    await db.refresh(item_obj)
    logger.info(
        "item.created",
        item_id=str(item_obj.id),
        business_id=str(business.id),
        price=str(item_obj.price) if item_obj.price is not None else None,
    )
    return item_obj


@router.get("/items/{item_id}", response_model=ItemRead)
async def get_item(
    item_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_owned_item(db, current_user, item_id)


@router.put("/items/{item_id}", response_model=ItemRead)
async def update_item(
    item_id: UUID,
    item: ItemUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item_obj = await get_owned_item(db, current_user, item_id)

    update_data = item.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(item_obj, key, value)

    await db.commit()
    await db.refresh(item_obj)
    logger.info("item.updated", item_id=str(item_obj.id), fields=sorted(update_data))
    return item_obj


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_item(
    item_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    item_obj = await get_owned_item(db, current_user, item_id)
    await db.delete(item_obj)
    await db.commit()
    logger.info("item.deleted", item_id=str(item_id), business_id=str(item_obj.business_id))
