# File: src/bizpass/api/business.py
"""Business management API endpoints."""

import json
from uuid import UUID

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile as StarletteUploadFile

from bizpass.api.auth import get_current_user
from bizpass.core.active_business import ActiveBusinessContext
from bizpass.core.db import get_db
from bizpass.core.errors import ValidationError
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_business
from bizpass.core.storage import MAX_LOGO_BYTES, LocalObjectStorage, get_storage, logo_object_path
from bizpass.models import Business, User
from bizpass.models.business_schemas import (
    ActiveBusinessRead,
    ActiveBusinessSwitch,
    BusinessCreate,
    BusinessRead,
    BusinessUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/businesses", tags=["businesses"])


async def list_owned_businesses(db: AsyncSession, user: User) -> list[Business]:
    """Businesses owned by user, oldest first so the fallback selection is stable."""
    stmt = (
        select(Business)
        .where(Business.user_id == user.id)
        .order_by(Business.created_at, Business.name)
    )
    return list((await db.execute(stmt)).scalars().all())


async def get_active_business_context(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> ActiveBusinessContext:
    """Dependency: the session's active-business selection, re-resolved per request."""
    return ActiveBusinessContext(request.session, await list_owned_businesses(db, current_user))


def _active_read(context: ActiveBusinessContext) -> ActiveBusinessRead:
    return ActiveBusinessRead(
        active=BusinessRead.model_validate(context.active) if context.active else None,
        businesses=[BusinessRead.model_validate(b) for b in context.businesses],
    )


async def read_business_create(
    request: Request,
) -> tuple[BusinessCreate, StarletteUploadFile | None]:
    """
    Dependency: parse a create request sent as JSON, or as multipart form
    data carrying an optional ``logo`` file.

    In form data ``social_media_links`` is a JSON object encoded as a string.
    """
    logo = None
    try:
        if request.headers.get("content-type", "").startswith("multipart/form-data"):
            form = await request.form()
            fields = {}
            for key, value in form.multi_items():
                if key == "logo":
                    if isinstance(value, StarletteUploadFile) and value.filename:
                        logo = value
                else:
                    fields[key] = value
            if isinstance(fields.get("social_media_links"), str):
                fields["social_media_links"] = json.loads(fields["social_media_links"] or "null")
        else:
            fields = await request.json()
        return BusinessCreate.model_validate(fields), logo
    except json.JSONDecodeError as exc:
        raise RequestValidationError(
            [
                {
                    "type": "json_invalid",
                    "loc": ("body", exc.pos),
                    "msg": "JSON decode error",
                    "input": {},
                    "ctx": {"error": exc.msg},
                }
            ]
        ) from exc
    except PydanticValidationError as exc:
        raise RequestValidationError(
            [{**error, "loc": ("body", *error["loc"])} for error in exc.errors(include_url=False)]
        ) from exc


async def store_logo(
    storage: LocalObjectStorage, user_id: UUID, file: StarletteUploadFile
) -> str:
    """Validate and upload a logo image. Returns its public URL."""
    path = logo_object_path(user_id, file.filename or "")
    data = await file.read()
    if not data:
        raise ValidationError("Logo file is empty")
    if len(data) > MAX_LOGO_BYTES:
        raise ValidationError(
            "Logo file is too large",
            details={"max_bytes": MAX_LOGO_BYTES, "size": len(data)},
        )

    await storage.upload(path, data)
    return storage.get_public_url(path)


@router.get("", response_model=list[BusinessRead])
async def list_businesses(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_owned_businesses(db, current_user)


@router.post("", response_model=BusinessRead, status_code=status.HTTP_201_CREATED)
async def create_business(
    current_user: User = Depends(get_current_user),
    payload: tuple[BusinessCreate, StarletteUploadFile | None] = Depends(read_business_create),
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """
    Create a business owned by the caller.

    A logo sent with the form is uploaded before the row is inserted; a
    failed upload creates nothing.
    """
    business, logo = payload
    logo_url = await store_logo(storage, current_user.id, logo) if logo is not None else None

    business_obj = Business(user_id=current_user.id, logo_url=logo_url, **business.model_dump())
    db.add(business_obj)
    await db.commit()
    await db.refresh(business_obj)
    logger.info(
        "business.created",
        business_id=str(business_obj.id),
        business_name=business_obj.name,
        user_id=str(current_user.id),
        has_logo=logo_url is not None,
    )
    return business_obj



@router.get("/active", response_model=ActiveBusinessRead)
async def get_active_business(
    context: ActiveBusinessContext = Depends(get_active_business_context),
):
    """Currently selected business, falling back to the first one owned."""
    return _active_read(context)


@router.put("/active", response_model=ActiveBusinessRead)
async def switch_active_business(
    payload: ActiveBusinessSwitch,
    context: ActiveBusinessContext = Depends(get_active_business_context),
):
    """Select a business for this session. Ids the caller does not own are ignored."""
    context.switch(payload.business_id)
    return _active_read(context)


@router.get("/{business_id}", response_model=BusinessRead)
async def get_business(
    business_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_owned_business(db, current_user, business_id)


@router.put("/{business_id}", response_model=BusinessRead)
async def update_business(
    business_id: UUID,
    business: BusinessUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partial update; only fields present in the body change."""
    business_obj = await get_owned_business(db, current_user, business_id)

    update_data = business.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(business_obj, key, value)

    await db.commit()
    await db.refresh(business_obj)
    logger.info(
        "business.updated",
        business_id=str(business_obj.id),
        fields=sorted(update_data),
        user_id=str(current_user.id),
    )
    return business_obj


@router.delete("/{business_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_business(
    business_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Hard delete. Items, documents and events (with their passes) go with it."""
    business_obj = await get_owned_business(db, current_user, business_id)
    await db.delete(business_obj)
    await db.commit()
    logger.info(
        "business.deleted",
        business_id=str(business_id),
        user_id=str(current_user.id),
    )


@router.post("/{business_id}/logo", response_model=BusinessRead)
async def upload_business_logo(
    business_id: UUID,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
):
    """
    Store a logo image and point the business at it.

    The object is uploaded before the row changes; a failed upload leaves
    ``logo_url`` untouched.
    """
    business_obj = await get_owned_business(db, current_user, business_id)

    business_obj.logo_url = await store_logo(storage, current_user.id, file)
    await db.commit()
    await db.refresh(business_obj)
    logger.info(
        "business.logo_uploaded",
        business_id=str(business_obj.id),
        logo_url=business_obj.logo_url,
    )
    return business_obj
