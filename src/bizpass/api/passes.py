# File: src/bizpass/api/passes.py
"""Entry pass API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.db import get_db
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_pass
from bizpass.core.passes import (
    apply_pass_update,
    build_share_payload,
    change_pass_status,
    create_pass,
    list_passes,
    list_scans,
    resolve_origin,
)
from bizpass.models import PassStatus, User
from bizpass.models.pass_schemas import (
    PassCreate,
    PassRead,
    PassShareRead,
    PassStatusUpdate,
    PassUpdate,
    ScanRead,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/passes", tags=["passes"])


@router.get("", response_model=list[PassRead])
async def list_entry_passes(
    event_id: Optional[UUID] = Query(None),
    pass_status: Optional[PassStatus] = Query(None, alias="status"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Passes for every event the caller owns, newest first."""
    passes = await list_passes(db, current_user, event_id=event_id, status=pass_status)
    return [PassRead.from_model(entry_pass) for entry_pass in passes]


@router.post("", response_model=PassRead, status_code=status.HTTP_201_CREATED)
async def create_entry_pass(
    request: Request,
    entry_pass: PassCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Issue a pass with a fresh code, verification URL and QR image."""
    pass_obj = await create_pass(
        db, current_user, entry_pass, origin=resolve_origin(str(request.base_url))
    )
    await db.commit()
    logger.info(
        "pass.created",
        pass_id=str(pass_obj.id),
        event_id=str(pass_obj.event_id),
        pass_code=pass_obj.pass_code,
        has_qr=bool(pass_obj.qr_code_url),
    )
    return PassRead.from_model(pass_obj)


@router.get("/{pass_id}", response_model=PassRead)
async def get_entry_pass(
    pass_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return PassRead.from_model(await get_owned_pass(db, current_user, pass_id))


@router.put("/{pass_id}", response_model=PassRead)
async def update_entry_pass(
    pass_id: UUID,
    entry_pass: PassUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Edit holder details or the validity window. The event binding never changes."""
    pass_obj = await get_owned_pass(db, current_user, pass_id)
    changed = apply_pass_update(pass_obj, entry_pass)
    await db.commit()
    logger.info("pass.updated", pass_id=str(pass_obj.id), fields=sorted(changed))
    return PassRead.from_model(pass_obj)


@router.put("/{pass_id}/status", response_model=PassRead)
async def update_entry_pass_status(
    pass_id: UUID,
    payload: PassStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Move an active pass to used, expired or cancelled."""
    pass_obj = await get_owned_pass(db, current_user, pass_id, for_update=True)
    previous = change_pass_status(pass_obj, payload.status)
    await db.commit()
    logger.info(
        "pass.status_changed",
        pass_id=str(pass_obj.id),
        from_status=previous.value,
        to_status=pass_obj.status,
    )
    return PassRead.from_model(pass_obj)


@router.get("/{pass_id}/scans", response_model=list[ScanRead])
async def list_entry_pass_scans(
    pass_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await list_scans(db, current_user, pass_id)


@router.get("/{pass_id}/share", response_model=PassShareRead)
async def share_entry_pass(
    pass_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Share text and messaging link for a pass."""
    return build_share_payload(await get_owned_pass(db, current_user, pass_id))
