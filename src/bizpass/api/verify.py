# File: src/bizpass/api/verify.py
"""
Verification endpoints behind ``{origin}/verify/{pass_id}``.

GET reports what a scan would do without touching the pass. POST records
the scan and admits the holder when the pass is usable.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.db import get_db
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_pass
from bizpass.core.passes import evaluate_scan, verify_pass
from bizpass.models import ScanResult, User
from bizpass.models.pass_schemas import PassRead, ScanCreate, ScanRead, VerificationRead

logger = get_logger(__name__)

router = APIRouter(prefix="/verify", tags=["verification"])


@router.get("/{pass_id}", response_model=VerificationRead)
async def inspect_entry_pass(
    pass_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    entry_pass = await get_owned_pass(db, current_user, pass_id)
    result = evaluate_scan(entry_pass)
    return VerificationRead(
        entry_pass=PassRead.from_model(entry_pass),
        result=result,
        accepted=result is ScanResult.ACCEPTED,
    )


@router.post("/{pass_id}", response_model=VerificationRead)
async def scan_entry_pass(
    pass_id: UUID,
    scan: Optional[ScanCreate] = Body(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    entry_pass, result, scan_obj = await verify_pass(
        db, current_user, pass_id, scan or ScanCreate()
    )
    await db.commit()
    logger.info(
        "pass.verified",
        pass_id=str(entry_pass.id),
        result=result.value,
        scan_id=str(scan_obj.id),
    )
    return VerificationRead(
        entry_pass=PassRead.from_model(entry_pass),
        result=result,
        accepted=result is ScanResult.ACCEPTED,
        scan=ScanRead.model_validate(scan_obj),
    )
