# File: src/bizpass/core/passes.py
"""Entry pass issuance, verification artifacts, status transitions and scanning."""

import base64
import os
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Callable, Optional
from urllib.parse import quote
from uuid import UUID, uuid4

import qrcode
from qrcode.exceptions import DataOverflowError
from sqlalchemy import ColumnElement, and_, not_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.errors import ConflictError, InvalidStateError, ValidationError
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_event, get_owned_pass, owned_passes
from bizpass.models import EntryPass, PassScan, PassStatus, ScanResult, User
from bizpass.models.pass_schemas import (
    PassCreate,
    PassRead,
    PassShareRead,
    PassUpdate,
    ScanCreate,
)
from bizpass.utils.datetime import now_utc

logger = get_logger(__name__)

PASS_CODE_ALPHABET = string.ascii_uppercase + string.digits
PASS_CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 5

SHARE_BASE_URL = "https://wa.me/?text="


class QRCodeError(Exception):
    """The QR encoder could not render the payload."""


@dataclass
class VerificationArtifact:
    verification_url: str
    qr_code_url: str


def generate_pass_code(length: int = PASS_CODE_LENGTH) -> str:
    return "".join(secrets.choice(PASS_CODE_ALPHABET) for _ in range(length))


def resolve_origin(base_url: str) -> str:
    """Public origin for verification links: APP_ORIGIN, else the request's base URL."""
    return (os.getenv("APP_ORIGIN") or base_url).rstrip("/")


def build_verification_url(origin: str, pass_id: UUID) -> str:
    return f"{origin.rstrip('/')}/verify/{pass_id}"


def render_qr_data_url(data: str) -> str:
    """Encode data as a PNG QR code and return it as a data URL."""
    try:
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(data)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buffer = BytesIO()
        img.save(buffer, format="PNG")
    except (DataOverflowError, ValueError, OSError) as exc:
        raise QRCodeError(str(exc)) from exc

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def generate_verification_artifact(
    pass_id: UUID,
    origin: str,
    encoder: Optional[Callable[[str], str]] = None,
) -> VerificationArtifact:
    """
    Build the verification URL and its QR image.

    An encoder failure leaves ``qr_code_url`` empty; the URL alone is still
    enough to verify the pass.
    """
    verification_url = build_verification_url(origin, pass_id)
    encode = encoder or render_qr_data_url
    try:
        qr_code_url = encode(verification_url)
    except QRCodeError as exc:
        logger.warning("pass.qr_generation_failed", pass_id=str(pass_id), error=str(exc))
        qr_code_url = ""
    return VerificationArtifact(verification_url=verification_url, qr_code_url=qr_code_url)


async def allocate_pass_code(db: AsyncSession) -> str:
    """Generate a code not yet stored; gives up after MAX_CODE_ATTEMPTS collisions."""
    for attempt in range(1, MAX_CODE_ATTEMPTS + 1):
        code = generate_pass_code()
        existing = await db.scalar(select(EntryPass.id).where(EntryPass.pass_code == code))
        if existing is None:
            return code
        logger.warning("pass.code_collision", attempt=attempt)
    raise ConflictError(
        "Could not allocate a unique pass code",
        details={"attempts": MAX_CODE_ATTEMPTS},
    )


def _check_window(valid_from: datetime | None, valid_until: datetime | None) -> None:
    if valid_from and valid_until and valid_until < valid_from:
        raise ValidationError(
            "valid_until cannot be before valid_from",
            details={"valid_from": valid_from.isoformat(), "valid_until": valid_until.isoformat()},
        )


async def create_pass(
    db: AsyncSession,
    user: User,
    data: PassCreate,
    origin: str,
    encoder: Optional[Callable[[str], str]] = None,
) -> EntryPass:
    """
    Issue a pass for an owned event.

    The id is generated first so the verification URL can embed it, then the
    code, then the artifact, then the insert. Missing validity bounds fall
    back to the event's schedule.
    Does NOT commit - caller is responsible for commit.
    """
    event = await get_owned_event(db, user, data.event_id)

    valid_from = data.valid_from or event.start_date
    valid_until = data.valid_until or event.end_date
    _check_window(valid_from, valid_until)

    pass_id = uuid4()
    pass_code = await allocate_pass_code(db)
    artifact = generate_verification_artifact(pass_id, origin, encoder)

    entry_pass = EntryPass(
        id=pass_id,
        event=event,
        pass_code=pass_code,
        holder_name=data.holder_name,
        holder_email=data.holder_email,
        holder_phone=data.holder_phone,
        valid_from=valid_from,
        valid_until=valid_until,
        status=PassStatus.ACTIVE.value,
        qr_code_url=artifact.qr_code_url,
        verification_url=artifact.verification_url,
        meta=data.metadata,
    )
    db.add(entry_pass)
    await db.flush()
    return entry_pass


def apply_pass_update(entry_pass: EntryPass, data: PassUpdate) -> list[str]:
    """Patch holder details and validity window. Returns changed fields."""
    updates = data.model_dump(exclude_unset=True)
    _check_window(
        updates.get("valid_from", entry_pass.valid_from),
        updates.get("valid_until", entry_pass.valid_until),
    )
    for key, value in updates.items():
        setattr(entry_pass, key, value)
    return list(updates)


def change_pass_status(entry_pass: EntryPass, target: PassStatus) -> PassStatus:
    """Move the pass to target if the lifecycle allows it. Returns the previous status."""
    current = PassStatus(entry_pass.status)
    if not current.can_transition_to(target):
        raise InvalidStateError(
            f"Cannot change pass status from {current.value} to {target.value}",
            details={"from": current.value, "to": target.value},
        )
    entry_pass.status = target.value
    return current


def evaluate_scan(entry_pass: EntryPass, at: datetime | None = None) -> ScanResult:
    """Result a scan would have at the given moment."""
    at = at or now_utc()
    status = entry_pass.status_at(at)
    if status is PassStatus.USED:
        return ScanResult.ALREADY_USED
    if status is PassStatus.CANCELLED:
        return ScanResult.CANCELLED
    if status is PassStatus.EXPIRED:
        return ScanResult.EXPIRED
    if entry_pass.valid_from is not None and at < entry_pass.valid_from:
        return ScanResult.NOT_YET_VALID
    return ScanResult.ACCEPTED


async def _claim_pass(db: AsyncSession, entry_pass: EntryPass) -> bool:
    """
    Flip the pass from active to used in a single conditional UPDATE.

    Returns False when another transaction changed the status first; the
    in-memory status is reloaded either way.
    """
    result = await db.execute(
        update(EntryPass)
        .where(EntryPass.id == entry_pass.id, EntryPass.status == PassStatus.ACTIVE.value)
        .values(status=PassStatus.USED.value, updated_at=now_utc())
        .execution_options(synchronize_session=False)
    )
    await db.refresh(entry_pass, attribute_names=["status", "updated_at"])
    return result.rowcount == 1


async def verify_pass(
    db: AsyncSession,
    user: User,
    pass_id: UUID,
    data: ScanCreate,
) -> tuple[EntryPass, ScanResult, PassScan]:
    """
    Record a scan and admit the holder if the pass is usable.

    Every attempt is logged as a PassScan with its result; only an accepted
    scan moves the pass to used, so a second scan reports already_used even
    when both scanners read the pass before either committed.
    Does NOT commit - caller is responsible for commit.
    """
    entry_pass = await get_owned_pass(db, user, pass_id, for_update=True)
    at = now_utc()
    result = evaluate_scan(entry_pass, at)

    if result is ScanResult.ACCEPTED and not await _claim_pass(db, entry_pass):
        result = evaluate_scan(entry_pass, at)
        logger.info("pass.scan_lost_race", pass_id=str(entry_pass.id), result=result.value)

    scan = PassScan(
        pass_id=entry_pass.id,
        scanned_at=at,
        scanner_info=data.scanner_info,
        location=data.location,
        meta={**(data.metadata or {}), "result": result.value},
    )
    db.add(scan)
    await db.flush()
    return entry_pass, result, scan


def _effective_status_clause(status: PassStatus, at: datetime) -> ColumnElement[bool]:
    """SQL counterpart of ``EntryPass.status_at``."""
    lapsed = and_(EntryPass.valid_until.is_not(None), EntryPass.valid_until < at)
    if status is PassStatus.EXPIRED:
        return or_(
            EntryPass.status == PassStatus.EXPIRED.value,
            and_(EntryPass.status == PassStatus.ACTIVE.value, lapsed),
        )
    if status is PassStatus.ACTIVE:
        return and_(EntryPass.status == PassStatus.ACTIVE.value, not_(lapsed))
    return EntryPass.status == status.value


async def list_passes(
    db: AsyncSession,
    user: User,
    event_id: UUID | None = None,
    status: PassStatus | None = None,
) -> list[EntryPass]:
    """
    Owner-scoped passes, newest first.

    ``status`` matches the effective status: an active pass past its
    ``valid_until`` is listed as expired, not active.
    """
    stmt = owned_passes(user)
    if event_id is not None:
        stmt = stmt.where(EntryPass.event_id == event_id)
    if status is not None:
        stmt = stmt.where(_effective_status_clause(status, now_utc()))
    stmt = stmt.order_by(EntryPass.created_at.desc())
    return list((await db.execute(stmt)).scalars().all())


async def list_scans(db: AsyncSession, user: User, pass_id: UUID) -> list[PassScan]:
    entry_pass = await get_owned_pass(db, user, pass_id)
    stmt = (
        select(PassScan)
        .where(PassScan.pass_id == entry_pass.id)
        .order_by(PassScan.scanned_at.desc())
    )
    return list((await db.execute(stmt)).scalars().all())


def build_share_text(entry_pass: EntryPass) -> str:
    return (
        f"Entry Pass for {entry_pass.event.name}\n"
        f"Holder: {entry_pass.holder_name}\n"
        f"Code: {entry_pass.pass_code}"
    )


def build_share_payload(entry_pass: EntryPass) -> PassShareRead:
    """Data for the external renderer and messaging link."""
    text = build_share_text(entry_pass)
    message = f"{text} {entry_pass.verification_url}"
    return PassShareRead(
        entry_pass=PassRead.from_model(entry_pass),
        text=text,
        verification_url=entry_pass.verification_url,
        share_url=SHARE_BASE_URL + quote(message, safe=""),
    )
