# File: src/bizpass/core/documents.py
"""Document engine: line-item cleanup, totals, numbering and list caching."""

from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.cache import clear_cache, get_cache, make_cache_key, set_cache
from bizpass.core.errors import ValidationError
from bizpass.core.logging import get_logger
from bizpass.core.validators import MAX_CURRENCY
from bizpass.models import (
    Business,
    Document,
    DocumentContent,
    DocumentCreate,
    DocumentRead,
    DocumentSequence,
    DocumentType,
    DocumentUpdate,
    LineItem,
)

logger = get_logger(__name__)

CENTS = Decimal("0.01")


def clean_line_items(items: list[LineItem]) -> list[LineItem]:
    """Drop lines without a description; they never reach the database."""
    return [item for item in items if item.description and item.description.strip()]


def compute_total(items: list[LineItem]) -> Decimal:
    """Sum of quantity x price, rounded to cents."""
    total = sum((item.amount for item in items), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def prepare_content(content: DocumentContent) -> tuple[dict, Decimal]:
    """
    Return the JSON payload to store and the total computed from it.

    Raises ValidationError when the total does not fit the amount column.
    """
    items = clean_line_items(content.items)
    total = compute_total(items)
    if total > MAX_CURRENCY:
        raise ValidationError(
            "Document total exceeds maximum allowed",
            details={"total": str(total), "max_total": str(MAX_CURRENCY)},
        )
    cleaned = content.model_copy(update={"items": items})
    return cleaned.model_dump(mode="json"), total


def format_document_number(doc_type: DocumentType, value: int) -> str:
    return f"{doc_type.number_prefix}-{value:06d}"


async def _ensure_sequence(db: AsyncSession, business_id: UUID, doc_type: DocumentType) -> None:
    """Create the counter row at zero unless it exists; a concurrent creator wins silently."""
    insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
    await db.execute(
        insert(DocumentSequence)
        .values(business_id=business_id, type=doc_type.value, last_value=0)
        .on_conflict_do_nothing(index_elements=["business_id", "type"])
    )


async def next_document_number(
    db: AsyncSession, business_id: UUID, doc_type: DocumentType
) -> str:
    """
    Allocate the next number for (business, type).

    The sequence row is locked for the rest of the transaction, and the
    (business_id, number) unique constraint rejects anything that slips by.
    The first document of a type creates the row with ON CONFLICT DO NOTHING,
    so two first documents created together both get a number.
    Does NOT commit - caller is responsible for commit.
    """
    stmt = (
        select(DocumentSequence)
        .where(
            DocumentSequence.business_id == business_id,
            DocumentSequence.type == doc_type.value,
        )
        .with_for_update()
    )
    sequence = (await db.execute(stmt)).scalar_one_or_none()
    if sequence is None:
        await _ensure_sequence(db, business_id, doc_type)
        sequence = (await db.execute(stmt)).scalar_one()

    sequence.last_value += 1
    await db.flush()
    number = format_document_number(doc_type, sequence.last_value)
    logger.debug("document.number_allocated", business_id=str(business_id), number=number)
    return number


def _list_cache_key(business_id: UUID, doc_type: DocumentType) -> str:
    return make_cache_key("documents", business_id=business_id, type=doc_type.value)


def invalidate_document_list(business_id: UUID, doc_type: DocumentType | str) -> None:
    """Drop the cached list for (business, type) after any write to it."""
    clear_cache(_list_cache_key(business_id, DocumentType(doc_type)))


async def list_documents(
    db: AsyncSession, business_id: UUID, doc_type: DocumentType
) -> list[DocumentRead]:
    """Documents of one type for one business, newest first."""
    key = _list_cache_key(business_id, doc_type)
    cached = get_cache(key)
    if cached is not None:
        return cached

    stmt = (
        select(Document)
        .where(Document.business_id == business_id, Document.type == doc_type.value)
        .order_by(Document.created_at.desc())
    )
    documents = [DocumentRead.model_validate(doc) for doc in (await db.execute(stmt)).scalars()]
    set_cache(key, documents)
    return documents


async def create_document(db: AsyncSession, business: Business, data: DocumentCreate) -> Document:
    """
    Build and insert a document.

    Invoices start as draft and receipts as published unless a status is
    given. Does NOT commit - caller is responsible for commit.
    """
    content, total = prepare_content(data.content)
    document = Document(
        business_id=business.id,
        type=data.type.value,
        number=await next_document_number(db, business.id, data.type),
        title=data.title,
        status=(data.status or data.type.default_status).value,
        total_amount=total,
        content=content,
        template_id=data.template_id,
    )
    db.add(document)
    await db.flush()
    return document


def apply_document_update(document: Document, data: DocumentUpdate) -> list[str]:
    """Apply a patch in place; replacing content recomputes the total. Returns changed fields."""
    updates = data.model_dump(exclude_unset=True)
    changed = []

    if "content" in updates:
        if data.content is None:
            updates.pop("content")
        else:
            document.content, document.total_amount = prepare_content(data.content)
            changed.extend(["content", "total_amount"])
            updates.pop("content")

    if "status" in updates:
        if data.status is None:
            updates.pop("status")
        else:
            # Any status may follow any other
            document.status = data.status.value
            changed.append("status")
            updates.pop("status")

    for key, value in updates.items():
        setattr(document, key, value)
        changed.append(key)

    return changed
