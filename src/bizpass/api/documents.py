# File: src/bizpass/api/documents.py
"""Invoice and receipt API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.api.auth import get_current_user
from bizpass.core.db import get_db
from bizpass.core.documents import (
    apply_document_update,
    create_document,
    invalidate_document_list,
    list_documents,
)
from bizpass.core.logging import get_logger
from bizpass.core.ownership import get_owned_business, get_owned_document
from bizpass.models import DocumentCreate, DocumentRead, DocumentType, DocumentUpdate, User

logger = get_logger(__name__)

router = APIRouter(tags=["documents"])


@router.get("/businesses/{business_id}/documents", response_model=list[DocumentRead])
async def list_business_documents(
    business_id: UUID,
    doc_type: DocumentType = Query(..., alias="type"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Documents of one type, newest first."""
    business = await get_owned_business(db, current_user, business_id)
    return await list_documents(db, business.id, doc_type)


@router.post(
    "/businesses/{business_id}/documents",
    response_model=DocumentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_business_document(
    business_id: UUID,
    document: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Create an invoice or receipt.

    Blank line items are dropped, the total is computed server-side and the
    next number in the business's sequence for that type is assigned.
    """
    business = await get_owned_business(db, current_user, business_id)
    document_obj = await create_document(db, business, document)
    await db.commit()
    await db.refresh(document_obj)
    invalidate_document_list(business.id, document_obj.type)
    logger.info(
        "document.created",
        document_id=str(document_obj.id),
        business_id=str(business.id),
        type=document_obj.type,
        number=document_obj.number,
        total_amount=str(document_obj.total_amount),
    )
    return document_obj


@router.get("/documents/{document_id}", response_model=DocumentRead)
async def get_document(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await get_owned_document(db, current_user, document_id)


@router.put("/documents/{document_id}", response_model=DocumentRead)
async def update_document(
    document_id: UUID,
    document: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    document_obj = await get_owned_document(db, current_user, document_id)
    changed = apply_document_update(document_obj, document)
    await db.commit()
    await db.refresh(document_obj)
    invalidate_document_list(document_obj.business_id, document_obj.type)
    logger.info(
        "document.updated",
        document_id=str(document_obj.id),
        fields=sorted(changed),
        status=document_obj.status,
    )
    return document_obj


@router.delete("/documents/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    document_obj = await get_owned_document(db, current_user, document_id)
    business_id, doc_type = document_obj.business_id, document_obj.type
    await db.delete(document_obj)
    await db.commit()
    invalidate_document_list(business_id, doc_type)
    logger.info("document.deleted", document_id=str(document_id), business_id=str(business_id))
