"""Domain models package."""

from bizpass.models.business import Business
from bizpass.models.business_item import BusinessItem
from bizpass.models.business_schemas import BusinessCreate, BusinessRead, BusinessUpdate
from bizpass.models.document import Document, DocumentSequence
from bizpass.models.document_schemas import (
    DocumentContent,
    DocumentCreate,
    DocumentRead,
    DocumentUpdate,
    LineItem,
)
from bizpass.models.entry_pass import EntryPass
from bizpass.models.enums import DocumentStatus, DocumentType, PassStatus, ScanResult
from bizpass.models.event import Event
from bizpass.models.pass_scan import PassScan
from bizpass.models.user import User

__all__ = [
    "Business",
    "BusinessCreate",
    "BusinessItem",
    "BusinessRead",
    "BusinessUpdate",
    "Document",
    "DocumentContent",
    "DocumentCreate",
    "DocumentRead",
    "DocumentSequence",
    "DocumentStatus",
    "DocumentType",
    "DocumentUpdate",
    "EntryPass",
    "Event",
    "LineItem",
    "PassScan",
    "PassStatus",
    "ScanResult",
    "User",
]
