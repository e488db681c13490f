"""
Enums for domain models.
Enums provide type safety and clarity. Validation for categorical fields.
"""

import enum


class DocumentType(str, enum.Enum):
    """Document variants sharing one table."""

    INVOICE = "invoice"
    RECEIPT = "receipt"

    @property
    def number_prefix(self) -> str:
        return "INV" if self is DocumentType.INVOICE else "RCPT"

    @property
    def default_status(self) -> "DocumentStatus":
        # A receipt records a completed transaction
        if self is DocumentType.RECEIPT:
            return DocumentStatus.PUBLISHED
        return DocumentStatus.DRAFT


class DocumentStatus(str, enum.Enum):
    """Document status. Freely settable: draft -> published -> archived is convention only."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class PassStatus(str, enum.Enum):
    """Entry pass lifecycle states."""

    ACTIVE = "active"
    USED = "used"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not PassStatus.ACTIVE

    def can_transition_to(self, target: "PassStatus") -> bool:
        """Only an active pass moves, and only forward."""
        return target in PASS_TRANSITIONS[self]


PASS_TRANSITIONS: dict[PassStatus, frozenset[PassStatus]] = {
    PassStatus.ACTIVE: frozenset({PassStatus.USED, PassStatus.EXPIRED, PassStatus.CANCELLED}),
    PassStatus.USED: frozenset(),
    PassStatus.EXPIRED: frozenset(),
    PassStatus.CANCELLED: frozenset(),
}


class ScanResult(str, enum.Enum):
    """Outcome of a verification attempt, stored on the scan record."""

    ACCEPTED = "accepted"
    ALREADY_USED = "already_used"
    EXPIRED = "expired"
    CANCELLED = "cancelled"
    NOT_YET_VALID = "not_yet_valid"
