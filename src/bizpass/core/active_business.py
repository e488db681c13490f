# File: src/bizpass/core/active_business.py
"""Per-session "active business" selection."""

from collections.abc import MutableMapping, Sequence
from typing import Any
from uuid import UUID

from bizpass.core.logging import get_logger
from bizpass.models import Business

logger = get_logger(__name__)

ACTIVE_BUSINESS_KEY = "active_business_id"


class ActiveBusinessContext:
    """
    Resolves and switches the active business for one session.

    ``store`` is any string-keyed mapping that survives reloads (the signed
    session cookie in the API). The stored id is re-resolved against the
    caller's current business list on every construction: a stale id falls
    back to the first business, and an empty list clears the selection.
    """

    def __init__(self, store: MutableMapping[str, Any], businesses: Sequence[Business]):
        self._store = store
        self.businesses = list(businesses)
        self.active = self._resolve()
        self._persist()

    def _find(self, business_id: str | UUID | None) -> Business | None:
        if business_id is None:
            return None
        wanted = str(business_id)
        for business in self.businesses:
            if str(business.id) == wanted:
                return business
        return None

    def _resolve(self) -> Business | None:
        stored = self._find(self._store.get(ACTIVE_BUSINESS_KEY))
        if stored is not None:
            return stored
        return self.businesses[0] if self.businesses else None

    def _persist(self) -> None:
        if self.active is None:
            self._store.pop(ACTIVE_BUSINESS_KEY, None)
        else:
            self._store[ACTIVE_BUSINESS_KEY] = str(self.active.id)

    def switch(self, business_id: str | UUID) -> Business | None:
        """Select business_id if the caller owns it; unknown ids leave the selection unchanged."""
        business = self._find(business_id)
        if business is None:
            logger.info("business.switch_ignored", business_id=str(business_id))
            return self.active
        self.active = business
        self._persist()
        logger.info("business.switched", business_id=str(business.id))
        return self.active
