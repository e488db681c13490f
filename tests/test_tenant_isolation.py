"""Every read and write path is scoped to the caller's ownership chain."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import (
    BusinessFactory,
    DocumentFactory,
    EntryPassFactory,
    EventFactory,
    ItemFactory,
)


@pytest.fixture
async def owned(client: AsyncClient, db_session: AsyncSession) -> dict:
    """One of each entity owned by the primary test user."""
    business = await BusinessFactory.create(db_session, user_id=client.test_user.id)
    item = await ItemFactory.create(db_session, business_id=business.id)
    document = await DocumentFactory.create(db_session, business_id=business.id)
    event = await EventFactory.create(db_session, business_id=business.id)
    entry_pass = await EntryPassFactory.create(db_session, event=event)
    return {
        "business": business,
        "item": item,
        "document": document,
        "event": event,
        "pass": entry_pass,
    }


class TestForeignAccess:
    """A second user sees none of the first user's rows."""

    @pytest.mark.asyncio
    async def test_lists_are_empty(self, other_client: AsyncClient, owned):
        for url in ["/businesses", "/events", "/passes"]:
            response = await other_client.get(url)
            assert response.status_code == 200, url
            assert response.json() == [], url

        stats = (await other_client.get("/dashboard/stats")).json()
        assert stats["total_events"] == 0
        assert stats["recent_activity"] == []

    @pytest.mark.asyncio
    async def test_reads_are_not_found(self, other_client: AsyncClient, owned):
        business_id = owned["business"].id
        urls = [
            f"/businesses/{business_id}",
            f"/businesses/{business_id}/items",
            f"/businesses/{business_id}/documents?type=invoice",
            f"/businesses/{business_id}/events",
            f"/items/{owned['item'].id}",
            f"/documents/{owned['document'].id}",
            f"/events/{owned['event'].id}",
            f"/passes/{owned['pass'].id}",
            f"/passes/{owned['pass'].id}/scans",
            f"/passes/{owned['pass'].id}/share",
            f"/verify/{owned['pass'].id}",
        ]
        for url in urls:
            response = await other_client.get(url)
            assert response.status_code == 404, url

    @pytest.mark.asyncio
    async def test_writes_are_not_found(
        self, client: AsyncClient, other_client: AsyncClient, owned
    ):
        writes = [
            ("put", f"/businesses/{owned['business'].id}", {"name": "Taken"}),
            ("put", f"/items/{owned['item'].id}", {"name": "Taken"}),
            ("put", f"/documents/{owned['document'].id}", {"title": "Taken"}),
            ("put", f"/events/{owned['event'].id}", {"name": "Taken"}),
            ("put", f"/passes/{owned['pass'].id}", {"holder_name": "Taken"}),
            ("put", f"/passes/{owned['pass'].id}/status", {"status": "cancelled"}),
            ("post", f"/verify/{owned['pass'].id}", None),
            ("post", f"/businesses/{owned['business'].id}/documents", {"type": "invoice"}),
            ("post", f"/businesses/{owned['business'].id}/events", {"name": "Taken"}),
            ("post", "/passes", {"event_id": str(owned["event"].id), "holder_name": "Taken"}),
        ]
        for method, url, body in writes:
            response = await other_client.request(method, url, json=body)
            assert response.status_code == 404, url

        for url in [
            f"/items/{owned['item'].id}",
            f"/documents/{owned['document'].id}",
            f"/events/{owned['event'].id}",
            f"/businesses/{owned['business'].id}",
        ]:
            response = await other_client.delete(url)
            assert response.status_code == 404, url

        # The owner still sees everything unchanged
        entry_pass = (await client.get(f"/passes/{owned['pass'].id}")).json()
        assert entry_pass["status"] == "active"
        assert entry_pass["holder_name"] == owned["pass"].holder_name
        business = (await client.get(f"/businesses/{owned['business'].id}")).json()
        assert business["name"] == owned["business"].name
