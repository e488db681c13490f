"""Tests for scanning and verifying entry passes."""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.ownership import get_owned_pass
from bizpass.core.passes import _claim_pass, evaluate_scan, verify_pass
from bizpass.models import EntryPass, PassScan, ScanResult
from bizpass.models.pass_schemas import ScanCreate
from bizpass.utils.datetime import now_utc
from tests.factories import BusinessFactory, EntryPassFactory, EventFactory, hours_from_now


@pytest.fixture
async def event(client: AsyncClient, db_session: AsyncSession):
    business = await BusinessFactory.create(db_session, user_id=client.test_user.id)
    return await EventFactory.create(db_session, business_id=business.id, name="Expo")


class TestEvaluateScan:
    """Scan outcome rules."""

    @pytest.mark.parametrize(
        "status, offset_from, offset_until, expected",
        [
            ("active", None, None, ScanResult.ACCEPTED),
            ("active", -1, 1, ScanResult.ACCEPTED),
            ("active", 1, 2, ScanResult.NOT_YET_VALID),
            ("active", -2, -1, ScanResult.EXPIRED),
            ("expired", None, None, ScanResult.EXPIRED),
            ("used", None, None, ScanResult.ALREADY_USED),
            ("cancelled", None, None, ScanResult.CANCELLED),
        ],
    )
    def test_outcomes(self, status, offset_from, offset_until, expected):
        now = now_utc()
        entry_pass = EntryPass(
            status=status,
            valid_from=now + timedelta(hours=offset_from) if offset_from is not None else None,
            valid_until=now + timedelta(hours=offset_until) if offset_until is not None else None,
        )

        assert evaluate_scan(entry_pass, now) is expected


class TestInspectPass:
    """GET /verify/{id} has no side effects."""

    @pytest.mark.asyncio
    async def test_inspect_reports_without_scanning(
        self, client: AsyncClient, db_session: AsyncSession, event
    ):
        entry_pass = await EntryPassFactory.create(db_session, event=event)

        response = await client.get(f"/verify/{entry_pass.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["result"] == "accepted"
        assert data["accepted"] is True
        assert data["scan"] is None
        assert data["entry_pass"]["status"] == "active"
        scans = (await db_session.execute(select(PassScan))).scalars().all()
        assert scans == []


class TestScanPass:
    """POST /verify/{id} records a scan and admits once."""

    @pytest.mark.asyncio
    async def test_first_scan_admits_second_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, event
    ):
        entry_pass = await EntryPassFactory.create(db_session, event=event)

        first = await client.post(
            f"/verify/{entry_pass.id}",
            json={"scanner_info": "Gate A phone", "location": "North gate"},
        )
        second = await client.post(f"/verify/{entry_pass.id}")

        assert first.status_code == 200
        assert first.json()["result"] == "accepted"
        assert first.json()["accepted"] is True
        assert first.json()["entry_pass"]["status"] == "used"
        assert first.json()["scan"]["location"] == "North gate"

        assert second.status_code == 200
        assert second.json()["result"] == "already_used"
        assert second.json()["accepted"] is False

        history = await client.get(f"/passes/{entry_pass.id}/scans")
        results = [scan["metadata"]["result"] for scan in history.json()]
        assert results == ["already_used", "accepted"]

    @pytest.mark.asyncio
    async def test_expired_pass_is_logged_not_admitted(
        self, client: AsyncClient, db_session: AsyncSession, event
    ):
        entry_pass = await EntryPassFactory.create(
            db_session, event=event, valid_until=hours_from_now(-1)
        )

        response = await client.post(f"/verify/{entry_pass.id}", json={"metadata": {"gate": 2}})

        data = response.json()
        assert data["result"] == "expired"
        assert data["entry_pass"]["status"] == "active"
        assert data["entry_pass"]["effective_status"] == "expired"
        assert data["scan"]["metadata"] == {"gate": 2, "result": "expired"}

    @pytest.mark.asyncio
    async def test_cancelled_pass_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, event
    ):
        entry_pass = await EntryPassFactory.create(db_session, event=event, status="cancelled")

        response = await client.post(f"/verify/{entry_pass.id}")

        assert response.json()["result"] == "cancelled"

    @pytest.mark.asyncio
    async def test_pass_not_yet_valid(self, client: AsyncClient, db_session: AsyncSession, event):
        entry_pass = await EntryPassFactory.create(
            db_session, event=event, valid_from=hours_from_now(2)
        )

        response = await client.post(f"/verify/{entry_pass.id}")

        assert response.json()["result"] == "not_yet_valid"
        assert response.json()["entry_pass"]["status"] == "active"

    @pytest.mark.asyncio
    async def test_foreign_pass_cannot_be_verified(
        self, client: AsyncClient, db_session: AsyncSession
    ):
        foreign_pass = await EntryPassFactory.create(db_session)

        inspect = await client.get(f"/verify/{foreign_pass.id}")
        scan = await client.post(f"/verify/{foreign_pass.id}")

        assert inspect.status_code == 404
        assert scan.status_code == 404
        assert (await db_session.execute(select(PassScan))).scalars().all() == []


class TestConcurrentScans:
    """Two scanners holding the same pass admit the holder once."""

    @pytest.mark.asyncio
    async def test_second_scanner_with_stale_copy_is_rejected(
        self, client: AsyncClient, db_session: AsyncSession, second_session: AsyncSession, event
    ):
        user = client.test_user
        entry_pass = await EntryPassFactory.create(db_session, event=event)
        stale = await get_owned_pass(second_session, user, entry_pass.id)
        assert stale.status == "active"

        _, first_result, _ = await verify_pass(db_session, user, entry_pass.id, ScanCreate())
        await db_session.commit()
        _, second_result, _ = await verify_pass(second_session, user, entry_pass.id, ScanCreate())
        await second_session.commit()

        assert first_result is ScanResult.ACCEPTED
        assert second_result is ScanResult.ALREADY_USED
        assert stale.status == "used"
        scans = (await db_session.execute(select(PassScan))).scalars().all()
        assert sorted(scan.meta["result"] for scan in scans) == ["accepted", "already_used"]

    @pytest.mark.asyncio
    async def test_claim_fails_when_pass_already_used_elsewhere(
        self, client: AsyncClient, db_session: AsyncSession, second_session: AsyncSession, event
    ):
        user = client.test_user
        entry_pass = await EntryPassFactory.create(db_session, event=event)
        stale = await get_owned_pass(second_session, user, entry_pass.id)

        await verify_pass(db_session, user, entry_pass.id, ScanCreate())
        await db_session.commit()

        assert await _claim_pass(second_session, stale) is False
        assert stale.status == "used"
        assert evaluate_scan(stale) is ScanResult.ALREADY_USED

    @pytest.mark.asyncio
    async def test_claim_succeeds_on_active_pass(
        self, client: AsyncClient, db_session: AsyncSession, event
    ):
        entry_pass = await EntryPassFactory.create(db_session, event=event)

        assert await _claim_pass(db_session, entry_pass) is True
        assert entry_pass.status == "used"
