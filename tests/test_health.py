"""Tests for the health check endpoint."""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from bizpass.api.health import check_database, get_uptime_seconds, set_app_start_time


class TestHealthCheckEndpoint:
    """Test suite for /health endpoint."""

    @pytest.mark.asyncio
    async def test_health_ok_when_db_reachable(self, unauthenticated_client: AsyncClient):
        response = await unauthenticated_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["uptime_seconds"] >= 0
        assert data["checks"]["database"]["status"] == "ok"
        assert isinstance(data["checks"]["database"]["response_time_ms"], int)

    def test_uptime_tracking(self):
        set_app_start_time(datetime.now() - timedelta(hours=1))

        assert 3590 <= get_uptime_seconds() <= 3610

    @pytest.mark.asyncio
    async def test_database_down_is_reported(self):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("refused"))

        result = await check_database(db)

        assert result["status"] == "down"
        assert result["error"] == "OperationalError"
