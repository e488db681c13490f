"""Tests for logging, request ids, error responses and Sentry filtering."""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from bizpass.api import dashboard as dashboard_api
from bizpass.core.errors import (
    ConflictError,
    ErrorDetail,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from bizpass.core.logging import get_request_id, set_request_id
from bizpass.core.sentry import filter_sensitive_data, init_sentry


class TestErrorClasses:
    """Test custom exception classes."""

    def test_validation_error_response(self):
        exc = ValidationError("Business name is required", details={"field": "name"})

        assert exc.code == "VALIDATION_ERROR"
        assert exc.status_code == 422
        response = exc.to_response()
        assert isinstance(response, ErrorDetail)
        assert response.details == {"field": "name"}

    def test_not_found_error_includes_resource_context(self):
        exc = NotFoundError(resource="EntryPass", resource_id="123")

        assert exc.status_code == 404
        assert exc.details == {"resource": "EntryPass", "resource_id": "123"}

    def test_conflict_and_invalid_state_codes(self):
        assert ConflictError("taken").status_code == 409
        assert InvalidStateError("nope").code == "INVALID_STATE"


class TestRequestIDContext:
    """Test request ID injection."""

    def test_set_and_get_request_id(self):
        set_request_id("test-request-123")

        assert get_request_id() == "test-request-123"

    @pytest.mark.asyncio
    async def test_request_id_header_is_echoed(self, client: AsyncClient):
        response = await client.get("/health", headers={"X-Request-ID": "external-123"})

        assert response.headers.get("X-Request-ID") == "external-123"

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client: AsyncClient):
        response = await client.get("/health")

        assert len(response.headers["X-Request-ID"]) > 0


class TestErrorHandlers:
    """Registered handlers render the common error body."""

    @pytest.mark.asyncio
    async def test_not_found_body(self, client: AsyncClient):
        response = await client.get("/documents/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "NOT_FOUND"
        assert body["details"]["resource"] == "Document"

    @pytest.mark.asyncio
    async def test_store_failure_is_reported_as_database_error(
        self, client: AsyncClient, monkeypatch
    ):
        async def failing_stats(db, user):
            raise OperationalError("SELECT ...", {}, Exception("connection reset"))

        monkeypatch.setattr(dashboard_api, "compute_dashboard_stats", failing_stats)

        response = await client.get("/dashboard/stats")

        assert response.status_code == 500
        assert response.json() == {
            "code": "DATABASE_ERROR",
            "message": "The data store rejected the request",
        }

    @pytest.mark.asyncio
    async def test_unknown_route_keeps_default_body(self, client: AsyncClient):
        response = await client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"detail": "Not Found"}


class TestSentry:
    """Sentry setup and scrubbing."""

    def test_no_dsn_leaves_sentry_disabled(self, monkeypatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)

        assert init_sentry() is False

    def test_placeholder_dsn_leaves_sentry_disabled(self, monkeypatch):
        monkeypatch.setenv("SENTRY_DSN", "xxx")

        assert init_sentry() is False

    def test_sql_is_scrubbed_from_events(self):
        event = {
            "extra": {"sql_query": "SELECT *", "pass_id": "abc", "note": "ran SQL"},
            "breadcrumbs": {
                "values": [
                    {"category": "query", "message": "SELECT 1"},
                    {"category": "http", "message": "GET /passes"},
                ]
            },
        }

        filtered = filter_sensitive_data(event, {})

        assert filtered["extra"] == {"pass_id": "abc"}
        assert filtered["breadcrumbs"]["values"] == [{"category": "http", "message": "GET /passes"}]
