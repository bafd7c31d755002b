"""
Tests for error handling middleware, exception handlers and health check
"""

import pytest

from api.routes.health import HEALTH_CHECK_FAILED
from conftest import FakePool
from services.users_service import StoreUnavailable, get_users_service
from utils.error_handling import ErrorHandlingConfig, TRACE_HEADER


class TestSanitizeData:

    def test_redacts_sensitive_keys_recursively(self):
        data = {"firstName": "Ann", "password": "hunter2", "nested": [{"api_token": "x"}]}

        sanitized = ErrorHandlingConfig.sanitize_data(data)

        assert sanitized["firstName"] == "Ann"
        assert sanitized["password"] == "***REDACTED***"
        assert sanitized["nested"][0]["api_token"] == "***REDACTED***"

    def test_truncates_long_strings(self):
        sanitized = ErrorHandlingConfig.sanitize_data("a" * (ErrorHandlingConfig.MAX_BODY_LOG_SIZE + 10))

        assert sanitized.endswith("...[TRUNCATED]")


class TestHandlers:

    @pytest.mark.asyncio
    async def test_trace_header_on_responses(self, client):
        response = await client.get("/users")

        assert response.headers.get(TRACE_HEADER)

    @pytest.mark.asyncio
    async def test_trace_header_on_unhandled_500(self, app, client):
        class UnavailableService:
            async def list_users(self):
                raise StoreUnavailable("connection refused")

        app.dependency_overrides[get_users_service] = lambda: UnavailableService()

        response = await client.get("/users")

        assert response.status_code == 500
        assert response.headers.get(TRACE_HEADER)
        assert response.json()["trace_id"] == response.headers[TRACE_HEADER]

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client):
        response = await client.get("/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "HTTP 404"
        assert body["message"] == "Not Found"

    @pytest.mark.asyncio
    async def test_unsupported_method_returns_405(self, client):
        response = await client.patch("/users/1", json={})

        assert response.status_code == 405


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy_when_database_answers(self, client, monkeypatch):
        monkeypatch.setattr("api.routes.health.get_db_pool", lambda: FakePool())

        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_without_pool(self, client, monkeypatch):
        monkeypatch.setattr("api.routes.health.get_db_pool", lambda: None)

        response = await client.get("/health")

        assert response.status_code == 503

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_unreachable(self, client, monkeypatch):
        pool = FakePool(acquire_error=ConnectionRefusedError("refused"))
        monkeypatch.setattr("api.routes.health.get_db_pool", lambda: pool)

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json()["message"] == HEALTH_CHECK_FAILED
        assert "refused" not in response.text
