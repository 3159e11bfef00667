"""Application wiring tests: middleware, OpenAPI schema and lifespan."""

from __future__ import annotations

from fastapi.testclient import TestClient
from slowapi import Limiter

from fitbusiness.app import create_app, create_store
from fitbusiness.middleware import configure_structured_logging, get_limiter
from fitbusiness.store import DataStore


class TestMiddlewareConfiguration:

    def test_get_limiter(self, settings):
        assert isinstance(get_limiter(settings), Limiter)

    def test_structured_logging_json(self, settings):
        configure_structured_logging(settings.model_copy(update={"log_format": "json"}))

    def test_structured_logging_console(self, settings):
        configure_structured_logging(settings)

    def test_cors_preflight(self, client):
        resp = client.options(
            "/api/companies",
            headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "GET"},
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "http://localhost:3000"

    def test_rate_limit(self, make_client):
        client = make_client(rate_limit_default="2/minute")
        assert client.get("/health/live").status_code == 200
        assert client.get("/health/live").status_code == 200
        assert client.get("/health/live").status_code == 429


class TestStoreWiring:
    """Each app owns its store; nothing is shared through module globals."""

    def test_apps_do_not_share_stores(self, settings):
        first, second = create_app(settings), create_app(settings)
        TestClient(first).delete("/api/companies/co-1")
        assert first.state.store.get_company("co-1") is None
        assert second.state.store.get_company("co-1") is not None

    def test_injected_store(self, settings, empty_store):
        app = create_app(settings, store=empty_store)
        assert TestClient(app).get("/api/companies").json() == []

    def test_seed_is_reproducible(self, settings):
        first, second = create_store(settings), create_store(settings)
        assert first.list_audit_logs()[0].action == second.list_audit_logs()[0].action

    def test_lifespan_resets_store(self, app):
        store: DataStore = app.state.store
        with TestClient(app) as client:
            assert client.get("/api/companies").status_code == 200
            assert len(store.list_companies()) == 5
        assert store.list_companies() == []


class TestOpenAPISchema:

    def test_info(self, client):
        schema = client.get("/openapi.json").json()
        assert schema["info"]["title"] == "FitBusiness"

    def test_paths(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        for path in (
            "/health",
            "/api/companies",
            "/api/companies/{company_id}/imports",
            "/api/imports/{import_id}/commit",
            "/api/employees/{employee_id}/goals",
            "/api/analytics/overview",
            "/api/insights/{key}",
            "/api/audit-logs",
            "/api/me",
        ):
            assert path in paths


class TestRequestContext:

    def test_request_id_generated(self, client):
        assert len(client.get("/health/live").headers["x-request-id"]) == 32

    def test_request_id_echoed(self, client):
        resp = client.get("/health/live", headers={"X-Request-ID": "req-123"})
        assert resp.headers["x-request-id"] == "req-123"

    def test_rate_limit_per_caller(self, make_client, hr_headers, employee_headers):
        client = make_client(rate_limit_default="1/minute")
        assert client.get("/api/me", headers=hr_headers).status_code == 200
        assert client.get("/api/me", headers=employee_headers).status_code == 200
        assert client.get("/api/me", headers=hr_headers).status_code == 429
