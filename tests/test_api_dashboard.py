"""Analytics, insights, audit log, identity and health endpoint tests."""

from __future__ import annotations

import httpx
from fastapi.testclient import TestClient

from fitbusiness.app import create_app
from fitbusiness.services.insights import FALLBACK_INSIGHTS, InsightClient, InsightKey


# ─── Analytics ──────────────────────────────────────────────────────────────

class TestAnalyticsEndpoints:

    def test_overview_admin(self, client):
        data = client.get("/api/analytics/overview").json()
        assert data["company_count"] == 5
        assert data["employee_count"] == 12
        assert data["average_fit_score"] == 68
        assert data["employees_by_risk_level"]["High"] == 4

    def test_overview_hr_scoped(self, client, hr_headers):
        data = client.get("/api/analytics/overview", headers=hr_headers).json()
        assert data["company_count"] == 1
        assert data["employee_count"] == 3
        assert data["average_fit_score"] == 85
        assert data["risk_index_band"] == "Low"

    def test_overview_employee_forbidden(self, client, employee_headers):
        assert client.get("/api/analytics/overview", headers=employee_headers).status_code == 403

    def test_sectors(self, client):
        sectors = client.get("/api/analytics/sectors").json()["sectors"]
        assert sum(s["employee_count"] for s in sectors) == 12

    def test_risk_timeline(self, client):
        points = client.get("/api/analytics/risk-timeline").json()["points"]
        assert len(points) == 12
        assert points[-1]["average_risk_index"] == 68.6


# ─── Insights ───────────────────────────────────────────────────────────────

class TestInsightEndpoint:

    def test_fallback_without_key(self, client):
        data = client.get("/api/insights/overview").json()
        assert data == {
            "key": "overview",
            "text": FALLBACK_INSIGHTS[InsightKey.OVERVIEW],
            "source": "fallback",
        }

    def test_unknown_key(self, client):
        assert client.get("/api/insights/weather").status_code == 422

    def test_employee_forbidden(self, client, employee_headers):
        assert client.get("/api/insights/report", headers=employee_headers).status_code == 403

    def test_generated(self, settings):
        def handler(request):
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "All good."}]}}]})

        insight_client = InsightClient(
            api_key="k", model="m", api_url="https://gen.test", transport=httpx.MockTransport(handler)
        )
        client = TestClient(create_app(settings, insight_client=insight_client))
        data = client.get("/api/insights/riskAnalysis").json()
        assert data == {"key": "riskAnalysis", "text": "All good.", "source": "ai"}


# ─── Audit log ──────────────────────────────────────────────────────────────

class TestAuditEndpoint:

    def test_seeded_entries(self, client):
        data = client.get("/api/audit-logs").json()
        assert data["total"] == 50
        stamps = [log["timestamp"] for log in data["logs"]]
        assert stamps == sorted(stamps, reverse=True)

    def test_new_action_first(self, client):
        client.post("/api/companies", json={"name": "Audit Me"})
        first = client.get("/api/audit-logs").json()["logs"][0]
        assert first["action"] == "added_company"
        assert first["target"]["name"] == "Audit Me"

    def test_search(self, client):
        client.post("/api/companies", json={"name": "Zebra Unique"})
        data = client.get("/api/audit-logs", params={"search": "zebra unique"}).json()
        assert data["total"] == 1

    def test_sort_ascending(self, client):
        logs = client.get("/api/audit-logs", params={"sort": "user", "direction": "asc"}).json()["logs"]
        names = [log["user"]["name"].lower() for log in logs]
        assert names == sorted(names)

    def test_invalid_sort(self, client):
        assert client.get("/api/audit-logs", params={"sort": "colour"}).status_code == 422

    def test_hr_forbidden(self, client, hr_headers):
        assert client.get("/api/audit-logs", headers=hr_headers).status_code == 403


# ─── Identity ───────────────────────────────────────────────────────────────

class TestIdentityRequired:
    """With a configured identity provider, anonymous calls are rejected."""

    def test_anonymous_rejected(self, make_client):
        client = make_client(identity_provider_configured=True)
        assert client.get("/api/companies").status_code == 401

    def test_identified_allowed(self, make_client, admin_headers):
        client = make_client(identity_provider_configured=True)
        assert client.get("/api/companies", headers=admin_headers).status_code == 200

    def test_health_is_public(self, make_client):
        client = make_client(identity_provider_configured=True)
        assert client.get("/health").status_code == 200


# ─── Health ─────────────────────────────────────────────────────────────────

class TestHealth:

    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["store"] == {"companies": 5, "employees": 12, "open_imports": 0}

    def test_ready(self, client):
        data = client.get("/health/ready").json()
        assert data["status"] == "healthy"
        services = {s["service"]: s for s in data["services"]}
        assert services["store"]["details"] == "5 companies, 12 employees"
        assert services["insights"]["details"] == "static fallback"

    def test_stale_aggregates_not_ready(self, client, store):
        store.companies["co-1"] = store.companies["co-1"].model_copy(update={"total_employees": 99})
        data = client.get("/health/ready").json()
        assert data["status"] == "unhealthy"
        services = {s["service"]: s for s in data["services"]}
        assert services["store"]["status"] == "unhealthy"
        assert "co-1" in services["store"]["details"]
        assert services["insights"]["status"] == "healthy"

    def test_orphaned_employee_not_ready(self, client, store):
        del store.companies["co-5"]
        data = client.get("/health/ready").json()
        assert data["status"] == "unhealthy"
        assert "missing company" in data["services"][0]["details"]

    def test_live(self, client):
        assert client.get("/health/live").json() == {"status": "alive"}

    def test_unseeded_store(self, make_client):
        client = make_client(seed_mock_data=False)
        assert client.get("/api/companies").json() == []
