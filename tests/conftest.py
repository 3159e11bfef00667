"""Shared test fixtures for the FitBusiness test suite."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fitbusiness.app import create_app
from fitbusiness.config import Settings
from fitbusiness.models.company import CompanyDraft
from fitbusiness.models.employee import EmployeeDraft
from fitbusiness.store import DataStore

# Identity headers as forwarded by the identity-aware proxy
HR_HEADERS = {
    "X-User-Id": "uid-hr-1",
    "X-User-Email": "hr@empresa.com",
    "X-User-Name": "Helena RH",
}
EMPLOYEE_HEADERS = {
    "X-User-Id": "uid-emp-1",
    "X-User-Email": "carlos.andrade@inovatech.com",
    "X-User-Name": "Carlos Andrade",
}
ADMIN_HEADERS = {
    "X-User-Id": "uid-admin-1",
    "X-User-Email": "alice@fitbusiness.com",
    "X-User-Name": "Alice Admin",
}


def _test_settings(**overrides) -> Settings:
    """Return settings suitable for testing."""
    values = dict(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        rate_limit_burst="2000/minute",
        allowed_origins="http://localhost:3000,http://localhost:5173",
        seed_random_seed=42,
        gemini_api_key="",
        identity_provider_configured=False,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def app(settings):
    """Create a fresh FastAPI app, with its own seeded store."""
    return create_app(settings)


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture
def store(app) -> DataStore:
    """The seeded store behind the test app."""
    return app.state.store


@pytest.fixture
def empty_store() -> DataStore:
    """A store with no data at all."""
    return DataStore()


@pytest.fixture
def make_draft():
    """Factory for employee drafts with a given company and FitScore."""
    counter = {"n": 0}

    def _make(company_id: str, fit_score: int = 75, **fields) -> EmployeeDraft:
        counter["n"] += 1
        n = counter["n"]
        values = dict(
            name=f"Person {n}",
            email=f"person{n}@example.com",
            title="Analyst",
            company_id=company_id,
            fit_score=fit_score,
        )
        values.update(fields)
        return EmployeeDraft(**values)

    return _make


@pytest.fixture
def sample_company(empty_store):
    """An empty company in an otherwise empty store."""
    return empty_store.add_company(CompanyDraft(name="Acme Wellness", sector="Logistics"))


@pytest.fixture
def hr_headers():
    return dict(HR_HEADERS)


@pytest.fixture
def employee_headers():
    return dict(EMPLOYEE_HEADERS)


@pytest.fixture
def admin_headers():
    return dict(ADMIN_HEADERS)


@pytest.fixture
def make_client():
    """Build a client for an app with specific settings overrides."""

    def _make(**overrides) -> TestClient:
        return TestClient(create_app(_test_settings(**overrides)))

    return _make
