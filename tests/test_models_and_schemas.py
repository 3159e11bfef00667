"""Model, schema and configuration validation tests."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from fitbusiness.config import Settings
from fitbusiness.models.company import Company, CompanyDraft, RiskIndexPoint
from fitbusiness.models.employee import EmployeeDraft, Goal, WellnessMetrics
from fitbusiness.models.enums import GoalStatus, Sector
from fitbusiness.schemas.company import CompanyUpdate, OnboardingRequest
from fitbusiness.schemas.employee import EmployeeUpdate
from fitbusiness.schemas.imports import ImportPreviewRequest


# ─── Domain models ──────────────────────────────────────────────────────────

class TestCompanyModel:

    def test_risk_index_bounds(self):
        with pytest.raises(ValidationError):
            Company(company_id="co-x", name="X", risk_index=101)

    def test_sector_is_closed(self):
        with pytest.raises(ValidationError):
            CompanyDraft(sector="Mining")

    def test_sector_from_string(self):
        assert CompanyDraft(sector="Retail").sector is Sector.RETAIL

    def test_history_point(self):
        point = RiskIndexPoint(recorded_on="2026-03-01", value=55)
        assert point.recorded_on == date(2026, 3, 1)

    def test_repr(self):
        assert repr(Company(company_id="co-x", name="X")) == "<Company co-x 'X'>"


class TestEmployeeModels:

    def test_fit_score_bounds(self):
        with pytest.raises(ValidationError):
            EmployeeDraft(name="A", email="a@x.com", title="T", company_id="co-1", fit_score=101)

    def test_mood_scale(self):
        with pytest.raises(ValidationError):
            WellnessMetrics(sleep_hours=7, stress_pct=50, mood=6, energy=4)

    def test_goal_requires_description(self):
        with pytest.raises(ValidationError):
            Goal(goal_id="g", description="", target_date=date(2030, 1, 1))

    def test_goal_status_default(self):
        goal = Goal(goal_id="g", description="Walk", target_date=date(2030, 1, 1))
        assert goal.status is GoalStatus.NOT_STARTED

    def test_goal_status_labels(self):
        assert GoalStatus("In Progress") is GoalStatus.IN_PROGRESS


# ─── API schemas ────────────────────────────────────────────────────────────

class TestSchemas:

    def test_company_update_ignores_derived_fields(self):
        update = CompanyUpdate(
            name="X", sector="Health", status="Active", risk_index=50,
            total_employees=9, average_fit_score=9,
        )
        assert "total_employees" not in update.model_dump()

    def test_employee_update_ignores_risk(self):
        update = EmployeeUpdate(
            name="A", email="a@x.com", title="T", sector="Health", company_id="co-1",
            avatar_url="", admission_date="2024-01-01", fit_score=50, risk="Low",
            metrics={"sleep_hours": 7, "stress_pct": 50, "mood": 4, "energy": 4},
            exercise_plan={"name": "Standard", "target": "N/A", "frequency": "N/A"},
        )
        assert "risk" not in update.model_dump()

    def test_onboarding_defaults(self):
        request = OnboardingRequest()
        assert request.company == CompanyDraft()
        assert request.employees == []

    def test_import_request_requires_content(self):
        with pytest.raises(ValidationError):
            ImportPreviewRequest()


# ─── Settings ───────────────────────────────────────────────────────────────

class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("FITBUSINESS_GEMINI_API_KEY", raising=False)
        settings = Settings(_env_file=None)
        assert settings.api_prefix == "/api"
        assert settings.default_company_id == "co-1"
        assert not settings.insights_enabled

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("FITBUSINESS_HR_EMAIL_DOMAIN", "people.example.com")
        monkeypatch.setenv("FITBUSINESS_SEED_RANDOM_SEED", "9")
        settings = Settings(_env_file=None)
        assert settings.hr_email_domain == "people.example.com"
        assert settings.seed_random_seed == 9

    def test_log_format_pattern(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")

    def test_environment_pattern(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, environment="moon")

    def test_origins_list(self):
        settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test")
        assert settings.allowed_origins_list == ["http://a.test", "http://b.test"]

    def test_insights_enabled_with_key(self):
        assert Settings(_env_file=None, gemini_api_key="abc").insights_enabled
