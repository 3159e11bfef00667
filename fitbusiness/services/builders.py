"""Entity builders: the one place where sparse input meets defaults.

Every company and employee that enters the store goes through
``build_company`` or ``build_employee``. Each takes a sparse draft and
returns a fully populated model, so the defaults live here and nowhere else.
"""

from __future__ import annotations

import uuid
from datetime import date

from fitbusiness.models.company import Address, Company, CompanyDraft, Contact
from fitbusiness.models.employee import Employee, EmployeeDraft, ExercisePlan, WellnessMetrics
from fitbusiness.models.enums import CompanyStatus, RiskLevel, Sector
from fitbusiness.services.aggregates import risk_level_for

AVATAR_URL_TEMPLATE = "https://i.pravatar.cc/150?u={seed}"

DEFAULT_COMPANY_NAME = "New Company"
DEFAULT_RISK_INDEX = 70.0
DEFAULT_AVERAGE_FIT_SCORE = 70

DEFAULT_WELLNESS_METRICS = WellnessMetrics(sleep_hours=7, stress_pct=50, mood=4, energy=4)
DEFAULT_EXERCISE_PLAN = ExercisePlan(name="Standard", target="N/A", frequency="N/A", progress=0)

# Bulk CSV import
IMPORT_FIT_SCORE = 75

# Onboarding of a brand-new company
ONBOARDING_FIT_SCORE = 78
ONBOARDING_METRICS = WellnessMetrics(sleep_hours=8, stress_pct=30, mood=5, energy=4)
ONBOARDING_EXERCISE_PLAN = ExercisePlan(
    name="Daily Walk", target="10,000 steps/day", frequency="Daily", progress=0
)


def new_company_id() -> str:
    return f"co-{uuid.uuid4().hex[:12]}"


def new_employee_id() -> str:
    return f"emp-{uuid.uuid4().hex[:12]}"


def new_goal_id() -> str:
    return f"goal-{uuid.uuid4().hex[:12]}"


def avatar_url_for(seed: str) -> str:
    return AVATAR_URL_TEMPLATE.format(seed=seed)


def build_company(
    draft: CompanyDraft | None,
    company_id: str,
    today: date | None = None,
) -> Company:
    """Merge a company draft with the creation defaults.

    Defaults: status Active, sector Technology, risk index 70, average
    FitScore 70, average risk Medium, empty address and contact.
    """
    draft = draft or CompanyDraft()
    return Company(
        company_id=company_id,
        name=draft.name or DEFAULT_COMPANY_NAME,
        tax_id=draft.tax_id or "",
        sector=draft.sector or Sector.TECHNOLOGY,
        status=draft.status or CompanyStatus.ACTIVE,
        address=draft.address or Address(),
        contact=draft.contact or Contact(),
        risk_index=draft.risk_index if draft.risk_index is not None else DEFAULT_RISK_INDEX,
        average_risk=draft.average_risk or RiskLevel.MEDIUM,
        culture=draft.culture,
        created_at=today or date.today(),
        total_employees=0,
        average_fit_score=DEFAULT_AVERAGE_FIT_SCORE,
    )


def build_employee(draft: EmployeeDraft, employee_id: str, today: date | None = None) -> Employee:
    """Merge an employee draft with defaults and derive the risk level."""
    return Employee(
        employee_id=employee_id,
        name=draft.name.strip(),
        email=draft.email.strip(),
        title=draft.title.strip(),
        sector=draft.sector or Sector.TECHNOLOGY,
        company_id=draft.company_id,
        company_name=draft.company_name,
        avatar_url=draft.avatar_url or avatar_url_for(draft.email.strip()),
        admission_date=draft.admission_date or today or date.today(),
        fit_score=draft.fit_score,
        risk=risk_level_for(draft.fit_score),
        fit_score_history=list(draft.fit_score_history),
        metrics=draft.metrics or DEFAULT_WELLNESS_METRICS.model_copy(),
        exercise_plan=draft.exercise_plan or DEFAULT_EXERCISE_PLAN.model_copy(),
        goals=list(draft.goals),
        birth_date=draft.birth_date,
        gender=draft.gender,
        weight_kg=draft.weight_kg,
        height_cm=draft.height_cm,
    )


def employee_draft_from_import(
    name: str,
    email: str,
    title: str,
    company: Company,
    today: date | None = None,
) -> EmployeeDraft:
    """Draft for a row accepted by the bulk CSV import."""
    return EmployeeDraft(
        name=name,
        email=email,
        title=title,
        company_id=company.company_id,
        company_name=company.name,
        sector=company.sector,
        avatar_url=avatar_url_for(email),
        admission_date=today or date.today(),
        fit_score=IMPORT_FIT_SCORE,
        metrics=DEFAULT_WELLNESS_METRICS.model_copy(),
        exercise_plan=DEFAULT_EXERCISE_PLAN.model_copy(),
    )


def employee_draft_for_onboarding(
    name: str,
    email: str,
    title: str,
    company: Company,
    today: date | None = None,
) -> EmployeeDraft:
    """Draft for an initial employee entered during company onboarding."""
    return EmployeeDraft(
        name=name,
        email=email,
        title=title or "N/A",
        company_id=company.company_id,
        company_name=company.name,
        sector=company.sector,
        avatar_url=avatar_url_for(email),
        admission_date=today or date.today(),
        fit_score=ONBOARDING_FIT_SCORE,
        metrics=ONBOARDING_METRICS.model_copy(),
        exercise_plan=ONBOARDING_EXERCISE_PLAN.model_copy(),
    )
