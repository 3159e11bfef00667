"""Employee model: a monitored staff member and their wellness data."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from fitbusiness.models.enums import Gender, GoalStatus, RiskLevel, Sector


class Goal(BaseModel):
    """An individual wellness objective, embedded in its employee."""

    goal_id: str
    description: str = Field(..., min_length=1)
    target_date: date
    status: GoalStatus = GoalStatus.NOT_STARTED


class GoalDraft(BaseModel):
    description: str
    target_date: date | None = None
    status: GoalStatus = GoalStatus.NOT_STARTED


class WellnessMetrics(BaseModel):
    sleep_hours: float = Field(..., ge=0.0, le=24.0)
    stress_pct: float = Field(..., ge=0.0, le=100.0)
    mood: int = Field(..., ge=1, le=5)
    energy: int = Field(..., ge=1, le=5)


class ExercisePlan(BaseModel):
    name: str
    target: str
    frequency: str
    progress: int = Field(default=0, ge=0, le=100)


class FitScorePoint(BaseModel):
    recorded_on: date
    score: int = Field(..., ge=0, le=100)


class Employee(BaseModel):
    """A fully populated employee record as held by the store."""

    employee_id: str
    name: str
    email: str
    title: str
    sector: Sector
    company_id: str
    company_name: str
    avatar_url: str
    admission_date: date
    fit_score: int = Field(..., ge=0, le=100)
    risk: RiskLevel
    fit_score_history: list[FitScorePoint] = Field(default_factory=list)
    metrics: WellnessMetrics
    exercise_plan: ExercisePlan
    goals: list[Goal] = Field(default_factory=list)

    # Optional profile details
    birth_date: date | None = None
    gender: Gender | None = None
    weight_kg: float | None = None
    height_cm: float | None = None

    def __repr__(self) -> str:
        return f"<Employee {self.employee_id} company={self.company_id}>"


class EmployeeDraft(BaseModel):
    """Everything needed to create an employee except the id.

    Metric, plan, avatar and date fields are optional; the builder fills
    them with defaults. ``risk`` is never accepted, it is derived from
    ``fit_score``.
    """

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    title: str = Field(..., min_length=1)
    company_id: str
    company_name: str = ""
    sector: Sector | None = None
    avatar_url: str | None = None
    admission_date: date | None = None
    fit_score: int = Field(default=75, ge=0, le=100)
    fit_score_history: list[FitScorePoint] = Field(default_factory=list)
    metrics: WellnessMetrics | None = None
    exercise_plan: ExercisePlan | None = None
    goals: list[Goal] = Field(default_factory=list)
    birth_date: date | None = None
    gender: Gender | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
