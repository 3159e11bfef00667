"""Schemas for employee endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from fitbusiness.models.employee import Employee, ExercisePlan, FitScorePoint, Goal, WellnessMetrics
from fitbusiness.models.enums import Gender, Sector


class EmployeeUpdate(BaseModel):
    """Full replacement of an employee record.

    ``risk`` is derived from ``fit_score`` and the company name is taken
    from the referenced company, so neither is accepted here.
    """

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    title: str = Field(..., min_length=1)
    sector: Sector
    company_id: str
    avatar_url: str
    admission_date: date
    fit_score: int = Field(..., ge=0, le=100)
    fit_score_history: list[FitScorePoint] = Field(default_factory=list)
    metrics: WellnessMetrics
    exercise_plan: ExercisePlan
    goals: list[Goal] = Field(default_factory=list)
    birth_date: date | None = None
    gender: Gender | None = None
    weight_kg: float | None = None
    height_cm: float | None = None


class EmployeeListResponse(BaseModel):
    total: int
    employees: list[Employee]
