"""Schemas for analytics, insights, audit log and session endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from fitbusiness.models.audit import AuditLog
from fitbusiness.models.user import AuthenticatedUser


class OverviewResponse(BaseModel):
    """Headline numbers for the caller's visible portfolio."""

    company_count: int
    active_companies: int
    employee_count: int
    average_fit_score: int
    average_risk_index: int
    risk_index_band: str | None = None
    companies_by_risk_band: dict[str, int]
    employees_by_risk_level: dict[str, int]


class SectorStat(BaseModel):
    sector: str
    employee_count: int
    average_fit_score: int


class SectorBreakdownResponse(BaseModel):
    sectors: list[SectorStat]


class RiskTimelinePoint(BaseModel):
    recorded_on: date
    average_risk_index: float
    company_count: int


class RiskTimelineResponse(BaseModel):
    points: list[RiskTimelinePoint]


class InsightResponse(BaseModel):
    key: str
    text: str
    source: str


class AuditLogResponse(BaseModel):
    total: int
    logs: list[AuditLog]


class NavigationLink(BaseModel):
    path: str
    label: str


class SessionResponse(BaseModel):
    user: AuthenticatedUser
    navigation: list[NavigationLink]
