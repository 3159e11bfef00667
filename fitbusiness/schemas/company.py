"""Schemas for company management and onboarding endpoints."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from fitbusiness.models.company import Address, Company, CompanyDraft, Contact, RiskIndexPoint
from fitbusiness.models.employee import Employee
from fitbusiness.models.enums import CompanyStatus, RiskLevel, Sector


class CompanyUpdate(BaseModel):
    """Full replacement of a company's editable fields.

    Headcount and average FitScore are not accepted; they always follow
    the employee roster.
    """

    name: str = Field(..., min_length=1)
    tax_id: str = ""
    sector: Sector
    status: CompanyStatus
    address: Address = Field(default_factory=Address)
    contact: Contact = Field(default_factory=Contact)
    risk_index: float = Field(..., ge=0.0, le=100.0)
    risk_index_history: list[RiskIndexPoint] | None = None
    average_risk: RiskLevel = RiskLevel.MEDIUM
    culture: str | None = None
    created_at: date | None = None


class CompanyDeleteResponse(BaseModel):
    company_id: str
    employees_removed: int
    message: str


class BulkDeleteRequest(BaseModel):
    ids: list[str] = Field(default_factory=list)


class BulkDeleteResponse(BaseModel):
    company_id: str
    removed: int
    total_employees: int
    average_fit_score: int


class OnboardingEmployee(BaseModel):
    """An initial staff entry typed during onboarding; blanks are dropped."""

    name: str = ""
    email: str = ""
    title: str = ""


class OnboardingRequest(BaseModel):
    company: CompanyDraft = Field(default_factory=CompanyDraft)
    employees: list[OnboardingEmployee] = Field(default_factory=list)


class OnboardingResponse(BaseModel):
    company: Company
    employees: list[Employee]
    message: str
