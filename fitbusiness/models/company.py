"""Company model: the tenant organisation whose staff is monitored."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from fitbusiness.models.enums import CompanyStatus, RiskLevel, Sector


class Address(BaseModel):
    street: str = ""
    district: str = ""
    city: str = ""
    postal_code: str = ""


class Contact(BaseModel):
    email: str = ""
    phone: str = ""


class RiskIndexPoint(BaseModel):
    """One monthly reading of a company's health risk index."""

    recorded_on: date
    value: float = Field(..., ge=0.0, le=100.0)


class Company(BaseModel):
    """A fully populated company record as held by the store."""

    company_id: str
    name: str
    tax_id: str = ""
    sector: Sector = Sector.TECHNOLOGY
    status: CompanyStatus = CompanyStatus.ACTIVE
    address: Address = Field(default_factory=Address)
    contact: Contact = Field(default_factory=Contact)
    risk_index: float = Field(default=70.0, ge=0.0, le=100.0)
    risk_index_history: list[RiskIndexPoint] = Field(default_factory=list)
    average_risk: RiskLevel = RiskLevel.MEDIUM
    culture: str | None = None
    created_at: date | None = None

    # Derived from the employee set, rewritten by the aggregate recalculator
    total_employees: int = Field(default=0, ge=0)
    average_fit_score: int = Field(default=0, ge=0, le=100)

    def __repr__(self) -> str:
        return f"<Company {self.company_id} {self.name!r}>"


class CompanyDraft(BaseModel):
    """Sparse input for creating a company; unset fields take defaults."""

    name: str | None = None
    tax_id: str | None = None
    sector: Sector | None = None
    status: CompanyStatus | None = None
    address: Address | None = None
    contact: Contact | None = None
    risk_index: float | None = Field(default=None, ge=0.0, le=100.0)
    average_risk: RiskLevel | None = None
    culture: str | None = None
