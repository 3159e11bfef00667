"""Domain models for FitBusiness."""

from fitbusiness.models.audit import AuditActor, AuditLog, AuditTarget
from fitbusiness.models.company import Address, Company, CompanyDraft, Contact, RiskIndexPoint
from fitbusiness.models.employee import (
    Employee,
    EmployeeDraft,
    ExercisePlan,
    FitScorePoint,
    Goal,
    GoalDraft,
    WellnessMetrics,
)
from fitbusiness.models.enums import (
    AuditTargetType,
    CompanyStatus,
    Gender,
    GoalStatus,
    RiskLevel,
    Role,
    Sector,
)
from fitbusiness.models.user import AuthenticatedUser

__all__ = [
    "Address",
    "AuditActor",
    "AuditLog",
    "AuditTarget",
    "AuditTargetType",
    "AuthenticatedUser",
    "Company",
    "CompanyDraft",
    "CompanyStatus",
    "Contact",
    "Employee",
    "EmployeeDraft",
    "ExercisePlan",
    "FitScorePoint",
    "Gender",
    "Goal",
    "GoalDraft",
    "GoalStatus",
    "RiskIndexPoint",
    "RiskLevel",
    "Role",
    "Sector",
    "WellnessMetrics",
]
