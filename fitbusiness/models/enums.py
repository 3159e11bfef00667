"""Closed vocabularies shared by the domain models."""

from __future__ import annotations

from enum import Enum


class Sector(str, Enum):
    TECHNOLOGY = "Technology"
    INDUSTRY = "Industry"
    LOGISTICS = "Logistics"
    RETAIL = "Retail"
    HEALTH = "Health"


class CompanyStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class GoalStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class Role(str, Enum):
    """Roles handed to us by the identity provider."""

    ADMIN = "Admin"
    HR_MANAGER = "HRManager"
    EMPLOYEE = "Employee"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class AuditTargetType(str, Enum):
    COMPANY = "company"
    EMPLOYEE = "employee"
    REPORT = "report"
