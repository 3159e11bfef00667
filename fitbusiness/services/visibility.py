"""Role-based visibility and permission checks.

All decisions dispatch on the closed ``Role`` enum. Each function handles
every role explicitly and rejects anything else, so adding a role fails
loudly instead of silently granting or hiding data.
"""

from __future__ import annotations

from typing import Iterable

from fitbusiness.models.company import Company
from fitbusiness.models.employee import Employee
from fitbusiness.models.enums import RiskLevel, Role, Sector
from fitbusiness.models.user import AuthenticatedUser

# Dashboard sections: (path, label, roles allowed)
NAVIGATION: list[tuple[str, str, frozenset[Role]]] = [
    ("/", "Overview", frozenset({Role.ADMIN})),
    ("/my-dashboard", "My Dashboard", frozenset({Role.EMPLOYEE})),
    ("/companies", "Companies", frozenset({Role.ADMIN, Role.HR_MANAGER})),
    ("/alerts", "Alert Center", frozenset({Role.ADMIN, Role.HR_MANAGER})),
    ("/analytics", "Analytics", frozenset({Role.ADMIN, Role.HR_MANAGER})),
    ("/audit", "Activity Log", frozenset({Role.ADMIN})),
    ("/integrations", "Integrations", frozenset({Role.ADMIN})),
]


def _unknown_role(role: object) -> ValueError:
    return ValueError(f"Unknown role: {role!r}")


def visible_companies(user: AuthenticatedUser, companies: Iterable[Company]) -> list[Company]:
    """Companies the user may see: all for admins, their own otherwise."""
    if user.role is Role.ADMIN:
        return list(companies)
    if user.role in (Role.HR_MANAGER, Role.EMPLOYEE):
        return [c for c in companies if c.company_id == user.company_id]
    raise _unknown_role(user.role)


def visible_employees(user: AuthenticatedUser, employees: Iterable[Employee]) -> list[Employee]:
    """Employees the user may see.

    Admins see everyone, HR managers their company's staff, and an
    employee only their own record.
    """
    if user.role is Role.ADMIN:
        return list(employees)
    if user.role is Role.HR_MANAGER:
        return [e for e in employees if e.company_id == user.company_id]
    if user.role is Role.EMPLOYEE:
        email = user.email.lower()
        return [e for e in employees if e.email.lower() == email]
    raise _unknown_role(user.role)


def can_view_company(user: AuthenticatedUser, company_id: str) -> bool:
    if user.role is Role.ADMIN:
        return True
    if user.role in (Role.HR_MANAGER, Role.EMPLOYEE):
        return user.company_id == company_id
    raise _unknown_role(user.role)


def can_manage_companies(user: AuthenticatedUser) -> bool:
    """Creating, editing and deleting companies."""
    if user.role is Role.ADMIN:
        return True
    if user.role in (Role.HR_MANAGER, Role.EMPLOYEE):
        return False
    raise _unknown_role(user.role)


def can_manage_employees(user: AuthenticatedUser, company_id: str) -> bool:
    """Adding, editing, importing and removing staff of ``company_id``."""
    if user.role is Role.ADMIN:
        return True
    if user.role is Role.HR_MANAGER:
        return user.company_id == company_id
    if user.role is Role.EMPLOYEE:
        return False
    raise _unknown_role(user.role)


def can_view_analytics(user: AuthenticatedUser) -> bool:
    if user.role in (Role.ADMIN, Role.HR_MANAGER):
        return True
    if user.role is Role.EMPLOYEE:
        return False
    raise _unknown_role(user.role)


def can_view_audit_log(user: AuthenticatedUser) -> bool:
    if user.role is Role.ADMIN:
        return True
    if user.role in (Role.HR_MANAGER, Role.EMPLOYEE):
        return False
    raise _unknown_role(user.role)


def can_edit_goals(user: AuthenticatedUser, employee: Employee) -> bool:
    """Goals are edited by the employee themself or by whoever manages them."""
    if user.role is Role.EMPLOYEE:
        return user.email.lower() == employee.email.lower()
    if user.role in (Role.ADMIN, Role.HR_MANAGER):
        return can_manage_employees(user, employee.company_id)
    raise _unknown_role(user.role)


def navigation_for(role: Role) -> list[dict[str, str]]:
    """Dashboard sections shown to a role, in menu order."""
    if role not in (Role.ADMIN, Role.HR_MANAGER, Role.EMPLOYEE):
        raise _unknown_role(role)
    return [{"path": path, "label": label} for path, label, roles in NAVIGATION if role in roles]


def filter_employees(
    user: AuthenticatedUser,
    employees: Iterable[Employee],
    company_id: str | None = None,
    sector: Sector | None = None,
    risk: RiskLevel | None = None,
    search: str | None = None,
) -> list[Employee]:
    """Visible employees narrowed by the listing filters.

    The company filter only applies to admins; everyone else is already
    scoped to a single company. ``search`` matches name, email or title,
    case-insensitively.
    """
    result = visible_employees(user, employees)
    if user.role is Role.ADMIN and company_id:
        result = [e for e in result if e.company_id == company_id]
    if sector is not None:
        result = [e for e in result if e.sector == sector]
    if risk is not None:
        result = [e for e in result if e.risk == risk]
    if search:
        term = search.lower()
        result = [
            e for e in result
            if term in e.name.lower() or term in e.email.lower() or term in e.title.lower()
        ]
    return result
