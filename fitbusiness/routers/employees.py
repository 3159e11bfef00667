"""Employee, goal and session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fitbusiness.dependencies import forbidden, get_current_user, get_store
from fitbusiness.models.employee import Employee, EmployeeDraft, GoalDraft
from fitbusiness.models.enums import AuditTargetType, RiskLevel, Sector
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.dashboard import NavigationLink, SessionResponse
from fitbusiness.schemas.employee import EmployeeListResponse, EmployeeUpdate
from fitbusiness.services.goals import add_goal, edit_goal, remove_goal
from fitbusiness.services.visibility import (
    can_edit_goals,
    can_manage_employees,
    filter_employees,
    navigation_for,
    visible_employees,
)
from fitbusiness.store import DataStore

router = APIRouter(tags=["employees"])


def _visible_employee(store: DataStore, user: AuthenticatedUser, employee_id: str) -> Employee:
    employee = store.require_employee(employee_id)
    if not visible_employees(user, [employee]):
        raise forbidden()
    return employee


@router.get("/me", response_model=SessionResponse)
async def current_session(user: AuthenticatedUser = Depends(get_current_user)) -> SessionResponse:
    """The caller's identity and the dashboard sections open to them."""
    return SessionResponse(
        user=user,
        navigation=[NavigationLink(**link) for link in navigation_for(user.role)],
    )


@router.get("/employees", response_model=EmployeeListResponse)
async def list_employees(
    company_id: str | None = Query(default=None),
    sector: Sector | None = Query(default=None),
    risk: RiskLevel | None = Query(default=None),
    search: str | None = Query(default=None),
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> EmployeeListResponse:
    """Visible employees, optionally filtered."""
    employees = filter_employees(
        user,
        store.list_employees(),
        company_id=company_id,
        sector=sector,
        risk=risk,
        search=search,
    )
    return EmployeeListResponse(total=len(employees), employees=employees)


@router.post("/employees", response_model=Employee, status_code=201)
async def create_employee(
    draft: EmployeeDraft,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    """Add one employee; sector and company name come from the company."""
    company = store.require_company(draft.company_id)
    if not can_manage_employees(user, company.company_id):
        raise forbidden()

    draft = draft.model_copy(update={
        "company_name": company.name,
        "sector": draft.sector or company.sector,
    })
    employee = store.add_employee(draft)
    store.record_audit(user, "added_employee", AuditTargetType.EMPLOYEE, employee.employee_id, employee.name)
    return employee


@router.get("/employees/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    return _visible_employee(store, user, employee_id)


@router.put("/employees/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    update: EmployeeUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    """Replace an employee record; moving companies recomputes both."""
    previous = store.require_employee(employee_id)
    company = store.require_company(update.company_id)
    if not (can_manage_employees(user, previous.company_id) and can_manage_employees(user, company.company_id)):
        raise forbidden()

    employee = Employee.model_validate({
        **update.model_dump(),
        "employee_id": employee_id,
        "company_name": company.name,
        "risk": previous.risk,
    })
    updated = store.update_employee(employee)
    store.record_audit(user, "edited_employee", AuditTargetType.EMPLOYEE, employee_id, updated.name)
    return updated


# ─── Goals ──────────────────────────────────────────────────────────────────

def _goal_owner(store: DataStore, user: AuthenticatedUser, employee_id: str) -> Employee:
    employee = store.require_employee(employee_id)
    if not can_edit_goals(user, employee):
        raise forbidden()
    return employee


@router.post("/employees/{employee_id}/goals", response_model=Employee, status_code=201)
async def create_goal(
    employee_id: str,
    draft: GoalDraft,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    employee = _goal_owner(store, user, employee_id)
    return store.update_employee(add_goal(employee, draft))


@router.put("/employees/{employee_id}/goals/{goal_id}", response_model=Employee)
async def update_goal(
    employee_id: str,
    goal_id: str,
    draft: GoalDraft,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    employee = _goal_owner(store, user, employee_id)
    return store.update_employee(edit_goal(employee, goal_id, draft))


@router.delete("/employees/{employee_id}/goals/{goal_id}", response_model=Employee)
async def delete_goal(
    employee_id: str,
    goal_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Employee:
    employee = _goal_owner(store, user, employee_id)
    return store.update_employee(remove_goal(employee, goal_id))
