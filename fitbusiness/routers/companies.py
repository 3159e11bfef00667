"""Company management and onboarding endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fitbusiness.dependencies import forbidden, get_current_user, get_store
from fitbusiness.models.company import Company, CompanyDraft
from fitbusiness.models.enums import AuditTargetType
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.company import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    CompanyDeleteResponse,
    CompanyUpdate,
    OnboardingRequest,
    OnboardingResponse,
)
from fitbusiness.schemas.employee import EmployeeListResponse
from fitbusiness.services.builders import employee_draft_for_onboarding
from fitbusiness.services.visibility import (
    can_manage_companies,
    can_manage_employees,
    can_view_company,
    visible_companies,
    visible_employees,
)
from fitbusiness.store import DataStore

router = APIRouter(tags=["companies"])


@router.get("/companies", response_model=list[Company])
async def list_companies(
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> list[Company]:
    """List the companies visible to the caller."""
    return visible_companies(user, store.list_companies())


@router.post("/companies", response_model=Company, status_code=201)
async def create_company(
    draft: CompanyDraft,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Company:
    """Create a company; unspecified fields take the creation defaults."""
    if not can_manage_companies(user):
        raise forbidden()
    company = store.add_company(draft)
    store.record_audit(user, "added_company", AuditTargetType.COMPANY, company.company_id, company.name)
    return company


@router.get("/companies/{company_id}", response_model=Company)
async def get_company(
    company_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Company:
    company = store.require_company(company_id)
    if not can_view_company(user, company_id):
        raise forbidden()
    return company


@router.put("/companies/{company_id}", response_model=Company)
async def update_company(
    company_id: str,
    update: CompanyUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Company:
    """Replace a company's editable fields."""
    if not can_manage_companies(user):
        raise forbidden()
    stored = store.require_company(company_id)

    fields = update.model_dump()
    for kept in ("risk_index_history", "created_at"):
        if fields[kept] is None:
            del fields[kept]
    company = Company.model_validate({**stored.model_dump(), **fields})
    updated = store.update_company(company)

    action = "changed_company_status" if stored.status != updated.status else "edited_company"
    store.record_audit(user, action, AuditTargetType.COMPANY, company_id, updated.name)
    return updated


@router.delete("/companies/{company_id}", response_model=CompanyDeleteResponse)
async def delete_company(
    company_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> CompanyDeleteResponse:
    """Delete a company together with all of its employees."""
    if not can_manage_companies(user):
        raise forbidden()
    company = store.require_company(company_id)
    removed = store.delete_company(company_id)
    store.record_audit(user, "removed_company", AuditTargetType.COMPANY, company_id, company.name)

    return CompanyDeleteResponse(
        company_id=company_id,
        employees_removed=removed,
        message=f"Company '{company.name}' and {removed} employee(s) removed.",
    )


@router.get("/companies/{company_id}/employees", response_model=EmployeeListResponse)
async def list_company_employees(
    company_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> EmployeeListResponse:
    """The company's roster, as far as the caller may see it."""
    store.require_company(company_id)
    if not can_view_company(user, company_id):
        raise forbidden()
    roster = visible_employees(user, store.get_employees_by_company(company_id))
    return EmployeeListResponse(total=len(roster), employees=roster)


@router.post("/companies/{company_id}/employees/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_employees(
    company_id: str,
    request: BulkDeleteRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> BulkDeleteResponse:
    """Remove several employees of one company with a single recompute."""
    company = store.require_company(company_id)
    if not can_manage_employees(user, company_id):
        raise forbidden()

    removed = store.bulk_delete_employees(request.ids, company_id)
    if removed:
        store.record_audit(user, "removed_employees", AuditTargetType.COMPANY, company_id, company.name)

    refreshed = store.require_company(company_id)
    return BulkDeleteResponse(
        company_id=company_id,
        removed=removed,
        total_employees=refreshed.total_employees,
        average_fit_score=refreshed.average_fit_score,
    )


@router.post("/onboarding", response_model=OnboardingResponse, status_code=201)
async def onboard_company(
    request: OnboardingRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> OnboardingResponse:
    """Create a company and its initial staff in one step.

    Staff entries without a name or email are skipped.
    """
    if not can_manage_companies(user):
        raise forbidden()

    entries = [e for e in request.employees if e.name.strip() and e.email.strip()]
    company = store.add_company(request.company)
    drafts = [
        employee_draft_for_onboarding(e.name.strip(), e.email.strip(), e.title.strip(), company)
        for e in entries
    ]
    created = store.bulk_add_employees(drafts, company.company_id) if drafts else []
    store.record_audit(user, "added_company", AuditTargetType.COMPANY, company.company_id, company.name)

    return OnboardingResponse(
        company=store.require_company(company.company_id),
        employees=created,
        message=f"Onboarding complete: '{company.name}' added with {len(created)} employee(s).",
    )
