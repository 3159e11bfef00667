"""Bulk CSV import endpoints: preview, resubmit, commit, discard."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from fitbusiness.dependencies import forbidden, get_current_user, get_store
from fitbusiness.models.enums import AuditTargetType
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.imports import (
    ImportCommitResponse,
    ImportErrorResponse,
    ImportPreviewRequest,
    ImportPreviewResponse,
    ImportRowResponse,
)
from fitbusiness.services.bulk_import import TEMPLATE_FILENAME, ImportSession, template_csv
from fitbusiness.services.visibility import can_manage_employees
from fitbusiness.store import DataStore, RecordNotFoundError

router = APIRouter(tags=["imports"])


def _preview(session: ImportSession) -> ImportPreviewResponse:
    result = session.result
    return ImportPreviewResponse(
        import_id=session.session_id,
        company_id=session.company_id,
        step=session.step.value,
        filename=session.filename,
        valid_count=len(result.valid_rows),
        error_count=len(result.error_rows),
        valid_rows=[ImportRowResponse(name=r.name, email=r.email, title=r.title) for r in result.valid_rows],
        error_rows=[
            ImportErrorResponse(line=e.line, message=e.message, raw_line=e.raw_line)
            for e in result.error_rows
        ],
    )


def _session_for(store: DataStore, user: AuthenticatedUser, import_id: str) -> ImportSession:
    session = store.import_sessions.get(import_id)
    if session is None:
        raise RecordNotFoundError("import", import_id)
    if not can_manage_employees(user, session.company_id):
        raise forbidden()
    return session


@router.get("/imports/template", response_class=PlainTextResponse)
async def download_template() -> PlainTextResponse:
    """The CSV template with the required columns and two example rows."""
    return PlainTextResponse(
        template_csv(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{TEMPLATE_FILENAME}"'},
    )


@router.post("/companies/{company_id}/imports", response_model=ImportPreviewResponse, status_code=201)
async def preview_import(
    company_id: str,
    request: ImportPreviewRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> ImportPreviewResponse:
    """Validate a CSV payload for a company. Nothing is written yet.

    Any import the company still has open is discarded.
    """
    store.require_company(company_id)
    if not can_manage_employees(user, company_id):
        raise forbidden()

    session = ImportSession(company_id)
    session.load(request.content, request.filename)
    store.open_import(session)
    return _preview(session)


@router.put("/imports/{import_id}", response_model=ImportPreviewResponse)
async def resubmit_import(
    import_id: str,
    request: ImportPreviewRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> ImportPreviewResponse:
    """Send another file: reset the session to upload and validate again."""
    session = _session_for(store, user, import_id)
    session.reset()
    session.load(request.content, request.filename)
    return _preview(session)


@router.get("/imports/{import_id}", response_model=ImportPreviewResponse)
async def get_import(
    import_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> ImportPreviewResponse:
    return _preview(_session_for(store, user, import_id))


@router.post("/imports/{import_id}/commit", response_model=ImportCommitResponse)
async def commit_import(
    import_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> ImportCommitResponse:
    """Create the previewed valid rows as employees and close the session."""
    session = _session_for(store, user, import_id)
    imported = session.commit(store)
    del store.import_sessions[import_id]

    company = store.require_company(session.company_id)
    store.record_audit(user, "imported_employees", AuditTargetType.COMPANY, company.company_id, company.name)

    return ImportCommitResponse(
        import_id=import_id,
        company_id=company.company_id,
        step=session.step.value,
        imported_count=len(imported),
        employees=imported,
        total_employees=company.total_employees,
        average_fit_score=company.average_fit_score,
        message=f"{len(imported)} new employee(s) added.",
    )


@router.delete("/imports/{import_id}", status_code=204)
async def discard_import(
    import_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> Response:
    """Abandon an import without writing anything."""
    _session_for(store, user, import_id)
    del store.import_sessions[import_id]
    return Response(status_code=204)
