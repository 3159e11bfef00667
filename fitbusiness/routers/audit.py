"""Audit log browsing endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from fitbusiness.dependencies import forbidden, get_current_user, get_store
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.dashboard import AuditLogResponse
from fitbusiness.services.audit import AuditSortKey, SortDirection, search_audit_logs
from fitbusiness.services.visibility import can_view_audit_log
from fitbusiness.store import DataStore

router = APIRouter(tags=["audit"])


@router.get("/audit-logs", response_model=AuditLogResponse)
async def list_audit_logs(
    search: str | None = Query(default=None, description="Matches user, action or target name"),
    sort: AuditSortKey = Query(default=AuditSortKey.TIMESTAMP),
    direction: SortDirection = Query(default=SortDirection.DESC),
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> AuditLogResponse:
    """Recorded actions, newest first unless told otherwise. Admins only."""
    if not can_view_audit_log(user):
        raise forbidden()
    logs = search_audit_logs(store.list_audit_logs(), search=search, sort=sort, direction=direction)
    return AuditLogResponse(total=len(logs), logs=logs)
