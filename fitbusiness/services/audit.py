"""Audit log browsing: search and sort over the recorded entries."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from fitbusiness.models.audit import AuditLog


class AuditSortKey(str, Enum):
    TIMESTAMP = "timestamp"
    USER = "user"
    ACTION = "action"
    TARGET = "target"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _sort_value(log: AuditLog, key: AuditSortKey):
    if key is AuditSortKey.USER:
        return log.user.name.lower()
    if key is AuditSortKey.TARGET:
        return log.target.name.lower()
    if key is AuditSortKey.ACTION:
        return log.action
    return log.timestamp


def search_audit_logs(
    logs: Iterable[AuditLog],
    search: str | None = None,
    sort: AuditSortKey = AuditSortKey.TIMESTAMP,
    direction: SortDirection = SortDirection.DESC,
) -> list[AuditLog]:
    """Filter by a case-insensitive term over user, action and target name, then sort."""
    result = list(logs)
    if search:
        term = search.lower()
        result = [
            log for log in result
            if term in log.user.name.lower()
            or term in log.action.lower()
            or term in log.target.name.lower()
        ]
    result.sort(key=lambda log: _sort_value(log, sort), reverse=direction is SortDirection.DESC)
    return result
