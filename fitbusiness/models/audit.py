"""Audit log model: who did what to which record."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from fitbusiness.models.enums import AuditTargetType


class AuditActor(BaseModel):
    id: str
    name: str


class AuditTarget(BaseModel):
    type: AuditTargetType
    id: str
    name: str


class AuditLog(BaseModel):
    log_id: str
    timestamp: datetime
    user: AuditActor
    action: str
    target: AuditTarget
