"""Schemas for the health probes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class ServiceHealth(BaseModel):
    """Outcome of one readiness check."""

    service: str
    status: Literal["healthy", "unhealthy"]
    latency_ms: float | None = None
    details: str | None = None


class StoreSummary(BaseModel):
    """Size of the session held by the in-memory store."""

    companies: int
    employees: int
    open_imports: int


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    environment: str
    services: list[ServiceHealth]
    store: StoreSummary | None = None
