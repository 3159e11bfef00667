"""Health probes: liveness, readiness and a summary check."""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from fastapi import APIRouter, Request

from fitbusiness.schemas.health import HealthResponse, ServiceHealth, StoreSummary
from fitbusiness.store import DataStore

router = APIRouter(tags=["health"])


async def _check_service(name: str, check_fn: Callable[[], Awaitable[str | None]]) -> ServiceHealth:
    """Run one check, timing it and capturing any failure as unhealthy."""
    start = time.monotonic()
    try:
        details = await check_fn()
        status = "healthy"
    except Exception as exc:
        details = str(exc)[:200]
        status = "unhealthy"
    return ServiceHealth(
        service=name,
        status=status,
        latency_ms=round((time.monotonic() - start) * 1000, 2),
        details=details,
    )


def _summarise(store: DataStore) -> StoreSummary:
    return StoreSummary(
        companies=len(store.companies),
        employees=len(store.employees),
        open_imports=len(store.import_sessions),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Is the application up, and how much data does the session hold?"""
    settings = request.app.state.settings
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        services=[],
        store=_summarise(request.app.state.store),
    )


@router.get("/health/ready", response_model=HealthResponse)
async def readiness_check(request: Request) -> HealthResponse:
    """Ready while the store is consistent; reports how insights will be served.

    The store is unhealthy when an employee points at a missing company or a
    company's headcount or average no longer matches its roster. A missing
    insight provider never makes the service unready, insights are then
    served from the static fallback.
    """
    settings = request.app.state.settings
    store: DataStore = request.app.state.store
    insight_client = request.app.state.insight_client

    async def _check_store() -> str:
        problems = store.integrity_problems()
        if problems:
            raise RuntimeError(f"{len(problems)} integrity problem(s): {'; '.join(problems)}")
        return f"{len(store.companies)} companies, {len(store.employees)} employees"

    async def _check_insights() -> str:
        return "generative API configured" if insight_client.configured else "static fallback"

    services = [
        await _check_service("store", _check_store),
        await _check_service("insights", _check_insights),
    ]
    overall = "healthy" if all(s.status == "healthy" for s in services) else "unhealthy"

    return HealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        services=services,
        store=_summarise(store),
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
