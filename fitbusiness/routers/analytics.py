"""Portfolio analytics endpoints for the overview and risk pages."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fitbusiness.dependencies import forbidden, get_current_user, get_store
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.dashboard import (
    OverviewResponse,
    RiskTimelinePoint,
    RiskTimelineResponse,
    SectorBreakdownResponse,
    SectorStat,
)
from fitbusiness.services.analytics import portfolio_overview, risk_index_timeline, sector_breakdown
from fitbusiness.services.visibility import can_view_analytics, visible_companies, visible_employees
from fitbusiness.store import DataStore

router = APIRouter(prefix="/analytics", tags=["analytics"])


def _require_analytics(user: AuthenticatedUser) -> None:
    if not can_view_analytics(user):
        raise forbidden()


@router.get("/overview", response_model=OverviewResponse)
async def overview(
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> OverviewResponse:
    """Counts, global FitScore and risk buckets for the caller's companies."""
    _require_analytics(user)
    companies = visible_companies(user, store.list_companies())
    employees = visible_employees(user, store.list_employees())
    return OverviewResponse(**portfolio_overview(companies, employees))


@router.get("/sectors", response_model=SectorBreakdownResponse)
async def sectors(
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> SectorBreakdownResponse:
    _require_analytics(user)
    employees = visible_employees(user, store.list_employees())
    return SectorBreakdownResponse(sectors=[SectorStat(**row) for row in sector_breakdown(employees)])


@router.get("/risk-timeline", response_model=RiskTimelineResponse)
async def risk_timeline(
    user: AuthenticatedUser = Depends(get_current_user),
    store: DataStore = Depends(get_store),
) -> RiskTimelineResponse:
    """Monthly mean of the health risk index across visible companies."""
    _require_analytics(user)
    companies = visible_companies(user, store.list_companies())
    return RiskTimelineResponse(points=[RiskTimelinePoint(**p) for p in risk_index_timeline(companies)])
