"""Generated dashboard insights, with a static fallback."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from fitbusiness.dependencies import forbidden, get_current_user, get_insight_client
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.schemas.dashboard import InsightResponse
from fitbusiness.services.insights import InsightClient, InsightKey
from fitbusiness.services.visibility import can_view_analytics

router = APIRouter(tags=["insights"])


@router.get("/insights/{key}", response_model=InsightResponse)
async def get_insight(
    key: InsightKey,
    user: AuthenticatedUser = Depends(get_current_user),
    client: InsightClient = Depends(get_insight_client),
) -> InsightResponse:
    """A short analysis for one dashboard page.

    Always succeeds: provider failures fall back to the static text.
    """
    if not can_view_analytics(user):
        raise forbidden()
    insight = await client.generate(key)
    return InsightResponse(key=insight.key.value, text=insight.text, source=insight.source.value)
