"""FastAPI dependencies: the per-app store and insight client, and the caller identity."""

from __future__ import annotations

from fastapi import HTTPException, Request

from fitbusiness.config import Settings
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.services.identity import IdentityClaims, development_user, map_identity_to_user
from fitbusiness.services.insights import InsightClient
from fitbusiness.store import DataStore

# Forwarded by the identity-aware proxy after the provider has authenticated the user
USER_ID_HEADER = "X-User-Id"
USER_EMAIL_HEADER = "X-User-Email"
USER_NAME_HEADER = "X-User-Name"
USER_PHOTO_HEADER = "X-User-Photo"


def get_store(request: Request) -> DataStore:
    return request.app.state.store


def get_insight_client(request: Request) -> InsightClient:
    return request.app.state.insight_client


def get_current_user(request: Request) -> AuthenticatedUser:
    """Resolve the caller from identity headers.

    Without an identity provider configured, requests that carry no
    identity act as the development admin.
    """
    settings: Settings = request.app.state.settings
    uid = request.headers.get(USER_ID_HEADER)
    if not uid:
        if settings.identity_provider_configured:
            raise HTTPException(status_code=401, detail="Authentication required")
        return development_user(settings)

    claims = IdentityClaims(
        uid=uid,
        email=request.headers.get(USER_EMAIL_HEADER),
        display_name=request.headers.get(USER_NAME_HEADER),
        photo_url=request.headers.get(USER_PHOTO_HEADER),
    )
    return map_identity_to_user(claims, settings)


def forbidden(detail: str = "You do not have permission to perform this action") -> HTTPException:
    return HTTPException(status_code=403, detail=detail)
