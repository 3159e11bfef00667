"""Identity provider boundary.

Credentials never reach this service. The identity provider (or the proxy
in front of us) authenticates the user and forwards their claims; we only
map those claims onto an ``AuthenticatedUser``.
"""

from __future__ import annotations

from dataclasses import dataclass

from fitbusiness.config import Settings
from fitbusiness.models.enums import Role
from fitbusiness.models.user import AuthenticatedUser
from fitbusiness.services.builders import avatar_url_for

DEV_USER_ID = "dev-admin"


@dataclass(frozen=True)
class IdentityClaims:
    """The subset of identity-provider claims we rely on."""

    uid: str
    email: str | None = None
    display_name: str | None = None
    photo_url: str | None = None


def role_for_email(email: str | None, settings: Settings) -> Role:
    """Assign a role from the email domain."""
    domain = email.rsplit("@", 1)[1].lower() if email and "@" in email else ""
    if domain == settings.admin_email_domain.lower():
        return Role.ADMIN
    if domain == settings.hr_email_domain.lower():
        return Role.HR_MANAGER
    return Role.EMPLOYEE


def map_identity_to_user(claims: IdentityClaims, settings: Settings) -> AuthenticatedUser:
    """Build the application user for a set of identity claims.

    Admins are not bound to a company; HR managers and employees are
    attached to the configured default company.
    """
    role = role_for_email(claims.email, settings)
    company_id = None if role is Role.ADMIN else settings.default_company_id
    return AuthenticatedUser(
        user_id=claims.uid,
        name=claims.display_name or "User",
        email=claims.email or "N/A",
        role=role,
        avatar_url=claims.photo_url or avatar_url_for(claims.uid),
        company_id=company_id,
    )


def development_user(settings: Settings) -> AuthenticatedUser:
    """Admin used when no identity provider is configured."""
    return AuthenticatedUser(
        user_id=DEV_USER_ID,
        name="FitBusiness Admin",
        email=f"admin@{settings.admin_email_domain}",
        role=Role.ADMIN,
        avatar_url=avatar_url_for(DEV_USER_ID),
    )
