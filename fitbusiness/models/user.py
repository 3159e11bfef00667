"""The authenticated user record received from the identity provider."""

from __future__ import annotations

from pydantic import BaseModel

from fitbusiness.models.enums import Role


class AuthenticatedUser(BaseModel):
    user_id: str
    name: str
    email: str
    role: Role
    avatar_url: str = ""
    company_id: str | None = None
