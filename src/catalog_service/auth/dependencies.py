"""Caller identity dependencies.

Authentication happens upstream of this service: a trusted gateway sets the
caller's user id and roles as request headers. This module only reads them
and answers the ownership question the favorites endpoints need.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from pydantic import BaseModel

from catalog_service.core.config import Settings, get_settings
from catalog_service.core.exceptions import ForbiddenException, UnauthorizedException
from catalog_service.observability.logging import bind_context


class CurrentUser(BaseModel):
    """The identified caller."""

    id: str
    roles: list[str] = []

    def has_role(self, role: str) -> bool:
        return role in self.roles


def _request_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_current_user(request: Request) -> CurrentUser:
    """Build the caller from identity headers.

    Raises:
        UnauthorizedException: If the user id header is missing.
    """
    headers = _request_settings(request).auth.headers
    user_id = request.headers.get(headers.user_id, "").strip()
    if not user_id:
        msg = f"Missing required header: {headers.user_id}"
        raise UnauthorizedException(msg)

    roles_str = request.headers.get(headers.roles, "")
    roles = [r.strip() for r in roles_str.split(",") if r.strip()] or ["user"]

    bind_context(user_id=user_id)
    return CurrentUser(id=user_id, roles=roles)


def ensure_can_act_for(request: Request, user: CurrentUser, target_user_id: str) -> None:
    """Allow callers to act on their own data; admins on anyone's.

    Raises:
        ForbiddenException: If the caller is neither the owner nor an admin.
    """
    admin_role = _request_settings(request).auth.admin_role
    if user.id != target_user_id and not user.has_role(admin_role):
        raise ForbiddenException


async def require_admin(
    request: Request,
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency restricting an endpoint to the admin role."""
    if not user.has_role(_request_settings(request).auth.admin_role):
        raise ForbiddenException
    return user
