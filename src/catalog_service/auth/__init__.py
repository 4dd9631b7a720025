"""Caller identity and ownership checks."""

from catalog_service.auth.dependencies import (
    CurrentUser,
    ensure_can_act_for,
    get_current_user,
    require_admin,
)


__all__ = ["CurrentUser", "ensure_can_act_for", "get_current_user", "require_admin"]
