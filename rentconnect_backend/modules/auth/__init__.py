"""Authentication module: bearer-token verification and role guards."""

from .dependencies import (
    AdminUser,
    CurrentUser,
    LandlordUser,
    ensure_landlord_access,
    get_current_user,
    require_role,
)
from .schemas import AuthenticatedUser, RoleSlug

__all__ = [
    "get_current_user",
    "require_role",
    "ensure_landlord_access",
    "CurrentUser",
    "AdminUser",
    "LandlordUser",
    "AuthenticatedUser",
    "RoleSlug",
]
