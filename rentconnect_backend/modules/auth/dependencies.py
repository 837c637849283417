"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ...core.exceptions import PermissionDeniedError
from .jwt_service import decode_access_token
from .schemas import AuthenticatedUser, RoleSlug

security = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> AuthenticatedUser:
    """Extract and validate current user from JWT token.

    All user info is in the token; no database call is made.
    """
    payload = decode_access_token(credentials.credentials)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return AuthenticatedUser(
            id=int(payload["sub"]),
            email=payload["email"],
            role_slug=payload["role"],
            landlord_id=payload.get("landlord_id"),
            tenant_id=payload.get("tenant_id"),
        )
    except (KeyError, ValueError) as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token payload: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_role(*allowed_roles: RoleSlug):
    """Dependency factory for role-based access control."""
    role_slugs = set(allowed_roles)

    async def role_checker(
        current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    ) -> AuthenticatedUser:
        if current_user.role_slug not in role_slugs:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Required roles: "
                + ", ".join(sorted(r.value for r in role_slugs)),
            )
        return current_user

    return role_checker


def ensure_landlord_access(user: AuthenticatedUser, landlord_id: int) -> None:
    """Landlords may only act on their own data; admins on anyone's."""
    if user.is_admin:
        return
    if user.role_slug != RoleSlug.LANDLORD or user.landlord_id != landlord_id:
        raise PermissionDeniedError("access", f"landlord {landlord_id} data")


# Type alias for dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
AdminUser = Annotated[AuthenticatedUser, Depends(require_role(RoleSlug.ADMIN))]
LandlordUser = Annotated[
    AuthenticatedUser, Depends(require_role(RoleSlug.ADMIN, RoleSlug.LANDLORD))
]
