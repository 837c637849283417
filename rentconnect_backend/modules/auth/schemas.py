"""Authentication schemas.

Tokens are issued by the external identity service; this module only
describes the claims we rely on.
"""

import enum

from pydantic import BaseModel


class RoleSlug(str, enum.Enum):
    """Roles carried in the access token."""

    ADMIN = "admin"
    LANDLORD = "landlord"
    TENANT = "tenant"


class AuthenticatedUser(BaseModel):
    """Authenticated user context for request handling."""

    id: int
    email: str
    role_slug: RoleSlug
    landlord_id: int | None = None
    tenant_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role_slug == RoleSlug.ADMIN

    class Config:
        from_attributes = True
