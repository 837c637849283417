"""Ownership checks for tenant routes.

Landlords reach only their own properties and tenants; a tenant reaches only
the members of their own household. Admins reach everything. A record that
does not exist passes through so the operation itself reports NotFound.
"""

from ...core.exceptions import PermissionDeniedError
from ...core.unit_of_work import UnitOfWork
from ..auth import AuthenticatedUser, RoleSlug, ensure_landlord_access
from ..property_management import crud as property_crud
from . import crud


async def ensure_tenant_access(
    uow: UnitOfWork, user: AuthenticatedUser, tenant_id: int
) -> None:
    if user.is_admin:
        return
    tenant = await crud.get_tenant_by_id(uow.session, tenant_id)
    if tenant is None:
        return

    if user.role_slug == RoleSlug.TENANT:
        if user.tenant_id == tenant.id:
            return
        own = (
            await crud.get_tenant_by_id(uow.session, user.tenant_id)
            if user.tenant_id is not None
            else None
        )
        if own is None or own.tenant_group_id != tenant.tenant_group_id:
            raise PermissionDeniedError("access", f"tenant {tenant_id}")
        return

    ensure_landlord_access(user, tenant.landlord_id)


async def ensure_tenants_access(
    uow: UnitOfWork, user: AuthenticatedUser, tenant_ids: list[int]
) -> None:
    """Every existing tenant in ``tenant_ids`` must belong to the landlord."""
    if user.is_admin:
        return
    for tenant in await crud.get_tenants_by_ids(uow.session, tenant_ids):
        ensure_landlord_access(user, tenant.landlord_id)


async def ensure_property_access(
    uow: UnitOfWork, user: AuthenticatedUser, property_id: int
) -> None:
    if user.is_admin:
        return
    prop = await property_crud.get_property_by_id(uow.session, property_id)
    if prop is not None:
        ensure_landlord_access(user, prop.landlord_id)
