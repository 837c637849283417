"""CRUD operations for tenant management module."""

from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import Tenant, TenantChild, TenantGroup

# ----- Tenant Group CRUD -----


async def create_tenant_group(
    db: AsyncSession, group_id: int, landlord_id: int, property_id: int
) -> TenantGroup:
    """Claim a household id by writing its row."""
    group = TenantGroup(id=group_id, landlord_id=landlord_id, property_id=property_id)
    db.add(group)
    await db.flush()
    return group


async def get_tenant_group_by_id(db: AsyncSession, group_id: int) -> TenantGroup | None:
    result = await db.execute(select(TenantGroup).where(TenantGroup.id == group_id))
    return result.scalar_one_or_none()


# ----- Tenant CRUD -----


def _with_details(query):
    return query.options(
        selectinload(Tenant.rental_property),
        selectinload(Tenant.documents),
    ).execution_options(populate_existing=True)


async def get_tenant_by_id(
    db: AsyncSession, tenant_id: int, include_details: bool = False
) -> Tenant | None:
    """Get a tenant by ID."""
    query = select(Tenant).where(Tenant.id == tenant_id)
    if include_details:
        query = _with_details(query)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_tenants_by_ids(
    db: AsyncSession, tenant_ids: list[int], include_details: bool = False
) -> list[Tenant]:
    query = select(Tenant).where(Tenant.id.in_(tenant_ids)).order_by(Tenant.id)
    if include_details:
        query = _with_details(query)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_tenants_by_group(
    db: AsyncSession, group_id: int, include_details: bool = False
) -> list[Tenant]:
    """Get every member of a household, primary first."""
    query = (
        select(Tenant)
        .where(Tenant.tenant_group_id == group_id)
        .order_by(Tenant.is_primary.desc(), Tenant.id)
    )
    if include_details:
        query = _with_details(query)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_group_primary(db: AsyncSession, group_id: int) -> Tenant | None:
    result = await db.execute(
        select(Tenant).where(
            Tenant.tenant_group_id == group_id, Tenant.is_primary.is_(True)
        )
    )
    return result.scalars().first()


async def get_groups_with_accepted_agreement(
    db: AsyncSession, group_ids: set[int]
) -> set[int]:
    """Households whose primary tenant has accepted the agreement."""
    if not group_ids:
        return set()
    result = await db.execute(
        select(Tenant.tenant_group_id).where(
            Tenant.tenant_group_id.in_(group_ids),
            Tenant.is_primary.is_(True),
            Tenant.agreement_accepted.is_(True),
        )
    )
    return set(result.scalars().all())


async def get_tenants_by_property(
    db: AsyncSession, property_id: int, active_only: bool = True
) -> list[Tenant]:
    query = select(Tenant).where(Tenant.property_id == property_id)
    if active_only:
        query = query.where(Tenant.is_active.is_(True))
    result = await db.execute(_with_details(query).order_by(Tenant.id))
    return list(result.scalars().all())


async def get_tenants_by_landlord(
    db: AsyncSession, landlord_id: int, active_only: bool = False
) -> list[Tenant]:
    query = select(Tenant).where(Tenant.landlord_id == landlord_id)
    if active_only:
        query = query.where(Tenant.is_active.is_(True))
    result = await db.execute(_with_details(query).order_by(Tenant.id))
    return list(result.scalars().all())


async def get_onboarding_candidates(
    db: AsyncSession,
    born_on_or_before: date,
    landlord_id: int | None = None,
    property_id: int | None = None,
    tenant_ids: list[int] | None = None,
) -> list[Tenant]:
    """Active adult tenants with an email who still need onboarding."""
    query = select(Tenant).where(
        Tenant.is_active.is_(True),
        Tenant.needs_onboarding.is_(True),
        Tenant.email.is_not(None),
        Tenant.email != "",
        Tenant.dob.is_not(None),
        Tenant.dob <= born_on_or_before,
    )
    if landlord_id is not None:
        query = query.where(Tenant.landlord_id == landlord_id)
    if property_id is not None:
        query = query.where(Tenant.property_id == property_id)
    if tenant_ids is not None:
        query = query.where(Tenant.id.in_(tenant_ids))
    result = await db.execute(_with_details(query).order_by(Tenant.id))
    return list(result.scalars().all())


async def create_tenant(db: AsyncSession, **kwargs) -> Tenant:
    """Create a tenant row."""
    tenant = Tenant(**kwargs)
    db.add(tenant)
    await db.flush()
    return tenant


async def update_tenant(db: AsyncSession, tenant: Tenant, **kwargs) -> Tenant:
    """Update a tenant."""
    for key, value in kwargs.items():
        setattr(tenant, key, value)
    await db.flush()
    return tenant


async def delete_tenant(db: AsyncSession, tenant: Tenant) -> None:
    """Remove a tenant row (administrative hard delete)."""
    await db.delete(tenant)
    await db.flush()


# ----- Tenant Child CRUD -----


async def get_children_by_group(db: AsyncSession, group_id: int) -> list[TenantChild]:
    result = await db.execute(
        select(TenantChild)
        .where(TenantChild.tenant_group_id == group_id)
        .order_by(TenantChild.id)
    )
    return list(result.scalars().all())


async def get_child_in_group(
    db: AsyncSession, child_id: int, group_id: int
) -> TenantChild | None:
    """Get a child only if it belongs to the given household."""
    result = await db.execute(
        select(TenantChild).where(
            TenantChild.id == child_id, TenantChild.tenant_group_id == group_id
        )
    )
    return result.scalar_one_or_none()


async def create_child(db: AsyncSession, group_id: int, **kwargs) -> TenantChild:
    child = TenantChild(tenant_group_id=group_id, **kwargs)
    db.add(child)
    await db.flush()
    return child


async def update_child(db: AsyncSession, child: TenantChild, **kwargs) -> TenantChild:
    for key, value in kwargs.items():
        setattr(child, key, value)
    await db.flush()
    return child


async def delete_child(db: AsyncSession, child: TenantChild) -> None:
    await db.delete(child)
    await db.flush()
