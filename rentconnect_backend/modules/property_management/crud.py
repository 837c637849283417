"""CRUD operations for landlords and properties."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .models import Landlord, Property, PropertyStatus


async def get_landlord_by_id(db: AsyncSession, landlord_id: int) -> Landlord | None:
    """Get a landlord by ID."""
    result = await db.execute(select(Landlord).where(Landlord.id == landlord_id))
    return result.scalar_one_or_none()


async def get_property_by_id(
    db: AsyncSession, property_id: int, include_landlord: bool = False
) -> Property | None:
    """Get a property by ID."""
    query = select(Property).where(Property.id == property_id)
    if include_landlord:
        query = query.options(selectinload(Property.landlord))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def update_property_status(
    db: AsyncSession, prop: Property, status: PropertyStatus
) -> Property:
    """Update a property's status."""
    prop.status = status
    await db.flush()
    return prop
