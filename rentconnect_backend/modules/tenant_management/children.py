"""Children recorded against a household.

Children are addressed through any member of the household; a child from
another household is reported as not found.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from ...core.exceptions import NotFoundError
from ...core.logging import get_logger
from ...core.result import Result, operation_boundary
from ...core.unit_of_work import UnitOfWork
from ...core.utils import sanitize_string
from . import crud
from .models import TenantChild
from .schemas import TenantChildCreate, TenantChildResponse, TenantChildUpdate
from .services import require_tenant

logger = get_logger(__name__)


async def _resolve_group(db: AsyncSession, tenant_id: int) -> int:
    tenant = await require_tenant(db, tenant_id)
    group = await crud.get_tenant_group_by_id(db, tenant.tenant_group_id)
    if not group:
        raise NotFoundError(f"Household for tenant {tenant_id} not found")
    return group.id


async def _require_child(db: AsyncSession, tenant_id: int, child_id: int) -> TenantChild:
    group_id = await _resolve_group(db, tenant_id)
    child = await crud.get_child_in_group(db, child_id, group_id)
    if not child:
        raise NotFoundError(f"Child with ID {child_id} not found")
    return child


@operation_boundary("Failed to get children")
async def list_children(
    uow: UnitOfWork, tenant_id: int
) -> Result[list[TenantChildResponse]]:
    group_id = await _resolve_group(uow.session, tenant_id)
    children = await crud.get_children_by_group(uow.session, group_id)
    return Result.success([TenantChildResponse.model_validate(c) for c in children])


@operation_boundary("Failed to add child")
async def add_child(
    uow: UnitOfWork, tenant_id: int, data: TenantChildCreate
) -> Result[TenantChildResponse]:
    db = uow.session
    group_id = await _resolve_group(db, tenant_id)

    values = data.model_dump()
    values["name"] = sanitize_string(values["name"])
    async with uow.transaction():
        child = await crud.create_child(db, group_id, **values)

    logger.info(f"Added child {child.id} to household {group_id}")
    return Result.success(
        TenantChildResponse.model_validate(child), "Child added successfully"
    )


@operation_boundary("Failed to update child")
async def update_child(
    uow: UnitOfWork, tenant_id: int, child_id: int, data: TenantChildUpdate
) -> Result[TenantChildResponse]:
    db = uow.session
    child = await _require_child(db, tenant_id, child_id)

    values = data.model_dump(exclude_unset=True)
    if values.get("name") is not None:
        values["name"] = sanitize_string(values["name"])
    # name and dob are required columns
    values = {
        k: v for k, v in values.items() if v is not None or k not in ("name", "dob")
    }
    async with uow.transaction():
        await crud.update_child(db, child, **values)

    return Result.success(
        TenantChildResponse.model_validate(child), "Child updated successfully"
    )


@operation_boundary("Failed to delete child")
async def delete_child(uow: UnitOfWork, tenant_id: int, child_id: int) -> Result[bool]:
    db = uow.session
    child = await _require_child(db, tenant_id, child_id)

    async with uow.transaction():
        await crud.delete_child(db, child)

    logger.info(f"Deleted child {child_id} from household {child.tenant_group_id}")
    return Result.success(True, "Child deleted successfully")
