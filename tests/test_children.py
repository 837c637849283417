"""Tests for children recorded against a household."""

from datetime import date

import pytest

from rentconnect_backend.core.result import ResultStatus
from rentconnect_backend.modules.tenant_management import children, services
from rentconnect_backend.modules.tenant_management.models import TenantChild
from rentconnect_backend.modules.tenant_management.schemas import (
    TenantChildCreate,
    TenantChildUpdate,
)


@pytest.fixture
async def households(new_uow, make_request, make_member, document_store, policy):
    """Two households on the seeded property."""
    async with new_uow() as uow:
        first = await services.create_tenants(uow, make_request(), document_store, policy)
    async with new_uow() as uow:
        second = await services.create_tenants(
            uow,
            make_request(
                tenants=[make_member("Dev Shah", "dev.shah@rentmail.in", "9812345680", True)]
            ),
            document_store,
            policy,
        )
    return first.entity.tenants, second.entity.tenants


def child_data(name: str = "Tara Rao") -> TenantChildCreate:
    return TenantChildCreate(name=name, dob=date(2016, 3, 9), occupation="Student")


class TestChildRegistry:
    """Tests for the household child registry."""

    async def test_children_are_shared_by_the_household(self, new_uow, households):
        """Should list a child added through one member for every member."""
        (primary, member), _ = households
        async with new_uow() as uow:
            added = await children.add_child(uow, primary.id, child_data())
        async with new_uow() as uow:
            listed = await children.list_children(uow, member.id)

        assert added.status == ResultStatus.SUCCESS
        assert added.entity.tenant_group_id == primary.tenant_group_id
        assert added.entity.age is not None
        assert [c.name for c in listed.entity] == ["Tara Rao"]

    async def test_other_household_sees_nothing(self, new_uow, households):
        """Should not list another household's children."""
        (primary, _), (other,) = households
        async with new_uow() as uow:
            await children.add_child(uow, primary.id, child_data())
        async with new_uow() as uow:
            listed = await children.list_children(uow, other.id)

        assert listed.entity == []

    async def test_update_only_given_fields(self, new_uow, households):
        """Should change only the fields that were sent."""
        (primary, member), _ = households
        async with new_uow() as uow:
            added = await children.add_child(uow, primary.id, child_data())
        async with new_uow() as uow:
            updated = await children.update_child(
                uow, member.id, added.entity.id, TenantChildUpdate(occupation="Dancer")
            )

        assert updated.status == ResultStatus.SUCCESS
        assert updated.entity.occupation == "Dancer"
        assert updated.entity.name == "Tara Rao"

    async def test_child_of_other_household_is_not_found(self, new_uow, households, count_rows):
        """Should hide a child that belongs to a different household."""
        (primary, _), (other,) = households
        async with new_uow() as uow:
            added = await children.add_child(uow, primary.id, child_data())

        async with new_uow() as uow:
            updated = await children.update_child(
                uow, other.id, added.entity.id, TenantChildUpdate(name="Someone Else")
            )
        async with new_uow() as uow:
            deleted = await children.delete_child(uow, other.id, added.entity.id)

        assert updated.status == ResultStatus.NOT_FOUND
        assert deleted.status == ResultStatus.NOT_FOUND
        assert await count_rows(TenantChild) == 1

    async def test_delete_child(self, new_uow, households, count_rows):
        """Should remove the child."""
        (primary, _), _ = households
        async with new_uow() as uow:
            added = await children.add_child(uow, primary.id, child_data())
        async with new_uow() as uow:
            result = await children.delete_child(uow, primary.id, added.entity.id)

        assert result.status == ResultStatus.SUCCESS
        assert await count_rows(TenantChild) == 0

    async def test_unknown_tenant_is_not_found(self, new_uow, households):
        """Should report NotFound when the tenant does not exist."""
        async with new_uow() as uow:
            listed = await children.list_children(uow, 424242)
        async with new_uow() as uow:
            added = await children.add_child(uow, 424242, child_data())

        assert listed.status == ResultStatus.NOT_FOUND
        assert added.status == ResultStatus.NOT_FOUND
