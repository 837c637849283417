"""Tests for tenant lookups and administration."""

import base64
from decimal import Decimal

import pytest

from rentconnect_backend.core.result import ResultStatus
from rentconnect_backend.modules.documents.models import Document
from rentconnect_backend.modules.documents.schemas import DocumentPayload
from rentconnect_backend.modules.tenant_management import agreements, services
from rentconnect_backend.modules.tenant_management.models import Tenant
from rentconnect_backend.modules.tenant_management.schemas import AgreementCreateRequest


@pytest.fixture
async def household(new_uow, make_request, document_store, policy):
    async with new_uow() as uow:
        result = await services.create_tenants(uow, make_request(), document_store, policy)
    primary, member = result.entity.tenants
    return primary, member


async def accept_agreement(new_uow, tenant_id, notifier):
    request = AgreementCreateRequest(
        tenant_id=tenant_id,
        start_date="2025-11-01",
        end_date="2026-10-31",
        rent_amount=Decimal("25000"),
    )
    async with new_uow() as uow:
        await agreements.create_agreement(uow, request)
    async with new_uow() as uow:
        await agreements.send_agreement_email(uow, tenant_id, notifier)
    async with new_uow() as uow:
        result = await agreements.accept_agreement(uow, tenant_id, notifier)
    assert result.is_success


def payload(**overrides) -> DocumentPayload:
    data = {
        "category": "Employment Proof",
        "name": "offer-letter.pdf",
        "content": base64.b64encode(b"offer").decode(),
    }
    data.update(overrides)
    return DocumentPayload.model_validate(data)


class TestLookups:
    """Tests for reading tenants."""

    async def test_get_tenant(self, new_uow, seed, household):
        """Should return the tenant with its property name."""
        primary, _ = household
        async with new_uow() as uow:
            result = await services.get_tenant(uow, primary.id)

        assert result.status == ResultStatus.SUCCESS
        assert result.entity.name == "Asha Rao"
        assert result.entity.property_name == seed.property_title

    async def test_get_missing_tenant(self, new_uow, household):
        """Should report NotFound for an unknown id."""
        async with new_uow() as uow:
            result = await services.get_tenant(uow, 424242)
        assert result.status == ResultStatus.NOT_FOUND
        assert result.message == "Tenant with ID 424242 not found"

    async def test_by_property_and_landlord(self, new_uow, seed, household):
        """Should list the household under its property and landlord."""
        async with new_uow() as uow:
            by_property = await services.get_tenants_by_property(uow, seed.property_id)
        async with new_uow() as uow:
            by_landlord = await services.get_tenants_by_landlord(uow, seed.landlord_id)
        async with new_uow() as uow:
            other = await services.get_tenants_by_landlord(uow, seed.other_landlord_id)

        assert len(by_property.entity) == 2
        assert len(by_landlord.entity) == 2
        assert other.entity == []

    async def test_co_tenants(self, new_uow, household):
        """Should return the other active members only."""
        primary, member = household
        async with new_uow() as uow:
            result = await services.get_co_tenants(uow, primary.id)

        assert [t.id for t in result.entity] == [member.id]


class TestDeleteTenant:
    """Tests for soft and hard deletes."""

    async def test_soft_delete_before_tenancy(self, new_uow, household):
        """Should deactivate a tenant while the agreement is pending."""
        _, member = household
        async with new_uow() as uow:
            result = await services.delete_tenant(uow, member.id)
        async with new_uow() as uow:
            tenant = (await services.get_tenant(uow, member.id)).entity

        assert result.status == ResultStatus.SUCCESS
        assert tenant.is_active is False

    async def test_soft_delete_after_tenancy_started(self, new_uow, household, notifier):
        """Should refuse soft deletes once the primary accepted the agreement."""
        primary, member = household
        await accept_agreement(new_uow, primary.id, notifier)

        async with new_uow() as uow:
            as_primary = await services.delete_tenant(uow, primary.id)
        async with new_uow() as uow:
            as_member = await services.delete_tenant(uow, member.id)

        assert as_primary.message == (
            "Primary tenant cannot be deleted after tenancy has started."
        )
        assert as_member.message == "Hard delete required: tenancy already started."

    async def test_hard_delete_member(self, new_uow, household, document_store, count_rows):
        """Should remove the member row and its documents."""
        _, member = household
        async with new_uow() as uow:
            await services.upload_tenant_document(uow, member.id, payload(), document_store)
        async with new_uow() as uow:
            result = await services.hard_delete_tenant(uow, member.id)

        assert result.status == ResultStatus.SUCCESS
        assert await count_rows(Tenant) == 1
        assert await count_rows(Document) == 0

    async def test_hard_delete_primary_is_refused(self, new_uow, household, count_rows):
        """Should never remove the primary tenant."""
        primary, _ = household
        async with new_uow() as uow:
            result = await services.hard_delete_tenant(uow, primary.id)

        assert result.status == ResultStatus.FAILURE
        assert await count_rows(Tenant) == 2


class TestUploadDocument:
    """Tests for attaching a document to an existing tenant."""

    async def test_upload(self, new_uow, household, document_store):
        """Should store the file and return the new document."""
        primary, _ = household
        async with new_uow() as uow:
            result = await services.upload_tenant_document(
                uow, primary.id, payload(), document_store
            )

        assert result.status == ResultStatus.SUCCESS
        assert result.entity.category.value == "employment_proof"
        assert result.entity.owner_id == primary.id
        assert result.entity.url == document_store.stored[0][0]

    async def test_store_failure_fails_the_upload(self, new_uow, household, failing_document_store, count_rows):
        """Should fail instead of skipping when the store is down."""
        primary, _ = household
        async with new_uow() as uow:
            result = await services.upload_tenant_document(
                uow, primary.id, payload(), failing_document_store
            )

        assert result.status == ResultStatus.FAILURE
        assert await count_rows(Document) == 0


class TestStatistics:
    """Tests for per-landlord statistics."""

    async def test_counts_and_rent(self, new_uow, seed, household):
        """Should count active tenants and sum their rent."""
        _, member = household
        async with new_uow() as uow:
            await services.delete_tenant(uow, member.id)
        async with new_uow() as uow:
            result = await services.get_tenant_statistics(uow, seed.landlord_id)

        stats = result.entity
        assert (stats.total, stats.active, stats.inactive) == (2, 1, 1)
        assert stats.pending_onboarding == 1
        assert stats.total_monthly_rent == Decimal("25000")
        assert stats.average_rent == Decimal("25000.00")

    async def test_no_tenants(self, new_uow, seed):
        """Should return zeros for a landlord without tenants."""
        async with new_uow() as uow:
            result = await services.get_tenant_statistics(uow, seed.other_landlord_id)

        assert result.entity.total == 0
        assert result.entity.average_rent == Decimal("0")
