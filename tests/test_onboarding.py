"""Tests for onboarding eligibility and onboarding emails."""

from datetime import timedelta
from decimal import Decimal

import pytest

from rentconnect_backend.core.result import ResultStatus
from rentconnect_backend.core.utils import add_years, today
from rentconnect_backend.modules.notifications.emails import ONBOARDING_SUBJECT
from rentconnect_backend.modules.tenant_management import (
    agreements,
    crud,
    onboarding,
    services,
)
from rentconnect_backend.modules.tenant_management.schemas import AgreementCreateRequest


@pytest.fixture
async def household(new_uow, make_request, make_member, document_store, policy):
    """Adult primary, a member turning 18 today and one a day short of 18."""
    eighteen_today = add_years(today(), -18)
    request = make_request(
        tenants=[
            make_member("Asha Rao", "asha.rao@rentmail.in", "9812345670", True),
            make_member("Nila Rao", "nila.rao@rentmail.in", "9812345671", dob=eighteen_today),
            make_member(
                "Kiran Rao",
                "kiran.rao@rentmail.in",
                "9812345672",
                dob=eighteen_today + timedelta(days=1),
            ),
        ]
    )
    async with new_uow() as uow:
        result = await services.create_tenants(uow, request, document_store, policy)
    assert result.is_success
    return {t.name: t for t in result.entity.tenants}


async def accept_household_agreement(new_uow, primary_id, notifier):
    request = AgreementCreateRequest(
        tenant_id=primary_id,
        start_date="2025-11-01",
        end_date="2026-10-31",
        rent_amount=Decimal("25000"),
    )
    async with new_uow() as uow:
        await agreements.create_agreement(uow, request)
    async with new_uow() as uow:
        await agreements.send_agreement_email(uow, primary_id, notifier)
    async with new_uow() as uow:
        result = await agreements.accept_agreement(uow, primary_id, notifier)
    assert result.is_success


def onboarding_mails(notifier):
    return [m for m in notifier.sent if m.subject == ONBOARDING_SUBJECT]


class TestEligibility:
    """Tests for find_eligible_for_onboarding."""

    async def test_eighteenth_birthday_boundary(self, new_uow, seed, household):
        """Should include a tenant who turns 18 today but not one a day younger."""
        async with new_uow() as uow:
            eligible = await onboarding.find_eligible_for_onboarding(
                uow.session, seed.landlord_id, seed.property_id
            )

        assert sorted(t.name for t in eligible) == ["Asha Rao", "Nila Rao"]

    async def test_scoped_to_landlord_and_property(self, new_uow, seed, household):
        """Should return nobody for another landlord's property."""
        async with new_uow() as uow:
            eligible = await onboarding.find_eligible_for_onboarding(
                uow.session, seed.other_landlord_id, seed.other_property_id
            )

        assert eligible == []

    async def test_inactive_tenants_are_excluded(self, new_uow, seed, household):
        """Should skip deactivated tenants."""
        async with new_uow() as uow:
            await services.delete_tenant(uow, household["Nila Rao"].id)

        async with new_uow() as uow:
            result = await onboarding.get_eligible_tenants_for_onboarding(
                uow, seed.landlord_id, seed.property_id
            )

        assert result.status == ResultStatus.SUCCESS
        assert [t.name for t in result.entity] == ["Asha Rao"]

    async def test_tenant_without_email_is_excluded(self, new_uow, seed, household):
        """Should skip tenants whose email was cleared."""
        async with new_uow() as uow:
            tenant = await crud.get_tenant_by_id(uow.session, household["Asha Rao"].id)
            async with uow.transaction() as db:
                await crud.update_tenant(db, tenant, email="")

        async with new_uow() as uow:
            eligible = await onboarding.find_eligible_for_onboarding(
                uow.session, seed.landlord_id, seed.property_id
            )

        assert [t.name for t in eligible] == ["Nila Rao"]


class TestSendOnboardingEmails:
    """Tests for send_onboarding_emails."""

    async def test_sends_to_eligible_tenants(self, new_uow, seed, household, notifier):
        """Should email every eligible tenant with the confirmation link."""
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert result.status == ResultStatus.SUCCESS
        assert result.entity == 2
        assert sorted(m.to_address for m in notifier.sent) == [
            "asha.rao@rentmail.in",
            "nila.rao@rentmail.in",
        ]
        mail = notifier.sent_to("asha.rao@rentmail.in")[0]
        assert mail.subject == ONBOARDING_SUBJECT
        assert (
            "https://app.rentconnect.in/Account/ResetPasswordTenant"
            "?email=asha.rao%40rentmail.in" in mail.html_body
        )

    async def test_marks_tenants_onboarded(self, new_uow, seed, household, notifier):
        """Should record the send on each delivered tenant."""
        async with new_uow() as uow:
            await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        async with new_uow() as uow:
            asha = await crud.get_tenant_by_id(uow.session, household["Asha Rao"].id)
            kiran = await crud.get_tenant_by_id(uow.session, household["Kiran Rao"].id)

        assert asha.onboarding_email_sent is True
        assert asha.needs_onboarding is False
        assert asha.onboarding_email_date is not None
        assert kiran.onboarding_email_sent is False
        assert kiran.needs_onboarding is True

    async def test_second_run_sends_nothing(self, new_uow, seed, household, notifier):
        """Should not email the same tenant twice."""
        async with new_uow() as uow:
            first = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )
        async with new_uow() as uow:
            second = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert first.entity == 2
        assert second.entity == 0
        assert len(notifier.sent) == 2

    async def test_partial_failure_counts_only_delivered(self, new_uow, seed, household, notifier):
        """Should keep going after a failed send and retry it next time."""
        notifier.fail_for.add("nila.rao@rentmail.in")
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert result.status == ResultStatus.SUCCESS
        assert result.entity == 1

        notifier.fail_for.clear()
        async with new_uow() as uow:
            retry = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert retry.entity == 1
        assert [m.to_address for m in notifier.sent] == [
            "asha.rao@rentmail.in",
            "nila.rao@rentmail.in",
        ]

    async def test_refused_send_is_not_counted(self, new_uow, seed, household, notifier):
        """Should treat a False return from the notifier as not sent."""
        notifier.refuse_for.add("asha.rao@rentmail.in")
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert result.entity == 1
        async with new_uow() as uow:
            asha = await crud.get_tenant_by_id(uow.session, household["Asha Rao"].id)
        assert asha.needs_onboarding is True

    async def test_no_transaction_open_while_sending(self, new_uow, seed, household):
        """Should end the read before talking to the mail transport."""

        class TransactionCheckingNotifier:
            def __init__(self, uow):
                self.uow = uow
                self.open_during_send: list[bool] = []

            async def send_email(self, to_address, subject, html_body, attachments=None):
                self.open_during_send.append(self.uow.session.in_transaction())
                return True

        async with new_uow() as uow:
            notifier = TransactionCheckingNotifier(uow)
            result = await onboarding.send_onboarding_emails(
                uow, seed.landlord_id, seed.property_id, notifier
            )

        assert result.entity == 2
        assert notifier.open_during_send == [False, False]


class TestSendOnboardingEmailsByIds:
    """Tests for send_onboarding_emails_by_ids."""

    async def test_requires_accepted_agreement(self, new_uow, household, notifier):
        """Should email nobody while the primary has not accepted the agreement."""
        ids = [household["Asha Rao"].id, household["Nila Rao"].id]
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails_by_ids(uow, ids, notifier)

        assert result.status == ResultStatus.SUCCESS
        assert result.entity == 0
        assert onboarding_mails(notifier) == []

    async def test_only_eligible_ids_are_emailed(self, new_uow, household, notifier):
        """Should skip requested tenants that are under age."""
        await accept_household_agreement(new_uow, household["Asha Rao"].id, notifier)
        ids = [household["Asha Rao"].id, household["Kiran Rao"].id]
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails_by_ids(uow, ids, notifier)

        assert result.entity == 1
        assert [m.to_address for m in onboarding_mails(notifier)] == ["asha.rao@rentmail.in"]

    async def test_accepted_household_members_are_emailed(self, new_uow, household, notifier):
        """Should email every eligible member once the primary accepted."""
        await accept_household_agreement(new_uow, household["Asha Rao"].id, notifier)
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails_by_ids(
                uow, [household["Nila Rao"].id], notifier
            )

        assert result.entity == 1
        assert [m.to_address for m in onboarding_mails(notifier)] == ["nila.rao@rentmail.in"]

    async def test_unknown_ids_send_nothing(self, new_uow, household, notifier):
        """Should succeed with zero sends for ids that do not exist."""
        async with new_uow() as uow:
            result = await onboarding.send_onboarding_emails_by_ids(uow, [999999], notifier)

        assert result.status == ResultStatus.SUCCESS
        assert result.entity == 0
        assert notifier.sent == []
