"""Onboarding eligibility and onboarding emails.

Eligibility is recomputed from the database on every call, so a tenant who
turns 18 becomes eligible without any scheduled job.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.logging import get_logger
from ...core.result import Result, operation_boundary
from ...core.unit_of_work import UnitOfWork
from ...core.utils import add_years, today, utc_now
from ..notifications import Notifier
from ..notifications.emails import (
    ONBOARDING_SUBJECT,
    onboarding_body,
    onboarding_confirmation_url,
)
from . import crud
from .models import Tenant
from .schemas import TenantResponse

logger = get_logger(__name__)


def adult_birth_cutoff(on: date | None = None) -> date:
    """Latest date of birth that counts as an adult on ``on``."""
    return add_years(on or today(), -settings.onboarding_min_age)


async def find_eligible_for_onboarding(
    db: AsyncSession, landlord_id: int, property_id: int
) -> list[Tenant]:
    """Active adults with an email who have not been onboarded yet."""
    return await crud.get_onboarding_candidates(
        db,
        born_on_or_before=adult_birth_cutoff(),
        landlord_id=landlord_id,
        property_id=property_id,
    )


@operation_boundary("Failed to get eligible tenants")
async def get_eligible_tenants_for_onboarding(
    uow: UnitOfWork, landlord_id: int, property_id: int
) -> Result[list[TenantResponse]]:
    tenants = await find_eligible_for_onboarding(uow.session, landlord_id, property_id)
    return Result.success(
        [TenantResponse.from_tenant(t) for t in tenants],
        f"Found {len(tenants)} tenant(s) eligible for onboarding",
    )


async def _deliver(
    uow: UnitOfWork, tenants: list[Tenant], notifier: Notifier
) -> int:
    """Email each tenant, then record every delivery in one transaction.

    A tenant whose email raised or was refused keeps ``needs_onboarding`` so a
    later call retries it.
    """
    await uow.release_connection()
    delivered: list[Tenant] = []
    for tenant in tenants:
        url = onboarding_confirmation_url(settings.frontend_url, tenant.email)
        title = tenant.rental_property.title if tenant.rental_property else None
        try:
            accepted = await notifier.send_email(
                tenant.email, ONBOARDING_SUBJECT, onboarding_body(tenant.name, title, url)
            )
        except Exception as exc:
            logger.warning(f"Onboarding email to tenant {tenant.id} failed: {exc}")
            continue
        if not accepted:
            logger.warning(f"Onboarding email to tenant {tenant.id} was refused")
            continue
        delivered.append(tenant)

    if delivered:
        sent_at = utc_now()
        async with uow.transaction() as db:
            for tenant in delivered:
                await crud.update_tenant(
                    db,
                    tenant,
                    onboarding_email_sent=True,
                    onboarding_email_date=sent_at,
                    needs_onboarding=False,
                )

    if len(delivered) < len(tenants):
        logger.warning(
            f"Onboarding emails delivered to {len(delivered)} of {len(tenants)} tenant(s)"
        )
    return len(delivered)


@operation_boundary("Failed to send onboarding emails")
async def send_onboarding_emails(
    uow: UnitOfWork, landlord_id: int, property_id: int, notifier: Notifier
) -> Result[int]:
    """Send onboarding emails to every currently eligible tenant of a property."""
    tenants = await find_eligible_for_onboarding(uow.session, landlord_id, property_id)
    sent = await _deliver(uow, tenants, notifier)
    logger.info(
        f"Sent {sent} onboarding email(s) for landlord {landlord_id}, property {property_id}"
    )
    return Result.success(sent, f"Sent {sent} onboarding email(s)")


@operation_boundary("Failed to send onboarding emails")
async def send_onboarding_emails_by_ids(
    uow: UnitOfWork, tenant_ids: list[int], notifier: Notifier
) -> Result[int]:
    """Same as send_onboarding_emails, limited to the given tenants.

    Only households whose primary tenant accepted the agreement are emailed.
    """
    db = uow.session
    candidates = await crud.get_onboarding_candidates(
        db, born_on_or_before=adult_birth_cutoff(), tenant_ids=tenant_ids
    )
    accepted_groups = await crud.get_groups_with_accepted_agreement(
        db, {t.tenant_group_id for t in candidates}
    )
    tenants = [t for t in candidates if t.tenant_group_id in accepted_groups]
    skipped = len(set(tenant_ids)) - len(tenants)
    if skipped:
        logger.info(f"{skipped} requested tenant(s) are not eligible for onboarding")
    sent = await _deliver(uow, tenants, notifier)
    return Result.success(sent, f"Sent {sent} onboarding email(s)")
