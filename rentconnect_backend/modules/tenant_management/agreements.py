"""Rental agreement workflow.

A tenant's agreement only moves forward: not created, created, emailed,
accepted. Only the household primary accepts, and acceptance covers every
member of the household.
"""

from datetime import date, datetime

from ...config import settings
from ...core.exceptions import BusinessRuleError, DeliveryError, ValidationError
from ...core.logging import get_logger
from ...core.result import Result, operation_boundary
from ...core.unit_of_work import UnitOfWork
from ...core.utils import utc_now
from ..notifications import Notifier
from ..notifications.emails import (
    AGREEMENT_CREATED_SUBJECT,
    agreement_accepted_body,
    agreement_accepted_subject,
    agreement_created_body,
)
from ..property_management import crud as property_crud
from . import crud
from .models import AgreementState, Tenant
from .schemas import AgreementCreateRequest, AgreementStatus
from .services import require_tenant

logger = get_logger(__name__)


def parse_agreement_date(value: str, field: str) -> date:
    """Parse ``YYYY-MM-DD`` or a full ISO timestamp."""
    text = (value or "").strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field}: {exc}", field=field, value=value
        ) from exc


def agreement_url_for(tenant_id: int, created_at: datetime) -> str:
    return f"{settings.agreement_url_prefix}agreement_{tenant_id}_{created_at:%Y%m%d}.pdf"


@operation_boundary("Failed to create agreement")
async def create_agreement(
    uow: UnitOfWork, request: AgreementCreateRequest
) -> Result[str]:
    """Record the agreement terms and return the agreement URL.

    Recreating an agreement before acceptance replaces its terms, and the new
    terms have to be emailed again before they can be accepted.
    """
    db = uow.session
    tenant = await require_tenant(db, request.tenant_id)

    start_date = parse_agreement_date(request.start_date, "start_date")
    end_date = parse_agreement_date(request.end_date, "end_date")
    if end_date < start_date:
        raise ValidationError(
            "End date must not be before start date", field="end_date", value=request.end_date
        )
    if tenant.agreement_accepted:
        raise BusinessRuleError("Agreement has already been accepted")

    created_at = utc_now()
    url = agreement_url_for(tenant.id, created_at)
    async with uow.transaction():
        await crud.update_tenant(
            db,
            tenant,
            tenancy_start_date=start_date,
            tenancy_end_date=end_date,
            rent_amount=request.rent_amount,
            security_deposit=request.security_deposit,
            agreement_signed=True,
            agreement_date=created_at,
            agreement_url=url,
            agreement_email_sent=False,
            agreement_email_date=None,
        )

    logger.info(f"Created agreement for tenant {tenant.id}: {url}")
    return Result.success(url, "Agreement created successfully")


@operation_boundary("Failed to send agreement email")
async def send_agreement_email(
    uow: UnitOfWork, tenant_id: int, notifier: Notifier
) -> Result[bool]:
    db = uow.session
    tenant = await require_tenant(db, tenant_id, include_details=True)
    if not tenant.agreement_signed:
        raise BusinessRuleError("Agreement has not been created yet")
    if tenant.agreement_accepted:
        raise BusinessRuleError("Agreement has already been accepted")
    if not tenant.email:
        raise BusinessRuleError("Tenant has no email address")

    title = tenant.rental_property.title if tenant.rental_property else None
    body = agreement_created_body(
        tenant.name,
        title,
        tenant.agreement_url,
        start_date=str(tenant.tenancy_start_date),
        end_date=str(tenant.tenancy_end_date),
        rent_amount=str(tenant.rent_amount),
    )
    await uow.release_connection()
    try:
        accepted = await notifier.send_email(tenant.email, AGREEMENT_CREATED_SUBJECT, body)
    except Exception as exc:
        logger.warning(f"Agreement email to tenant {tenant.id} failed: {exc}")
        raise DeliveryError("notifier", "send agreement email") from exc
    if not accepted:
        raise DeliveryError("notifier", "send agreement email")

    async with uow.transaction():
        await crud.update_tenant(
            db, tenant, agreement_email_sent=True, agreement_email_date=utc_now()
        )
    return Result.success(True, "Agreement email sent successfully")


async def _notify_landlord(uow: UnitOfWork, tenant: Tenant, notifier: Notifier) -> None:
    prop = await property_crud.get_property_by_id(
        uow.session, tenant.property_id, include_landlord=True
    )
    await uow.release_connection()
    landlord = prop.landlord if prop else None
    if landlord is None or not landlord.email:
        logger.warning(f"No landlord email for tenant {tenant.id}; skipping notification")
        return

    title = prop.title if prop else None
    try:
        accepted = await notifier.send_email(
            landlord.email,
            agreement_accepted_subject(tenant.name, title),
            agreement_accepted_body(
                landlord.name,
                tenant.name,
                title,
                f"{tenant.agreement_accepted_date:%Y-%m-%d}",
            ),
        )
    except Exception as exc:
        logger.warning(f"Acceptance notification for tenant {tenant.id} failed: {exc}")
        return
    if not accepted:
        logger.warning(f"Acceptance notification for tenant {tenant.id} was refused")


@operation_boundary("Failed to accept agreement")
async def accept_agreement(
    uow: UnitOfWork, tenant_id: int, notifier: Notifier
) -> Result[bool]:
    """Primary tenant accepts the agreement; the landlord is told best effort."""
    db = uow.session
    tenant = await require_tenant(db, tenant_id)
    if not tenant.is_primary:
        raise BusinessRuleError("Only primary tenant can accept the agreement")
    if tenant.agreement_accepted:
        raise BusinessRuleError("Agreement has already been accepted")
    if not tenant.agreement_signed:
        raise BusinessRuleError("Agreement has not been created yet")
    if not tenant.agreement_email_sent:
        raise BusinessRuleError("Agreement has not been sent to the tenant yet")

    async with uow.transaction():
        await crud.update_tenant(
            db,
            tenant,
            agreement_accepted=True,
            agreement_accepted_date=utc_now(),
            agreement_accepted_by=tenant.name,
        )

    logger.info(f"Tenant {tenant.id} accepted the agreement for household {tenant.tenant_group_id}")
    await _notify_landlord(uow, tenant, notifier)
    return Result.success(True, "Agreement accepted successfully")


@operation_boundary("Failed to get agreement status")
async def get_agreement_status(
    uow: UnitOfWork, tenant_id: int
) -> Result[AgreementStatus]:
    db = uow.session
    tenant = await require_tenant(db, tenant_id)
    primary = (
        tenant
        if tenant.is_primary
        else await crud.get_group_primary(db, tenant.tenant_group_id)
    )

    created = tenant.agreement_signed
    household_accepted = bool(primary and primary.agreement_accepted)
    # A member whose own agreement was never created is not covered by the
    # household acceptance, so it never reads as accepted.
    accepted = household_accepted and created

    if accepted:
        message = "Agreement accepted. Full access granted."
    elif not created:
        message = "Agreement not yet created by landlord."
    elif tenant.is_primary:
        message = "Please accept the agreement to enable access for all family members."
    else:
        message = "Waiting for primary tenant to accept the agreement."

    status = AgreementStatus(
        tenant_id=tenant.id,
        tenant_name=tenant.name,
        tenant_group_id=tenant.tenant_group_id,
        is_primary_tenant=tenant.is_primary,
        state=AgreementState.ACCEPTED if accepted else tenant.agreement_state,
        agreement_created=created,
        agreement_date=tenant.agreement_date,
        agreement_url=tenant.agreement_url,
        agreement_email_sent=tenant.agreement_email_sent,
        agreement_email_date=tenant.agreement_email_date,
        agreement_accepted=accepted,
        agreement_accepted_date=primary.agreement_accepted_date if accepted else None,
        agreement_accepted_by=primary.agreement_accepted_by if accepted else None,
        household_agreement_accepted=household_accepted,
        can_accept_agreement=tenant.is_primary and created and not accepted,
        can_login=accepted,
        message=message,
    )
    return Result.success(status, message)
