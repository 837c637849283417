"""Tenant management business logic services.

Household creation plus the day-to-day tenant lookups and administration.
Onboarding, agreements and children live in their own modules.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from ...config import settings
from ...core.exceptions import BusinessRuleError, DeliveryError, NotFoundError
from ...core.logging import get_logger
from ...core.result import Result, operation_boundary
from ...core.unit_of_work import UnitOfWork
from ...core.utils import normalize_phone, sanitize_string
from ..documents import crud as document_crud
from ..documents.owners import TenantOwner
from ..documents.schemas import DocumentPayload, DocumentResponse
from ..documents.storage import DocumentStore
from ..property_management import crud as property_crud
from ..property_management.models import PropertyStatus
from . import crud, group_identity
from .models import Tenant
from .schemas import (
    TenantCreateRequest,
    TenantDraft,
    TenantResponse,
    TenantSaveResponse,
    TenantStatistics,
)
from .validators import validate_group

logger = get_logger(__name__)


@dataclass(frozen=True)
class HouseholdPolicy:
    """Explicit choices for how household creation treats edge cases.

    auto_promote_primary: when no member is flagged primary, promote the
        first one instead of failing validation.
    attachments_are_best_effort: a document that cannot be stored is
        skipped (and logged) rather than rolling back the household.
    """

    auto_promote_primary: bool = False
    attachments_are_best_effort: bool = True
    default_lease_duration: int = 12
    default_notice_period: int = 30

    @classmethod
    def from_settings(cls) -> "HouseholdPolicy":
        return cls(
            auto_promote_primary=settings.auto_promote_primary_tenant,
            attachments_are_best_effort=settings.attachments_are_best_effort,
            default_lease_duration=settings.default_lease_duration_months,
            default_notice_period=settings.default_notice_period_days,
        )


async def require_tenant(
    db: AsyncSession, tenant_id: int, include_details: bool = False
) -> Tenant:
    """Load a tenant or raise NotFoundError."""
    tenant = await crud.get_tenant_by_id(db, tenant_id, include_details=include_details)
    if not tenant:
        raise NotFoundError(f"Tenant with ID {tenant_id} not found")
    return tenant


def _tenant_columns(draft: TenantDraft) -> dict:
    columns = draft.model_dump(exclude={"documents"})
    columns["name"] = sanitize_string(draft.name)
    columns["email"] = draft.email.strip()
    columns["phone_number"] = normalize_phone(draft.phone_number)
    columns["aadhaar_number"] = draft.aadhaar_number.replace(" ", "")
    columns["pan_number"] = draft.pan_number.strip().upper()
    return columns


async def _attach_documents(
    db: AsyncSession,
    tenant: Tenant,
    payloads: list[DocumentPayload],
    document_store: DocumentStore,
    best_effort: bool,
) -> int:
    """Store and record a member's documents; returns how many were saved."""
    owner = TenantOwner(tenant.id)
    saved = 0
    for payload in payloads:
        url = payload.url
        if payload.content is not None:
            try:
                url = await document_store.store(
                    payload.content, payload.name, owner, payload.category
                )
            except Exception as exc:
                if not best_effort:
                    raise DeliveryError(
                        "document store", f"store {payload.name}"
                    ) from exc
                logger.warning(
                    f"Skipping document '{payload.name}' for tenant {tenant.id}: {exc}"
                )
                continue

        await document_crud.create_document(
            db,
            owner=owner,
            category=payload.category,
            url=url,
            name=payload.name,
            content_type=payload.content_type,
            size=len(payload.content) if payload.content is not None else None,
            description=payload.description,
        )
        saved += 1
    return saved


# ----- Household creation -----


@operation_boundary("Failed to create tenants")
async def create_tenants(
    uow: UnitOfWork,
    request: TenantCreateRequest,
    document_store: DocumentStore,
    policy: HouseholdPolicy | None = None,
) -> Result[TenantSaveResponse]:
    """Validate and persist a whole household in one transaction."""
    policy = policy or HouseholdPolicy.from_settings()
    drafts = request.drafts(policy.default_lease_duration, policy.default_notice_period)

    if policy.auto_promote_primary and drafts and not any(d.is_primary for d in drafts):
        logger.warning(
            f"No primary tenant flagged; promoting '{drafts[0].name}' "
            f"for property {request.property_id}"
        )
        drafts[0].is_primary = True

    errors = validate_group(drafts)
    if errors:
        return Result.failure(
            "Validation failed",
            TenantSaveResponse(success=False, message="Validation failed", errors=errors),
        )

    db = uow.session
    prop = await property_crud.get_property_by_id(db, request.property_id)
    if not prop:
        raise NotFoundError(f"Property with ID {request.property_id} not found")
    if prop.landlord_id != request.landlord_id:
        raise BusinessRuleError(
            f"Property {prop.id} does not belong to landlord {request.landlord_id}"
        )

    group_id = group_identity.new_group_id()
    documents_saved = 0
    async with uow.transaction():
        await crud.create_tenant_group(
            db, group_id, landlord_id=request.landlord_id, property_id=prop.id
        )
        for draft in drafts:
            tenant = await crud.create_tenant(
                db,
                **_tenant_columns(draft),
                tenant_group_id=group_id,
                is_new_tenant=True,
                is_verified=False,
                is_acknowledge=False,
                needs_onboarding=True,
                is_active=True,
                onboarding_email_sent=False,
                agreement_signed=False,
                agreement_email_sent=False,
                agreement_accepted=False,
            )
            documents_saved += await _attach_documents(
                db,
                tenant,
                draft.documents,
                document_store,
                best_effort=policy.attachments_are_best_effort,
            )
        await property_crud.update_property_status(db, prop, PropertyStatus.LISTED)

    tenants = await crud.get_tenants_by_group(db, group_id, include_details=True)
    message = f"Successfully created {len(tenants)} tenant(s)"
    logger.info(
        f"Created household {group_id} with {len(tenants)} tenant(s) "
        f"and {documents_saved} document(s) for property {prop.id}"
    )
    return Result.success(
        TenantSaveResponse(
            success=True,
            message=message,
            tenants=[TenantResponse.from_tenant(t) for t in tenants],
        ),
        message,
    )


# ----- Lookups -----


@operation_boundary("Failed to get tenant")
async def get_tenant(uow: UnitOfWork, tenant_id: int) -> Result[TenantResponse]:
    tenant = await require_tenant(uow.session, tenant_id, include_details=True)
    return Result.success(TenantResponse.from_tenant(tenant))


@operation_boundary("Failed to get tenants")
async def get_tenants_by_property(
    uow: UnitOfWork, property_id: int
) -> Result[list[TenantResponse]]:
    tenants = await crud.get_tenants_by_property(uow.session, property_id)
    return Result.success([TenantResponse.from_tenant(t) for t in tenants])


@operation_boundary("Failed to get tenants")
async def get_tenants_by_landlord(
    uow: UnitOfWork, landlord_id: int
) -> Result[list[TenantResponse]]:
    tenants = await crud.get_tenants_by_landlord(uow.session, landlord_id)
    return Result.success([TenantResponse.from_tenant(t) for t in tenants])


@operation_boundary("Failed to get co-tenants")
async def get_co_tenants(
    uow: UnitOfWork, tenant_id: int
) -> Result[list[TenantResponse]]:
    """Other active members of the tenant's household."""
    tenant = await require_tenant(uow.session, tenant_id)
    members = await crud.get_tenants_by_group(
        uow.session, tenant.tenant_group_id, include_details=True
    )
    return Result.success(
        [
            TenantResponse.from_tenant(m)
            for m in members
            if m.id != tenant.id and m.is_active
        ]
    )


# ----- Administration -----


@operation_boundary("Failed to delete tenant")
async def delete_tenant(uow: UnitOfWork, tenant_id: int) -> Result[bool]:
    """Deactivate a tenant unless the household's tenancy has started."""
    db = uow.session
    tenant = await require_tenant(db, tenant_id)

    primary = await crud.get_group_primary(db, tenant.tenant_group_id)
    if primary is not None and primary.agreement_accepted:
        if tenant.is_primary:
            raise BusinessRuleError(
                "Primary tenant cannot be deleted after tenancy has started."
            )
        raise BusinessRuleError("Hard delete required: tenancy already started.")

    async with uow.transaction():
        await crud.update_tenant(db, tenant, is_active=False)

    logger.info(f"Deactivated tenant {tenant_id}")
    return Result.success(True, "Tenant deleted successfully")


@operation_boundary("Failed to hard delete tenant")
async def hard_delete_tenant(uow: UnitOfWork, tenant_id: int) -> Result[bool]:
    """Remove a non-primary tenant and the documents it owns."""
    db = uow.session
    tenant = await require_tenant(db, tenant_id)
    if tenant.is_primary:
        raise BusinessRuleError("Primary tenant cannot be deleted, even with hard delete.")

    async with uow.transaction():
        removed = await document_crud.delete_documents_for_owner(
            db, TenantOwner(tenant.id)
        )
        await crud.delete_tenant(db, tenant)

    logger.warning(f"Hard deleted tenant {tenant_id} and {removed} document(s)")
    return Result.success(True, "Tenant permanently deleted")


@operation_boundary("Failed to upload document")
async def upload_tenant_document(
    uow: UnitOfWork,
    tenant_id: int,
    payload: DocumentPayload,
    document_store: DocumentStore,
) -> Result[DocumentResponse]:
    """Attach one document to an existing tenant; storage failures fail the call."""
    db = uow.session
    tenant = await require_tenant(db, tenant_id)

    async with uow.transaction():
        await _attach_documents(db, tenant, [payload], document_store, best_effort=False)

    documents = await document_crud.get_documents_for_owner(db, TenantOwner(tenant.id))
    return Result.success(
        DocumentResponse.model_validate(documents[0]), "Document uploaded successfully"
    )


@operation_boundary("Failed to get tenant statistics")
async def get_tenant_statistics(
    uow: UnitOfWork, landlord_id: int
) -> Result[TenantStatistics]:
    tenants = await crud.get_tenants_by_landlord(uow.session, landlord_id)
    active = [t for t in tenants if t.is_active]
    total_rent = sum((t.rent_amount or Decimal("0") for t in active), Decimal("0"))
    average = (
        (total_rent / len(active)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if active
        else Decimal("0")
    )
    return Result.success(
        TenantStatistics(
            total=len(tenants),
            active=len(active),
            inactive=len(tenants) - len(active),
            pending_onboarding=sum(1 for t in active if t.needs_onboarding),
            total_monthly_rent=total_rent,
            average_rent=average,
        )
    )
