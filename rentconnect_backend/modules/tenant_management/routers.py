"""Tenant management API routes."""

from fastapi import APIRouter

from ..auth.dependencies import AdminUser, CurrentUser, LandlordUser, ensure_landlord_access
from ..commons import BaseResponse, result_response
from ..documents.schemas import DocumentPayload, DocumentResponse
from . import agreements, children, onboarding, services
from .access import ensure_property_access, ensure_tenant_access, ensure_tenants_access
from .dependencies import DocumentStoreDep, NotifierDep, UoW
from .schemas import (
    AgreementCreateRequest,
    AgreementStatus,
    OnboardingByIdsRequest,
    TenantChildCreate,
    TenantChildResponse,
    TenantChildUpdate,
    TenantCreateRequest,
    TenantResponse,
    TenantSaveResponse,
    TenantStatistics,
)

router = APIRouter(prefix="/tenants", tags=["Tenants"])


# ----- Households -----


@router.post("/create", response_model=BaseResponse[TenantSaveResponse])
async def create_tenants(
    data: TenantCreateRequest,
    current_user: LandlordUser,
    uow: UoW,
    document_store: DocumentStoreDep,
):
    """Create a household of tenants for one property."""
    ensure_landlord_access(current_user, data.landlord_id)
    result = await services.create_tenants(uow, data, document_store)
    return result_response(result)


@router.get("/property/{property_id}", response_model=BaseResponse[list[TenantResponse]])
async def get_tenants_by_property(property_id: int, current_user: LandlordUser, uow: UoW):
    await ensure_property_access(uow, current_user, property_id)
    return result_response(await services.get_tenants_by_property(uow, property_id))


@router.get("/landlord/{landlord_id}", response_model=BaseResponse[list[TenantResponse]])
async def get_tenants_by_landlord(landlord_id: int, current_user: LandlordUser, uow: UoW):
    ensure_landlord_access(current_user, landlord_id)
    return result_response(await services.get_tenants_by_landlord(uow, landlord_id))


@router.get("/statistics/{landlord_id}", response_model=BaseResponse[TenantStatistics])
async def get_tenant_statistics(landlord_id: int, current_user: LandlordUser, uow: UoW):
    ensure_landlord_access(current_user, landlord_id)
    return result_response(await services.get_tenant_statistics(uow, landlord_id))


# ----- Onboarding -----


@router.get(
    "/onboarding/eligible/{landlord_id}/{property_id}",
    response_model=BaseResponse[list[TenantResponse]],
)
async def get_eligible_tenants(
    landlord_id: int, property_id: int, current_user: LandlordUser, uow: UoW
):
    """Tenants that would receive an onboarding email right now."""
    ensure_landlord_access(current_user, landlord_id)
    result = await onboarding.get_eligible_tenants_for_onboarding(
        uow, landlord_id, property_id
    )
    return result_response(result)


@router.post(
    "/onboarding/email/by-ids", response_model=BaseResponse[int]
)
async def send_onboarding_emails_by_ids(
    data: OnboardingByIdsRequest,
    current_user: LandlordUser,
    uow: UoW,
    notifier: NotifierDep,
):
    await ensure_tenants_access(uow, current_user, data.tenant_ids)
    result = await onboarding.send_onboarding_emails_by_ids(
        uow, data.tenant_ids, notifier
    )
    return result_response(result)


@router.post(
    "/onboarding/email/{landlord_id}/{property_id}", response_model=BaseResponse[int]
)
async def send_onboarding_emails(
    landlord_id: int,
    property_id: int,
    current_user: LandlordUser,
    uow: UoW,
    notifier: NotifierDep,
):
    """Email every eligible tenant of a property; returns the number sent."""
    ensure_landlord_access(current_user, landlord_id)
    result = await onboarding.send_onboarding_emails(
        uow, landlord_id, property_id, notifier
    )
    return result_response(result)


# ----- Agreements -----


@router.post("/agreement/create", response_model=BaseResponse[str])
async def create_agreement(
    data: AgreementCreateRequest, current_user: LandlordUser, uow: UoW
):
    await ensure_tenant_access(uow, current_user, data.tenant_id)
    return result_response(await agreements.create_agreement(uow, data))


@router.post("/agreement/email/{tenant_id}", response_model=BaseResponse[bool])
async def send_agreement_email(
    tenant_id: int, current_user: LandlordUser, uow: UoW, notifier: NotifierDep
):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(
        await agreements.send_agreement_email(uow, tenant_id, notifier)
    )


@router.post("/agreement/accept/{tenant_id}", response_model=BaseResponse[bool])
async def accept_agreement(
    tenant_id: int, current_user: CurrentUser, uow: UoW, notifier: NotifierDep
):
    """Accept the agreement on behalf of the household (primary tenant only)."""
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await agreements.accept_agreement(uow, tenant_id, notifier))


@router.get("/agreement/status/{tenant_id}", response_model=BaseResponse[AgreementStatus])
async def get_agreement_status(tenant_id: int, current_user: CurrentUser, uow: UoW):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await agreements.get_agreement_status(uow, tenant_id))


# ----- Single tenant -----


@router.get("/{tenant_id}", response_model=BaseResponse[TenantResponse])
async def get_tenant(tenant_id: int, current_user: CurrentUser, uow: UoW):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await services.get_tenant(uow, tenant_id))


@router.get("/{tenant_id}/co-tenants", response_model=BaseResponse[list[TenantResponse]])
async def get_co_tenants(tenant_id: int, current_user: CurrentUser, uow: UoW):
    """Other active members of the tenant's household."""
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await services.get_co_tenants(uow, tenant_id))


@router.delete("/{tenant_id}", response_model=BaseResponse[bool])
async def delete_tenant(tenant_id: int, current_user: LandlordUser, uow: UoW):
    """Deactivate a tenant (not allowed once the tenancy has started)."""
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await services.delete_tenant(uow, tenant_id))


@router.delete("/{tenant_id}/hard", response_model=BaseResponse[bool])
async def hard_delete_tenant(tenant_id: int, current_user: AdminUser, uow: UoW):
    """Permanently remove a non-primary tenant (admin only)."""
    return result_response(await services.hard_delete_tenant(uow, tenant_id))


@router.post("/{tenant_id}/documents", response_model=BaseResponse[DocumentResponse])
async def upload_tenant_document(
    tenant_id: int,
    data: DocumentPayload,
    current_user: CurrentUser,
    uow: UoW,
    document_store: DocumentStoreDep,
):
    await ensure_tenant_access(uow, current_user, tenant_id)
    result = await services.upload_tenant_document(uow, tenant_id, data, document_store)
    return result_response(result)


# ----- Children -----


@router.get(
    "/{tenant_id}/children", response_model=BaseResponse[list[TenantChildResponse]]
)
async def list_children(tenant_id: int, current_user: CurrentUser, uow: UoW):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await children.list_children(uow, tenant_id))


@router.post("/{tenant_id}/children", response_model=BaseResponse[TenantChildResponse])
async def add_child(
    tenant_id: int, data: TenantChildCreate, current_user: CurrentUser, uow: UoW
):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await children.add_child(uow, tenant_id, data))


@router.put(
    "/{tenant_id}/children/{child_id}",
    response_model=BaseResponse[TenantChildResponse],
)
async def update_child(
    tenant_id: int,
    child_id: int,
    data: TenantChildUpdate,
    current_user: CurrentUser,
    uow: UoW,
):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await children.update_child(uow, tenant_id, child_id, data))


@router.delete("/{tenant_id}/children/{child_id}", response_model=BaseResponse[bool])
async def delete_child(
    tenant_id: int, child_id: int, current_user: CurrentUser, uow: UoW
):
    await ensure_tenant_access(uow, current_user, tenant_id)
    return result_response(await children.delete_child(uow, tenant_id, child_id))
