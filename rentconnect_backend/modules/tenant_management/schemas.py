"""Tenant management schemas.

Inputs are deliberately lenient (mostly optional, unconstrained) so that the
household validator can report every problem at once instead of the request
failing on the first malformed field.
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from ..documents.schemas import DocumentPayload, DocumentResponse
from .models import AgreementState, Gender

# ----- Validation -----


class FieldError(BaseModel):
    """A validation problem tied to one input field."""

    field: str
    message: str


# ----- Household creation -----


class TenantInput(BaseModel):
    """Personal details of one household member."""

    name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    alternate_phone_number: str | None = None
    dob: date | None = None
    gender: Gender | None = None
    occupation: str | None = None
    employer_name: str | None = None
    monthly_income: Decimal | None = None
    current_address: str | None = None
    permanent_address: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relation: str | None = None
    aadhaar_number: str | None = None
    pan_number: str | None = None
    is_primary: bool = False
    documents: list[DocumentPayload] = Field(default_factory=list)


class TenancyTerms(BaseModel):
    """Terms applied uniformly to every member of a household."""

    landlord_id: int
    property_id: int | None = None
    rent_amount: Decimal | None = None
    security_deposit: Decimal | None = None
    maintenance_charges: Decimal | None = None
    tenancy_start_date: date | None = None
    tenancy_end_date: date | None = None
    rent_due_date: date | None = None
    lease_duration: int | None = None
    notice_period: int | None = None


class TenantDraft(TenantInput, TenancyTerms):
    """A member's details with the household terms applied: what gets validated."""

    pass


class TenantCreateRequest(TenancyTerms):
    """Create a household of one or more tenants."""

    tenants: list[TenantInput] = Field(default_factory=list)

    def drafts(
        self, default_lease_duration: int = 12, default_notice_period: int = 30
    ) -> list[TenantDraft]:
        """Apply the shared terms to every member."""
        terms = self.model_dump(exclude={"tenants"})
        if not terms["lease_duration"] or terms["lease_duration"] <= 0:
            terms["lease_duration"] = default_lease_duration
        if not terms["notice_period"] or terms["notice_period"] <= 0:
            terms["notice_period"] = default_notice_period
        return [
            TenantDraft(
                **tenant.model_dump(exclude={"documents"}),
                **terms,
                documents=tenant.documents,
            )
            for tenant in self.tenants
        ]


# ----- Responses -----


class TenantResponse(BaseModel):
    """A materialized tenant record."""

    id: int
    landlord_id: int
    property_id: int
    property_name: str | None = None
    tenant_group_id: int
    name: str
    email: str | None = None
    phone_number: str | None = None
    alternate_phone_number: str | None = None
    dob: date | None = None
    age: int | None = None
    gender: Gender | None = None
    occupation: str | None = None
    employer_name: str | None = None
    aadhaar_number: str | None = None
    pan_number: str | None = None
    tenancy_start_date: date | None = None
    tenancy_end_date: date | None = None
    rent_due_date: date | None = None
    rent_amount: Decimal | None = None
    security_deposit: Decimal | None = None
    maintenance_charges: Decimal | None = None
    lease_duration: int
    notice_period: int
    is_primary: bool
    is_active: bool
    is_new_tenant: bool
    is_verified: bool
    is_acknowledge: bool
    needs_onboarding: bool
    onboarding_email_sent: bool
    onboarding_email_date: datetime | None = None
    onboarding_completed: bool
    agreement_state: AgreementState
    agreement_signed: bool
    agreement_date: datetime | None = None
    agreement_url: str | None = None
    agreement_email_sent: bool
    agreement_email_date: datetime | None = None
    agreement_accepted: bool
    agreement_accepted_date: datetime | None = None
    agreement_accepted_by: str | None = None
    documents: list[DocumentResponse] = Field(default_factory=list)
    created_at: datetime | None = None

    class Config:
        from_attributes = True

    @classmethod
    def from_tenant(cls, tenant) -> "TenantResponse":
        """Build from a Tenant loaded with its property and documents."""
        response = cls.model_validate(tenant)
        if tenant.rental_property is not None:
            response.property_name = tenant.rental_property.title
        return response


class TenantSaveResponse(BaseModel):
    """Outcome of a household write."""

    success: bool
    message: str
    errors: list[FieldError] = Field(default_factory=list)
    tenants: list[TenantResponse] = Field(default_factory=list)


class TenantStatistics(BaseModel):
    """Per-landlord tenant counts and rent totals."""

    total: int = 0
    active: int = 0
    inactive: int = 0
    pending_onboarding: int = 0
    total_monthly_rent: Decimal = Decimal("0")
    average_rent: Decimal = Decimal("0")


# ----- Onboarding -----


class OnboardingByIdsRequest(BaseModel):
    tenant_ids: list[int] = Field(..., min_length=1)


# ----- Agreements -----


class AgreementCreateRequest(BaseModel):
    """Agreement terms; dates arrive as text and are parsed by the workflow."""

    tenant_id: int
    start_date: str
    end_date: str
    rent_amount: Decimal = Field(..., gt=0)
    security_deposit: Decimal = Field(default=Decimal("0"), ge=0)


class AgreementStatus(BaseModel):
    """Agreement progress as seen by one household member."""

    tenant_id: int
    tenant_name: str
    tenant_group_id: int
    is_primary_tenant: bool
    state: AgreementState
    agreement_created: bool
    agreement_date: datetime | None = None
    agreement_url: str | None = None
    agreement_email_sent: bool
    agreement_email_date: datetime | None = None
    agreement_accepted: bool
    agreement_accepted_date: datetime | None = None
    agreement_accepted_by: str | None = None
    household_agreement_accepted: bool = False
    can_accept_agreement: bool
    can_login: bool
    message: str


# ----- Children -----


class TenantChildBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    dob: date
    occupation: str | None = Field(None, max_length=120)


class TenantChildCreate(TenantChildBase):
    pass


class TenantChildUpdate(BaseModel):
    """Schema for updating a child; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    dob: date | None = None
    occupation: str | None = Field(None, max_length=120)


class TenantChildResponse(TenantChildBase):
    id: int
    tenant_group_id: int
    age: int | None = None

    class Config:
        from_attributes = True
