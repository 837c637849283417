"""Tenant management models.

- Tenant groups (households) and their member tenants
- Onboarding and agreement state per tenant
- Children recorded against a household
"""

import enum
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    and_,
)
from sqlalchemy.orm import Mapped, foreign, mapped_column, relationship
from sqlalchemy.sql import func

from ...core.utils import calculate_age
from ...database import Base, TimestampMixin, enum_values
from ..documents.models import Document
from ..documents.owners import DocumentOwnerType
from ..property_management.models import Landlord, Property


class Gender(str, enum.Enum):
    """Gender values."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class AgreementState(str, enum.Enum):
    """Where a tenant is in the agreement workflow."""

    NOT_CREATED = "not_created"
    CREATED = "created"
    EMAIL_SENT = "email_sent"
    ACCEPTED = "accepted"


class TenantGroup(Base):
    """A household.

    The primary key is the allocated group id, so storage rejects a second
    household with the same id.
    """

    __tablename__ = "tenant_groups"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    landlord_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("landlords.id"), nullable=False
    )
    property_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("properties.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<TenantGroup(id={self.id}, property_id={self.property_id})>"


class Tenant(TimestampMixin, Base):
    """One occupant of a property, always a member of a household."""

    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    landlord_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("landlords.id"), nullable=False
    )
    property_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("properties.id"), nullable=False
    )
    tenant_group_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tenant_groups.id"), nullable=False
    )

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)
    alternate_phone_number: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    gender: Mapped[Gender | None] = mapped_column(
        Enum(Gender, values_callable=enum_values), nullable=True
    )
    occupation: Mapped[str | None] = mapped_column(String(120), nullable=True)
    employer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    monthly_income: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    current_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    permanent_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    emergency_contact_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    emergency_contact_phone: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )
    emergency_contact_relation: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )

    # Government ids
    aadhaar_number: Mapped[str | None] = mapped_column(String(12), nullable=True)
    pan_number: Mapped[str | None] = mapped_column(String(10), nullable=True)

    # Tenancy terms (shared by every member of the household)
    tenancy_start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    tenancy_end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    rent_due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    rent_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    security_deposit: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    maintenance_charges: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    lease_duration: Mapped[int] = mapped_column(Integer, default=12, nullable=False)
    notice_period: Mapped[int] = mapped_column(Integer, default=30, nullable=False)

    # Role flags
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_new_tenant: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_acknowledge: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    acknowledge_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Onboarding
    needs_onboarding: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    onboarding_email_sent: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    onboarding_email_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    onboarding_completed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Agreement
    agreement_signed: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    agreement_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    agreement_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    agreement_email_sent: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    agreement_email_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    agreement_accepted: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    agreement_accepted_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    agreement_accepted_by: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    # Relationships
    landlord: Mapped[Landlord] = relationship("Landlord")
    rental_property: Mapped[Property] = relationship("Property")
    documents: Mapped[list[Document]] = relationship(
        Document,
        primaryjoin=lambda: and_(
            foreign(Document.owner_id) == Tenant.id,
            Document.owner_type == DocumentOwnerType.TENANT,
        ),
        viewonly=True,
        order_by=Document.id,
    )

    __table_args__ = (
        CheckConstraint(
            "NOT agreement_accepted OR (agreement_signed AND agreement_email_sent)",
            name="ck_tenants_agreement_progression",
        ),
        Index("ix_tenants_group", "tenant_group_id"),
        Index("ix_tenants_landlord_property", "landlord_id", "property_id"),
        Index("ix_tenants_email", "email"),
    )

    @property
    def age(self) -> int | None:
        return calculate_age(self.dob)

    @property
    def agreement_state(self) -> AgreementState:
        if self.agreement_accepted:
            return AgreementState.ACCEPTED
        if self.agreement_email_sent:
            return AgreementState.EMAIL_SENT
        if self.agreement_signed:
            return AgreementState.CREATED
        return AgreementState.NOT_CREATED

    def __repr__(self) -> str:
        return (
            f"<Tenant(id={self.id}, name={self.name}, group={self.tenant_group_id}, "
            f"primary={self.is_primary})>"
        )


class TenantChild(TimestampMixin, Base):
    """A dependent recorded against a household rather than a single tenant."""

    __tablename__ = "tenant_children"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tenant_group_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("tenant_groups.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dob: Mapped[date] = mapped_column(Date, nullable=False)
    occupation: Mapped[str | None] = mapped_column(String(120), nullable=True)

    __table_args__ = (Index("ix_tenant_children_group", "tenant_group_id"),)

    @property
    def age(self) -> int | None:
        return calculate_age(self.dob)

    def __repr__(self) -> str:
        return f"<TenantChild(id={self.id}, name={self.name})>"
