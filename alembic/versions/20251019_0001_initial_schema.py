"""Initial schema for the RentConnect tenant backend

Revision ID: 0001
Revises:
Create Date: 2025-10-19

Creates all tables for:
- Property Management (landlords, properties)
- Tenant Management (tenant_groups, tenants, tenant_children)
- Documents (documents)
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now(), onupdate=sa.func.now()),
    ]


def upgrade() -> None:
    """Create all tables."""

    # =====================
    # PROPERTY MANAGEMENT
    # =====================

    op.create_table(
        "landlords",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "properties",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("city", sa.String(120), nullable=True),
        sa.Column("status", sa.Enum("draft", "listed", "rented", "archived", name="propertystatus"), nullable=False, server_default="draft"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_properties_landlord", "properties", ["landlord_id"])

    # =====================
    # TENANT MANAGEMENT
    # =====================

    # tenant_groups - one row per household; id is allocated by the application
    op.create_table(
        "tenant_groups",
        sa.Column("id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.id"]),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"]),
    )

    op.create_table(
        "tenants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("landlord_id", sa.Integer(), nullable=False),
        sa.Column("property_id", sa.Integer(), nullable=False),
        sa.Column("tenant_group_id", sa.BigInteger(), nullable=False),
        # Identity
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone_number", sa.String(20), nullable=True),
        sa.Column("alternate_phone_number", sa.String(20), nullable=True),
        sa.Column("dob", sa.Date(), nullable=True),
        sa.Column("gender", sa.Enum("male", "female", "other", name="gender"), nullable=True),
        sa.Column("occupation", sa.String(120), nullable=True),
        sa.Column("employer_name", sa.String(255), nullable=True),
        sa.Column("monthly_income", sa.Numeric(12, 2), nullable=True),
        sa.Column("current_address", sa.Text(), nullable=True),
        sa.Column("permanent_address", sa.Text(), nullable=True),
        sa.Column("emergency_contact_name", sa.String(255), nullable=True),
        sa.Column("emergency_contact_phone", sa.String(20), nullable=True),
        sa.Column("emergency_contact_relation", sa.String(50), nullable=True),
        sa.Column("aadhaar_number", sa.String(12), nullable=True),
        sa.Column("pan_number", sa.String(10), nullable=True),
        # Tenancy terms
        sa.Column("tenancy_start_date", sa.Date(), nullable=True),
        sa.Column("tenancy_end_date", sa.Date(), nullable=True),
        sa.Column("rent_due_date", sa.Date(), nullable=True),
        sa.Column("rent_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("security_deposit", sa.Numeric(12, 2), nullable=True),
        sa.Column("maintenance_charges", sa.Numeric(12, 2), nullable=True),
        sa.Column("lease_duration", sa.Integer(), nullable=False, server_default="12"),
        sa.Column("notice_period", sa.Integer(), nullable=False, server_default="30"),
        # Role flags
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_new_tenant", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("is_acknowledge", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("acknowledge_date", sa.DateTime(timezone=True), nullable=True),
        # Onboarding
        sa.Column("needs_onboarding", sa.Boolean(), nullable=False, server_default="1"),
        sa.Column("onboarding_email_sent", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("onboarding_email_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("onboarding_completed", sa.Boolean(), nullable=False, server_default="0"),
        # Agreement
        sa.Column("agreement_signed", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("agreement_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("agreement_url", sa.String(500), nullable=True),
        sa.Column("agreement_email_sent", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("agreement_email_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("agreement_accepted", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("agreement_accepted_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("agreement_accepted_by", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["landlord_id"], ["landlords.id"]),
        sa.ForeignKeyConstraint(["property_id"], ["properties.id"]),
        sa.ForeignKeyConstraint(["tenant_group_id"], ["tenant_groups.id"]),
        sa.CheckConstraint(
            "NOT agreement_accepted OR (agreement_signed AND agreement_email_sent)",
            name="ck_tenants_agreement_progression",
        ),
    )
    op.create_index("ix_tenants_group", "tenants", ["tenant_group_id"])
    op.create_index("ix_tenants_landlord_property", "tenants", ["landlord_id", "property_id"])
    op.create_index("ix_tenants_email", "tenants", ["email"])

    op.create_table(
        "tenant_children",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tenant_group_id", sa.BigInteger(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("occupation", sa.String(120), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["tenant_group_id"], ["tenant_groups.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_tenant_children_group", "tenant_children", ["tenant_group_id"])

    # =====================
    # DOCUMENTS
    # =====================

    # documents - owner is (owner_type, owner_id); no per-owner FK columns
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_type", sa.Enum("tenant", "property", "landlord", "comment", name="documentownertype"), nullable=False),
        sa.Column("owner_id", sa.Integer(), nullable=False),
        sa.Column(
            "category",
            sa.Enum(
                "aadhaar",
                "pan",
                "ownership_proof",
                "utility_bill",
                "no_objection_certificate",
                "bank_proof",
                "property_images",
                "rental_agreement",
                "address_proof",
                "id_proof",
                "profile_photo",
                "employment_proof",
                "person_photo",
                "property_condition",
                "other",
                name="documentcategory",
            ),
            nullable=False,
        ),
        sa.Column("url", sa.String(500), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("content_type", sa.String(100), nullable=True),
        sa.Column("size", sa.Integer(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_documents_owner", "documents", ["owner_type", "owner_id"])


def downgrade() -> None:
    """Drop all tables."""

    op.drop_table("documents")
    op.drop_table("tenant_children")
    op.drop_table("tenants")
    op.drop_table("tenant_groups")
    op.drop_table("properties")
    op.drop_table("landlords")
