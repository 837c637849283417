"""Validation of household members before anything is written.

Both validators are pure and exhaustive: they collect every problem so the
UI can show them together.
"""

import re
from collections import Counter

from email_validator import EmailNotValidError, validate_email

from ...core.utils import normalize_email, normalize_phone
from .schemas import FieldError, TenantDraft

PHONE_PATTERN = re.compile(r"^[+]?[0-9]{10,15}$")
AADHAAR_PATTERN = re.compile(r"^[0-9]{12}$")
PAN_PATTERN = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")


def is_valid_email(value: str | None) -> bool:
    if not value or not value.strip():
        return False
    try:
        validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone(value: str | None) -> bool:
    return bool(value) and PHONE_PATTERN.match(normalize_phone(value)) is not None


def is_valid_aadhaar(value: str | None) -> bool:
    return bool(value) and AADHAAR_PATTERN.match(value.replace(" ", "")) is not None


def is_valid_pan(value: str | None) -> bool:
    return bool(value) and PAN_PATTERN.match(value.strip().upper()) is not None


def validate_tenant(tenant: TenantDraft) -> list[FieldError]:
    """Check a single member (with household terms applied)."""
    errors: list[FieldError] = []

    def error(field: str, message: str) -> None:
        errors.append(FieldError(field=field, message=message))

    if not tenant.name or len(tenant.name.strip()) < 2:
        error("name", "Name must be at least 2 characters long")
    if not is_valid_email(tenant.email):
        error("email", "Valid email address is required")
    if not is_valid_phone(tenant.phone_number):
        error("phone_number", "Valid phone number is required")
    if tenant.dob is None:
        error("dob", "Date of birth is required")
    if not tenant.occupation or len(tenant.occupation.strip()) < 2:
        error("occupation", "Occupation is required")
    if not is_valid_aadhaar(tenant.aadhaar_number):
        error("aadhaar_number", "Valid 12-digit Aadhaar number is required")
    if not is_valid_pan(tenant.pan_number):
        error("pan_number", "Valid PAN number is required (e.g., ABCDE1234F)")
    if not tenant.property_id or tenant.property_id <= 0:
        error("property_id", "Property selection is required")
    if tenant.rent_amount is None or tenant.rent_amount <= 0:
        error("rent_amount", "Valid rent amount is required")
    if tenant.tenancy_start_date is None:
        error("tenancy_start_date", "Tenancy start date is required")
    if tenant.rent_due_date is None:
        error("rent_due_date", "Rent due date is required")

    return errors


def validate_group(tenants: list[TenantDraft]) -> list[FieldError]:
    """Check a whole household: members, primary flag and duplicates."""
    if not tenants:
        return [FieldError(field="tenants", message="At least one tenant is required")]

    errors: list[FieldError] = []

    primary_count = sum(1 for tenant in tenants if tenant.is_primary)
    if primary_count == 0:
        errors.append(
            FieldError(field="tenants", message="One tenant must be marked as primary")
        )
    elif primary_count > 1:
        errors.append(
            FieldError(
                field="tenants", message="Only one tenant can be marked as primary"
            )
        )

    for index, tenant in enumerate(tenants):
        for tenant_error in validate_tenant(tenant):
            errors.append(
                FieldError(
                    field=f"tenants[{index}].{tenant_error.field}",
                    message=tenant_error.message,
                )
            )

    emails = Counter(normalize_email(t.email) for t in tenants if t.email)
    for email, count in emails.items():
        if email and count > 1:
            errors.append(
                FieldError(field="email", message=f"Duplicate email address: {email}")
            )

    phones = Counter(normalize_phone(t.phone_number) for t in tenants if t.phone_number)
    for phone, count in phones.items():
        if phone and count > 1:
            errors.append(
                FieldError(
                    field="phone_number", message=f"Duplicate phone number: {phone}"
                )
            )

    return errors
