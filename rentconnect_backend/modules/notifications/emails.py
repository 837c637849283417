"""Subjects and bodies of the emails sent during tenant onboarding."""

from html import escape
from urllib.parse import urlencode

ONBOARDING_SUBJECT = "Welcome to RentConnect - Complete Your Onboarding"
AGREEMENT_CREATED_SUBJECT = "Rental Agreement Created - Action Required"


def agreement_accepted_subject(tenant_name: str, property_title: str | None) -> str:
    return f"Agreement Accepted - {tenant_name} ({property_title or 'Property'})"


def onboarding_confirmation_url(frontend_url: str, email: str) -> str:
    query = urlencode({"email": email})
    return f"{frontend_url.rstrip('/')}/Account/ResetPasswordTenant?{query}"


def onboarding_body(
    tenant_name: str, property_title: str | None, confirmation_url: str
) -> str:
    return (
        f"<p>Dear {escape(tenant_name)},</p>"
        f"<p>You have been added as a tenant of "
        f"<strong>{escape(property_title or 'your new home')}</strong> on RentConnect.</p>"
        f"<p><a href='{escape(confirmation_url, quote=True)}'>Complete Account Setup</a></p>"
    )


def agreement_created_body(
    tenant_name: str,
    property_title: str | None,
    agreement_url: str,
    start_date: str,
    end_date: str,
    rent_amount: str,
) -> str:
    return (
        f"<p>Dear {escape(tenant_name)},</p>"
        f"<p>Your rental agreement for "
        f"<strong>{escape(property_title or 'your property')}</strong> is ready.</p>"
        f"<ul><li>Period: {start_date} to {end_date}</li>"
        f"<li>Monthly rent: {rent_amount}</li></ul>"
        f"<p><a href='{escape(agreement_url, quote=True)}'>Review the agreement</a>"
        f" and accept it from your tenant dashboard.</p>"
    )


def agreement_accepted_body(
    landlord_name: str, tenant_name: str, property_title: str | None, accepted_on: str
) -> str:
    return (
        f"<p>Dear {escape(landlord_name)},</p>"
        f"<p>{escape(tenant_name)} accepted the rental agreement for "
        f"<strong>{escape(property_title or 'your property')}</strong> on {accepted_on}.</p>"
    )
