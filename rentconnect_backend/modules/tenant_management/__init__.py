"""Tenant management module for RentConnect.

Households, onboarding, rental agreements and children.
"""

from .models import AgreementState, Gender, Tenant, TenantChild, TenantGroup
from .routers import router
from .services import HouseholdPolicy

__all__ = [
    # Models
    "Tenant",
    "TenantChild",
    "TenantGroup",
    # Enums
    "AgreementState",
    "Gender",
    # Policies
    "HouseholdPolicy",
    # Routers
    "router",
]
