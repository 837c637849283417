"""Property management module: landlords and the properties they let."""

from .models import Landlord, Property, PropertyStatus

__all__ = [
    "Landlord",
    "Property",
    "PropertyStatus",
]
