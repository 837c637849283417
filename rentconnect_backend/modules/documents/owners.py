"""Who a document belongs to.

A document has exactly one owner, and the owner's kind travels with its id,
so a tenant id can never be mistaken for a property id.
"""

import enum
from dataclasses import dataclass
from typing import ClassVar


class DocumentOwnerType(str, enum.Enum):
    """Kinds of document owner."""

    TENANT = "tenant"
    PROPERTY = "property"
    LANDLORD = "landlord"
    COMMENT = "comment"


@dataclass(frozen=True)
class TenantOwner:
    id: int
    owner_type: ClassVar[DocumentOwnerType] = DocumentOwnerType.TENANT


@dataclass(frozen=True)
class PropertyOwner:
    id: int
    owner_type: ClassVar[DocumentOwnerType] = DocumentOwnerType.PROPERTY


@dataclass(frozen=True)
class LandlordOwner:
    id: int
    owner_type: ClassVar[DocumentOwnerType] = DocumentOwnerType.LANDLORD


@dataclass(frozen=True)
class CommentOwner:
    """Opaque comment id from the ticketing service."""

    id: int
    owner_type: ClassVar[DocumentOwnerType] = DocumentOwnerType.COMMENT


DocumentOwner = TenantOwner | PropertyOwner | LandlordOwner | CommentOwner

_OWNER_CLASSES: dict[DocumentOwnerType, type] = {
    DocumentOwnerType.TENANT: TenantOwner,
    DocumentOwnerType.PROPERTY: PropertyOwner,
    DocumentOwnerType.LANDLORD: LandlordOwner,
    DocumentOwnerType.COMMENT: CommentOwner,
}


def owner_from_columns(owner_type: DocumentOwnerType, owner_id: int) -> DocumentOwner:
    """Rebuild the owner variant from its stored (type, id) pair."""
    return _OWNER_CLASSES[DocumentOwnerType(owner_type)](owner_id)
