"""Documents module: attachment metadata, ownership and storage."""

from .categories import DocumentCategory, parse_document_category
from .models import Document
from .owners import (
    CommentOwner,
    DocumentOwner,
    DocumentOwnerType,
    LandlordOwner,
    PropertyOwner,
    TenantOwner,
)
from .storage import DocumentStore, LocalDocumentStore

__all__ = [
    "Document",
    "DocumentCategory",
    "parse_document_category",
    "DocumentOwner",
    "DocumentOwnerType",
    "TenantOwner",
    "PropertyOwner",
    "LandlordOwner",
    "CommentOwner",
    "DocumentStore",
    "LocalDocumentStore",
]
