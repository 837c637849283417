"""Document categories and their strict parser."""

import enum

from ...core.exceptions import ValidationError


class DocumentCategory(str, enum.Enum):
    """What a document proves or shows."""

    AADHAAR = "aadhaar"
    PAN = "pan"
    OWNERSHIP_PROOF = "ownership_proof"
    UTILITY_BILL = "utility_bill"
    NO_OBJECTION_CERTIFICATE = "no_objection_certificate"
    BANK_PROOF = "bank_proof"
    PROPERTY_IMAGES = "property_images"
    RENTAL_AGREEMENT = "rental_agreement"
    ADDRESS_PROOF = "address_proof"
    ID_PROOF = "id_proof"
    PROFILE_PHOTO = "profile_photo"
    EMPLOYMENT_PROOF = "employment_proof"
    PERSON_PHOTO = "person_photo"
    PROPERTY_CONDITION = "property_condition"
    OTHER = "other"


def _key(value: str) -> str:
    return "".join(ch for ch in value.lower() if ch.isalnum())


# Accepts "OwnershipProof", "ownership_proof", "Ownership Proof", ...
_CATEGORY_LOOKUP: dict[str, DocumentCategory] = {
    _key(category.value): category for category in DocumentCategory
}


def parse_document_category(value: "str | DocumentCategory") -> DocumentCategory:
    """Map free text to a DocumentCategory.

    Raises:
        ValidationError: if the text names no known category. There is no
            fallback; "Other" must be asked for explicitly.
    """
    if isinstance(value, DocumentCategory):
        return value
    category = _CATEGORY_LOOKUP.get(_key(value or ""))
    if category is None:
        raise ValidationError(
            f"Unknown document category: {value!r}", field="category", value=value
        )
    return category
