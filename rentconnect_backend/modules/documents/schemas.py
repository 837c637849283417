"""Document schemas."""

from datetime import datetime

from pydantic import Base64Bytes, BaseModel, Field, field_validator, model_validator

from ...core.exceptions import ValidationError
from .categories import DocumentCategory, parse_document_category
from .owners import DocumentOwnerType


class DocumentPayload(BaseModel):
    """A document attached to a request.

    Either ``content`` (base64 in JSON) is given and the document store saves
    it, or ``url`` points at a file that was already uploaded.
    """

    category: DocumentCategory
    name: str = Field(..., min_length=1, max_length=255)
    content_type: str | None = Field(None, max_length=100)
    description: str | None = None
    content: Base64Bytes | None = None
    url: str | None = Field(None, max_length=500)

    @field_validator("category", mode="before")
    @classmethod
    def _parse_category(cls, value):
        try:
            return parse_document_category(value)
        except ValidationError as exc:
            raise ValueError(exc.message) from exc

    @model_validator(mode="after")
    def _content_or_url(self) -> "DocumentPayload":
        if self.content is None and not self.url:
            raise ValueError("Either content or url is required")
        return self


class DocumentResponse(BaseModel):
    """Schema for document response."""

    id: int
    owner_type: DocumentOwnerType
    owner_id: int
    category: DocumentCategory
    url: str
    name: str | None = None
    content_type: str | None = None
    size: int | None = None
    description: str | None = None
    is_verified: bool
    uploaded_at: datetime

    class Config:
        from_attributes = True
