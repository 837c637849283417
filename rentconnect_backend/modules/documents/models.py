"""Document metadata model.

A document row never holds file bytes: ``url`` points into the external
document store.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ...database import Base, TimestampMixin, enum_values
from .categories import DocumentCategory
from .owners import DocumentOwner, DocumentOwnerType, owner_from_columns


class Document(TimestampMixin, Base):
    """Attachment owned by a tenant, property, landlord or comment."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_type: Mapped[DocumentOwnerType] = mapped_column(
        Enum(DocumentOwnerType, values_callable=enum_values), nullable=False
    )
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[DocumentCategory] = mapped_column(
        Enum(DocumentCategory, values_callable=enum_values), nullable=False
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (Index("ix_documents_owner", "owner_type", "owner_id"),)

    @property
    def owner(self) -> DocumentOwner:
        return owner_from_columns(self.owner_type, self.owner_id)

    @owner.setter
    def owner(self, value: DocumentOwner) -> None:
        self.owner_type = value.owner_type
        self.owner_id = value.id

    def __repr__(self) -> str:
        return (
            f"<Document(id={self.id}, owner={self.owner_type}:{self.owner_id}, "
            f"category={self.category})>"
        )
