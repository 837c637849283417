"""Landlord and property models.

Only the columns the tenant lifecycle reads are modelled here; listing
details live with the property catalogue service.
"""

import enum

from sqlalchemy import Enum, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ...database import Base, TimestampMixin, enum_values


class PropertyStatus(str, enum.Enum):
    """Property status values."""

    DRAFT = "draft"
    LISTED = "listed"
    RENTED = "rented"
    ARCHIVED = "archived"


class Landlord(TimestampMixin, Base):
    """Owner of one or more properties."""

    __tablename__ = "landlords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone_number: Mapped[str | None] = mapped_column(String(20), nullable=True)

    properties: Mapped[list["Property"]] = relationship(
        "Property", back_populates="landlord"
    )

    def __repr__(self) -> str:
        return f"<Landlord(id={self.id}, name={self.name})>"


class Property(TimestampMixin, Base):
    """A rentable property belonging to a landlord."""

    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    landlord_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str | None] = mapped_column(String(120), nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus, values_callable=enum_values),
        nullable=False,
        default=PropertyStatus.DRAFT,
    )

    landlord: Mapped[Landlord] = relationship("Landlord", back_populates="properties")

    __table_args__ = (Index("ix_properties_landlord", "landlord_id"),)

    def __repr__(self) -> str:
        return f"<Property(id={self.id}, title={self.title}, status={self.status})>"
