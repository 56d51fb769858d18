"""
Property model for short-term rental listings.
Handles property data with postal address, geocoded location, pricing and ownership.
"""

from sqlalchemy import String, Text, Integer, Numeric, Boolean, Index
from sqlalchemy.orm import Mapped, mapped_column
from sejour.database import Base
from decimal import Decimal


class Property(Base):
    """
    Property model for rental listings.
    Properties are never physically removed; deletion sets the archived flag.
    """

    __tablename__ = "properties"

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    # Postal address, immutable after creation
    street: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(100), nullable=False)
    state: Mapped[str] = mapped_column(String(100), nullable=False)
    zipcode: Mapped[str] = mapped_column(String(20), nullable=False)

    # Geocoded once on creation, kept as decimal text to avoid float drift
    latitude: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Latitude as returned by the geocoder"
    )

    longitude: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="Longitude as returned by the geocoder"
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Detailed property description"
    )

    price: Mapped[Decimal] = mapped_column(
        Numeric(precision=12, scale=2),
        nullable=False,
        index=True,
        comment="Nightly price"
    )

    owner_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Principal id of the user who listed the property"
    )

    archived: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Soft-delete marker"
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}, price={self.price})>"


# Search only ever looks at live listings, ordered by id
active_properties_index = Index(
    "idx_properties_archived_id",
    Property.archived,
    Property.id
)
