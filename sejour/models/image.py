"""
Image model for property photos.
Each row correlates an object-storage key with the property it belongs to.
"""

from sqlalchemy import String, Boolean, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column
from sejour.database import Base


class Image(Base):
    """
    Image model for uploaded property photos.
    At most one image per property may be flagged as the cover image.
    """

    __tablename__ = "images"

    image_key: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Object storage key of the image"
    )

    property_id: Mapped[int] = mapped_column(
        ForeignKey("properties.id"),
        nullable=False,
        index=True,
        comment="ID of the property this image belongs to"
    )

    is_cover_image: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether this is the cover image for the property"
    )

    def __repr__(self) -> str:
        """String representation of the image."""
        return f"<Image(id={self.id}, property_id={self.property_id}, image_key={self.image_key})>"


# One cover image per property, enforced by the database
cover_image_index = Index(
    "uq_images_cover_per_property",
    Image.property_id,
    unique=True,
    postgresql_where=text("is_cover_image"),
    sqlite_where=text("is_cover_image = 1")
)
