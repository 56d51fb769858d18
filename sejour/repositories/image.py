"""
Repository for Image model operations.
Handles database queries for property images and the cover image toggle.
"""

from typing import List, Optional
from sqlalchemy import select, update, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from sejour.models.image import Image
from sejour.models.property import Property
from sejour.repositories.base import BaseRepository
import logging

logger = logging.getLogger(__name__)


class ImageRepository(BaseRepository[Image]):
    """Repository for Image database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Image, db)

    async def create_image(self, image_key: str, property_id: int,
                           is_cover_image: bool = False) -> Image:
        """
        Record an uploaded image.

        Args:
            image_key: Object storage key
            property_id: ID of the owning property (not checked)
            is_cover_image: Initial cover flag

        Returns:
            Created image
        """
        return await self.create({
            "image_key": image_key,
            "property_id": property_id,
            "is_cover_image": is_cover_image,
        })

    async def get_by_property_id(self, property_id: int) -> List[Image]:
        """
        Get all images for a specific property.

        Args:
            property_id: ID of the property

        Returns:
            List of images ordered by id
        """
        query = (
            select(Image)
            .where(Image.property_id == property_id)
            .order_by(Image.id.asc())
            .execution_options(populate_existing=True)
        )

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def get_by_key(self, image_key: str) -> Optional[Image]:
        """Get an image by its storage key."""
        result = await self.db.execute(
            select(Image)
            .where(Image.image_key == image_key)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_cover_image(self, property_id: int) -> Optional[Image]:
        """
        Get the cover image for a property.

        Returns:
            Cover image or None if the property has none
        """
        query = select(Image).where(
            and_(
                Image.property_id == property_id,
                Image.is_cover_image.is_(True)
            )
        ).execution_options(populate_existing=True)

        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def delete_by_key(self, image_key: str) -> bool:
        """
        Delete an image row by its storage key.

        Returns:
            True if an image was deleted, False if no such key
        """
        try:
            result = await self.db.execute(delete(Image).where(Image.image_key == image_key))
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to delete image {image_key}: {e}")
            raise

        deleted = result.rowcount > 0
        if not deleted:
            logger.debug(f"Image {image_key} not found for deletion")
        return deleted

    async def set_cover(self, image_id: int, property_id: int) -> Optional[Image]:
        """
        Make one image the cover image of its property.

        Runs as a single transaction: the property row is locked, the current
        cover is cleared and the target is flagged. If the target image does
        not belong to the property the transaction is rolled back and the
        previous cover stays in place.

        Args:
            image_id: ID of the image to promote
            property_id: ID of the property the image must belong to

        Returns:
            The new cover image, or None if the property or image was not found
        """
        try:
            locked = await self.db.execute(
                select(Property.id).where(Property.id == property_id).with_for_update()
            )
            if locked.scalar_one_or_none() is None:
                await self.db.rollback()
                return None

            await self.db.execute(
                update(Image)
                .where(and_(Image.property_id == property_id, Image.is_cover_image.is_(True)))
                .values(is_cover_image=False)
                .execution_options(synchronize_session=False)
            )

            result = await self.db.execute(
                update(Image)
                .where(and_(Image.id == image_id, Image.property_id == property_id))
                .values(is_cover_image=True)
                .execution_options(synchronize_session=False)
            )

            if result.rowcount == 0:
                await self.db.rollback()
                logger.debug(f"Image {image_id} not found on property {property_id}")
                return None

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to set cover image {image_id} for property {property_id}: {e}")
            raise

        return await self.get_by_id(image_id)
