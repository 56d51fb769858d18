"""
Image service for property photos.
Records uploaded images, lists them per property, and maintains the single cover image.
"""

import asyncio
import uuid
import logging
from typing import List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from sejour.repositories.image import ImageRepository
from sejour.repositories.property import PropertyRepository
from sejour.schemas.image import ImageResponse, PropertyImageSummary, UploadError
from sejour.services.storage import S3ImageStorage
from sejour.utils.exceptions import ImageNotFoundError, PropertyNotFoundError
from sejour.utils.file_utils import UploadedFile

logger = logging.getLogger(__name__)


class ImageService:
    """Service for managing property images and their storage objects."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.image_repo = ImageRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create(self, image_key: str, property_id: int,
                     is_cover_image: bool = False) -> ImageResponse:
        """
        Record an image already placed in storage.

        The property is not checked; a dangling id fails on the foreign key.
        """
        image = await self.image_repo.create_image(image_key, property_id, is_cover_image)
        return ImageResponse.model_validate(image)

    async def get_all_by_property(self, property_id: int) -> List[PropertyImageSummary]:
        """
        List images of a property ordered by id.

        Archived properties still count as existing here.

        Raises:
            PropertyNotFoundError: If no property row has this id
        """
        if not await self.property_repo.exists(property_id):
            raise PropertyNotFoundError(property_id)

        images = await self.image_repo.get_by_property_id(property_id)
        return [PropertyImageSummary.model_validate(image) for image in images]

    async def delete(self, image_key: str, property_id: Optional[int] = None,
                     storage: Optional[S3ImageStorage] = None) -> None:
        """
        Delete an image by key. The cover flag is not reassigned.

        Args:
            image_key: Storage key of the image
            property_id: When given, the image must belong to this property
            storage: When given, the stored object is removed as well

        Raises:
            ImageNotFoundError: If no such image exists (for that property)
        """
        if property_id is not None:
            image = await self.image_repo.get_by_key(image_key)
            if image is None or image.property_id != property_id:
                raise ImageNotFoundError(image_key)

        if not await self.image_repo.delete_by_key(image_key):
            raise ImageNotFoundError(image_key)

        logger.info(f"Deleted image {image_key}")

        if storage is not None:
            await storage.delete(image_key)

    async def set_cover(self, image_id: int, property_id: int) -> ImageResponse:
        """
        Make an image the one cover image of its property.

        Raises:
            ImageNotFoundError: If the image does not exist for that property;
                the previous cover is left untouched
        """
        image = await self.image_repo.set_cover(image_id, property_id)
        if image is None:
            raise ImageNotFoundError(image_id)

        logger.info(f"Cover image of property {property_id} set to image {image_id}")
        return ImageResponse.model_validate(image)

    async def upload_batch(
        self,
        property_id: int,
        files: List[UploadedFile],
        storage: S3ImageStorage,
    ) -> List[Union[ImageResponse, UploadError]]:
        """
        Store a batch of files concurrently and record the ones that made it.

        All uploads are started together and awaited as a group; one failing
        upload does not cancel the others.

        Args:
            property_id: Property receiving the images
            files: Validated files, in request order
            storage: Object storage adapter

        Returns:
            One entry per input file, in input order: the image record, or an
            UploadError naming the file that failed
        """
        keys = [str(uuid.uuid4()) for _ in files]

        outcomes = await asyncio.gather(
            *(
                storage.store(key, upload.content, property_id, upload.content_type)
                for key, upload in zip(keys, files)
            ),
            return_exceptions=True,
        )

        results: List[Union[ImageResponse, UploadError]] = []
        for key, upload, outcome in zip(keys, files, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Upload of {upload.filename} for property {property_id} failed: {outcome}")
                results.append(UploadError(error=f"Error uploading {upload.filename}"))
            else:
                results.append(await self.create(key, property_id))

        stored = sum(1 for r in results if isinstance(r, ImageResponse))
        logger.info(f"Uploaded {stored}/{len(files)} images for property {property_id}")
        return results
