"""
Property service for managing rental listings.
Handles creation with geocoded coordinates, search, partial updates and archiving.
"""

from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sejour.models.property import Property
from sejour.repositories.property import PropertyRepository
from sejour.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertySearchFilters,
    PropertyResponse,
)
from sejour.services.geocoding import GeocodingService
from sejour.services.image import ImageService
from sejour.utils.exceptions import PropertyNotFoundError
import logging

logger = logging.getLogger(__name__)


class PropertyService:
    """
    Property service for rental listings.
    Every read ignores archived properties; images are attached through ImageService.
    """

    def __init__(self, db_session: AsyncSession, image_service: Optional[ImageService] = None):
        self.db = db_session
        self.property_repo = PropertyRepository(db_session)
        self.image_service = image_service or ImageService(db_session)

    async def create(
        self,
        property_data: PropertyCreate,
        owner_id: int,
        latitude: str,
        longitude: str,
    ) -> PropertyResponse:
        """
        Create a property listing.

        Args:
            property_data: Validated listing fields
            owner_id: Principal creating the listing
            latitude: Geocoded latitude as decimal text
            longitude: Geocoded longitude as decimal text

        Returns:
            The created property, with no images
        """
        create_data = property_data.model_dump()
        create_data.update(
            owner_id=owner_id,
            latitude=latitude,
            longitude=longitude,
        )

        property_obj = await self.property_repo.create_property(create_data)
        logger.info(f"Property created by user {owner_id}: {property_obj.title} (ID: {property_obj.id})")
        return self._to_response(property_obj, [])

    async def create_geocoded(
        self,
        property_data: PropertyCreate,
        owner_id: int,
        geocoder: GeocodingService,
    ) -> PropertyResponse:
        """
        Geocode the address, then create the property.

        Raises:
            AddressNotFoundError, GeocodingError: Nothing is written when geocoding fails
        """
        coordinates = await geocoder.geocode(
            property_data.street,
            property_data.city,
            property_data.state,
        )
        return await self.create(
            property_data,
            owner_id,
            coordinates.latitude,
            coordinates.longitude,
        )

    async def find_all(self, filters: Optional[PropertySearchFilters] = None) -> List[PropertyResponse]:
        """
        Search live properties.

        Args:
            filters: Price range, description match and pagination

        Returns:
            Properties ordered by id, each with its images
        """
        filters = filters or PropertySearchFilters()
        properties = await self.property_repo.search(filters)

        results = []
        for property_obj in properties:
            images = await self.image_service.get_all_by_property(property_obj.id)
            results.append(self._to_response(property_obj, images))

        logger.debug(f"Property search returned {len(results)} results")
        return results

    async def get(self, property_id: int) -> PropertyResponse:
        """
        Get a live property with its images.

        Raises:
            PropertyNotFoundError: If missing or archived
        """
        property_obj = await self._get_active_or_404(property_id)
        images = await self.image_service.get_all_by_property(property_id)
        return self._to_response(property_obj, images)

    async def get_owner_id(self, property_id: int) -> int:
        """
        Owner of a live property.

        Raises:
            PropertyNotFoundError: If missing or archived
        """
        property_obj = await self._get_active_or_404(property_id)
        return property_obj.owner_id

    async def update(self, property_id: int, property_data: PropertyUpdate) -> PropertyResponse:
        """
        Apply a partial update.

        Only fields present in the request are written. An update carrying no
        fields returns the property unchanged.

        Raises:
            PropertyNotFoundError: If missing or archived
        """
        changes = property_data.changes()

        property_obj = await self.property_repo.update_active(property_id, changes)
        if property_obj is None:
            raise PropertyNotFoundError(property_id)

        images = await self.image_service.get_all_by_property(property_id)
        return self._to_response(property_obj, images)

    async def delete(self, property_id: int) -> None:
        """
        Archive a property. Images and bookings are kept.

        Raises:
            PropertyNotFoundError: If missing or already archived
        """
        if not await self.property_repo.archive(property_id):
            raise PropertyNotFoundError(property_id)

        logger.info(f"Property {property_id} archived")

    async def _get_active_or_404(self, property_id: int) -> Property:
        property_obj = await self.property_repo.get_active(property_id)
        if property_obj is None:
            raise PropertyNotFoundError(property_id)
        return property_obj

    @staticmethod
    def _to_response(property_obj: Property, images) -> PropertyResponse:
        response = PropertyResponse.model_validate(property_obj)
        response.images = list(images)
        return response
