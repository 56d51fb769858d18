"""
Booking service: guests reserving a property for a date range.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from sejour.repositories.booking import BookingRepository
from sejour.repositories.property import PropertyRepository
from sejour.schemas.booking import BookingCreate, BookingResponse
from sejour.utils.exceptions import PropertyNotFoundError

logger = logging.getLogger(__name__)


class BookingService:
    """Creates bookings. Overlapping bookings of the same property are allowed."""

    def __init__(self, db_session: AsyncSession):
        self.db = db_session
        self.booking_repo = BookingRepository(db_session)
        self.property_repo = PropertyRepository(db_session)

    async def create(self, booking_data: BookingCreate, property_id: int, guest_id: int) -> BookingResponse:
        """
        Book a live property.

        Args:
            booking_data: Validated start and end dates
            property_id: Property being booked
            guest_id: Principal making the booking

        Returns:
            The created booking

        Raises:
            PropertyNotFoundError: If the property is missing or archived
        """
        if await self.property_repo.get_active(property_id) is None:
            raise PropertyNotFoundError(property_id)

        booking = await self.booking_repo.create_booking(
            booking_data.start_date,
            booking_data.end_date,
            property_id,
            guest_id,
        )
        return BookingResponse.model_validate(booking)
