"""
Repository for Booking model operations.
"""

from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession

from sejour.models.booking import Booking
from sejour.repositories.base import BaseRepository
import logging

logger = logging.getLogger(__name__)


class BookingRepository(BaseRepository[Booking]):
    """Repository for Booking database operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(Booking, db)

    async def create_booking(self, start_date: date, end_date: date,
                             property_id: int, guest_id: int) -> Booking:
        """Insert a booking. Overlapping stays are not checked."""
        booking = await self.create({
            "start_date": start_date,
            "end_date": end_date,
            "property_id": property_id,
            "guest_id": guest_id,
        })
        logger.info(f"Booked property {property_id} for guest {guest_id}: {start_date} to {end_date}")
        return booking
