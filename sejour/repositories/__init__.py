"""
Repository layer for data access operations.
"""

from sejour.repositories.base import BaseRepository
from sejour.repositories.property import PropertyRepository
from sejour.repositories.image import ImageRepository
from sejour.repositories.booking import BookingRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "ImageRepository",
    "BookingRepository",
]
