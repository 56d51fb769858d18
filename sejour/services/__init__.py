"""
Service layer for business logic implementation.
Contains services for listings, bookings, images, external adapters and error handling.
"""

from .property import PropertyService
from .image import ImageService
from .booking import BookingService
from .geocoding import GeocodingService, Coordinates
from .storage import S3ImageStorage
from .error_handler import ErrorHandlerService

__all__ = [
    "PropertyService",
    "ImageService",
    "BookingService",
    "GeocodingService",
    "Coordinates",
    "S3ImageStorage",
    "ErrorHandlerService"
]
