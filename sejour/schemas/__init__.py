"""
Pydantic schemas for request/response validation.
"""

from .base import CamelModel, MessageResponse

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertySearchFilters,
    PropertyResponse,
    PropertyEnvelope,
    PropertyListResponse,
)

# Image schemas
from .image import (
    PropertyImageSummary,
    ImageResponse,
    UploadError,
    ImageEnvelope,
    ImageListResponse,
    ImageUploadResponse,
)

# Booking schemas
from .booking import (
    BookingCreate,
    BookingResponse,
    BookingEnvelope,
)

__all__ = [
    "CamelModel",
    "MessageResponse",

    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertySearchFilters",
    "PropertyResponse",
    "PropertyEnvelope",
    "PropertyListResponse",

    # Image
    "PropertyImageSummary",
    "ImageResponse",
    "UploadError",
    "ImageEnvelope",
    "ImageListResponse",
    "ImageUploadResponse",

    # Booking
    "BookingCreate",
    "BookingResponse",
    "BookingEnvelope",
]
