"""
Database models for the Sejour rental API.
Includes Property, Image and Booking models.
"""

from sejour.models.property import Property
from sejour.models.image import Image
from sejour.models.booking import Booking

# Export all models for easy importing
__all__ = [
    "Property",
    "Image",
    "Booking",
]
