"""
FastAPI dependency injection utilities for authentication, services and adapters.
Adapters are provided through dependencies so they can be overridden in tests.
"""

from typing import Optional
from functools import lru_cache
from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from jose import ExpiredSignatureError, JWTError
from sejour.database import get_db
from sejour.services.booking import BookingService
from sejour.services.geocoding import GeocodingService
from sejour.services.image import ImageService
from sejour.services.property import PropertyService
from sejour.services.storage import S3ImageStorage
from sejour.utils.auth import TokenPayload, verify_token
from sejour.utils.exceptions import (
    UnauthorizedError,
    InvalidTokenError,
    TokenExpiredError,
    PropertyOwnershipError,
)
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_image_service(db: AsyncSession = Depends(get_db)) -> ImageService:
    """Get image service instance bound to the request session."""
    return ImageService(db)


async def get_property_service(
    db: AsyncSession = Depends(get_db),
    image_service: ImageService = Depends(get_image_service)
) -> PropertyService:
    """
    Get property service instance.

    Args:
        db: Database session
        image_service: Image service sharing the same session

    Returns:
        PropertyService instance
    """
    return PropertyService(db, image_service)


async def get_booking_service(db: AsyncSession = Depends(get_db)) -> BookingService:
    """Get booking service instance bound to the request session."""
    return BookingService(db)


def get_geocoding_service() -> GeocodingService:
    """Get the geocoding adapter."""
    return GeocodingService()


@lru_cache()
def get_image_storage() -> S3ImageStorage:
    """Get the object storage adapter; one boto3 client per process."""
    return S3ImageStorage()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """
    Get the authenticated principal from the JWT bearer token.

    Args:
        credentials: HTTP Bearer credentials

    Returns:
        Token payload carrying the principal id

    Raises:
        UnauthorizedError: If no token provided
        TokenExpiredError: If token is expired
        InvalidTokenError: If token is invalid
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    try:
        return verify_token(credentials.credentials)
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        raise InvalidTokenError()



async def get_owned_property_id(
    property_id: int = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service)
) -> int:
    """
    Ensure the caller owns the property in the path.

    Returns:
        The property id

    Raises:
        PropertyNotFoundError: If the property is missing or archived
        PropertyOwnershipError: If the caller is not the owner
    """
    owner_id = await property_service.get_owner_id(property_id)
    if owner_id != current_user.user_id:
        logger.warning(f"User {current_user.user_id} denied access to property {property_id}")
        raise PropertyOwnershipError()
    return property_id
