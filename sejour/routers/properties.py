"""
Property API endpoints: listing creation, search, bookings, updates and archiving.
Handlers stay thin; rules live in the services.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from decimal import Decimal
from typing import Optional
import logging

from sejour.schemas.base import MessageResponse
from sejour.schemas.booking import BookingCreate, BookingEnvelope
from sejour.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertySearchFilters,
    PropertyEnvelope,
    PropertyListResponse,
)
from sejour.services.booking import BookingService
from sejour.services.error_handler import ERROR_RESPONSES
from sejour.services.geocoding import GeocodingService
from sejour.services.property import PropertyService
from sejour.utils.auth import TokenPayload
from sejour.utils.dependencies import (
    get_current_user,
    get_owned_property_id,
    get_property_service,
    get_booking_service,
    get_geocoding_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.post(
    "",
    response_model=PropertyEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create new property",
    description="Create a property listing. The address is geocoded before the listing is stored.",
    responses={code: ERROR_RESPONSES[code] for code in (400, 401, 500)}
)
async def create_property(
    property_data: PropertyCreate,
    current_user: TokenPayload = Depends(get_current_user),
    property_service: PropertyService = Depends(get_property_service),
    geocoder: GeocodingService = Depends(get_geocoding_service)
) -> PropertyEnvelope:
    """
    Create a new property listing owned by the caller.

    Raises:
        AddressNotFoundError: If the address cannot be located
        GeocodingError: If the geocoding service fails
    """
    property_obj = await property_service.create_geocoded(
        property_data, current_user.user_id, geocoder
    )
    return PropertyEnvelope(property=property_obj)


@router.get(
    "",
    response_model=PropertyListResponse,
    summary="Search properties",
    description="List live properties, optionally filtered by price range and description.",
    responses={400: ERROR_RESPONSES[400]}
)
async def list_properties(
    min_price: Optional[Decimal] = Query(None, alias="minPrice", description="Minimum price, inclusive"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", description="Maximum price, inclusive"),
    description: Optional[str] = Query(None, description="Case-insensitive partial match"),
    limit: Optional[int] = Query(None, description="Page size (default 20, max 100)"),
    page_number: Optional[int] = Query(None, alias="pageNumber", description="Page number (starts from 1)"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyListResponse:
    """Search properties; an empty page is not an error."""
    params = {
        "min_price": min_price,
        "max_price": max_price,
        "description": description,
        "limit": limit,
        "page_number": page_number,
    }
    # Unset parameters fall back to the filter defaults
    filters = PropertySearchFilters(**{k: v for k, v in params.items() if v is not None})

    properties = await property_service.find_all(filters)
    return PropertyListResponse(properties=properties)


@router.get(
    "/{property_id}",
    response_model=PropertyEnvelope,
    summary="Get property by ID",
    responses={404: ERROR_RESPONSES[404]}
)
async def get_property(
    property_id: int = Path(..., description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    """Get a live property with its images."""
    property_obj = await property_service.get(property_id)
    return PropertyEnvelope(property=property_obj)


@router.post(
    "/{property_id}",
    response_model=BookingEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Book property",
    description="Book the property for the caller between startDate and endDate.",
    responses={code: ERROR_RESPONSES[code] for code in (400, 401, 404)}
)
async def book_property(
    booking_data: BookingCreate,
    property_id: int = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service)
) -> BookingEnvelope:
    """Create a booking; overlapping stays are accepted."""
    booking = await booking_service.create(booking_data, property_id, current_user.user_id)
    return BookingEnvelope(booking=booking)


@router.patch(
    "/{property_id}",
    response_model=PropertyEnvelope,
    summary="Update property",
    description="Partially update title, description and/or price. Owner only.",
    responses={code: ERROR_RESPONSES[code] for code in (400, 401, 403, 404)}
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: int = Depends(get_owned_property_id),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyEnvelope:
    """Apply only the fields present in the request body."""
    property_obj = await property_service.update(property_id, property_data)
    return PropertyEnvelope(property=property_obj)


@router.delete(
    "/{property_id}",
    response_model=MessageResponse,
    summary="Archive property",
    description="Archive the property. Owner only. Images and bookings are kept.",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 404)}
)
async def archive_property(
    property_id: int = Depends(get_owned_property_id),
    property_service: PropertyService = Depends(get_property_service)
) -> MessageResponse:
    """Archive a property."""
    await property_service.delete(property_id)
    return MessageResponse(message=f"Successfully archived Property {property_id}")
