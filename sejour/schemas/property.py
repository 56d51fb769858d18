"""
Pydantic schemas for property requests and responses.
Handles property creation, partial updates, search filters and validation.
"""

from pydantic import Field, field_validator, model_validator
from typing import Optional, List
from decimal import Decimal

from sejour.config import settings
from sejour.schemas.base import CamelModel
from sejour.schemas.image import PropertyImageSummary


class PropertyCreate(CamelModel):
    """Schema for creating a new property. Coordinates come from the geocoder."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Property listing title",
        examples=["Sunny loft near the park"]
    )

    street: str = Field(..., min_length=1, max_length=255, examples=["123 Main St"])
    city: str = Field(..., min_length=1, max_length=100, examples=["Oakland"])
    state: str = Field(..., min_length=1, max_length=100, examples=["CA"])
    zipcode: str = Field(..., min_length=1, max_length=20, examples=["94607"])

    description: str = Field(
        "",
        max_length=5000,
        description="Detailed property description"
    )

    price: Decimal = Field(
        ...,
        gt=0,
        max_digits=12,
        decimal_places=2,
        description="Nightly price",
        examples=[120]
    )

    @field_validator("title", "street", "city", "state", "zipcode")
    @classmethod
    def strip_required_text(cls, v):
        """Validate and clean required text fields."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()


class PropertyUpdate(CamelModel):
    """
    Schema for partially updating a property.

    Only fields present in the request are applied; use
    ``model_dump(exclude_unset=True)`` to read them. An explicit empty
    description is a real update, an explicit null is rejected.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)

    description: Optional[str] = Field(None, max_length=5000)

    price: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        """A field that was sent must carry a value."""
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields explicitly provided in the request."""
        return self.model_dump(exclude_unset=True)


class PropertySearchFilters(CamelModel):
    """Schema for property search filters and pagination."""

    min_price: Optional[Decimal] = Field(None, ge=0, description="Minimum price, inclusive")

    max_price: Optional[Decimal] = Field(None, ge=0, description="Maximum price, inclusive")

    description: Optional[str] = Field(
        None,
        max_length=255,
        description="Case-insensitive partial match on description"
    )

    limit: int = Field(
        default_factory=lambda: settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Page size"
    )

    page_number: int = Field(1, ge=1, description="Page number (starts from 1)")

    @model_validator(mode="after")
    def validate_price_range(self):
        """Minimum price may not exceed maximum price."""
        if self.min_price is not None and self.max_price is not None:
            if self.min_price > self.max_price:
                raise ValueError("minPrice cannot be greater than maxPrice")
        return self

    @property
    def offset(self) -> int:
        return self.limit * (self.page_number - 1)


class PropertyResponse(CamelModel):
    """Schema for property response including its images."""

    id: int
    title: str
    street: str
    city: str
    state: str
    zipcode: str
    latitude: str
    longitude: str
    description: str
    price: Decimal
    owner_id: int
    images: List[PropertyImageSummary] = Field(default_factory=list)


class PropertyEnvelope(CamelModel):
    property: PropertyResponse


class PropertyListResponse(CamelModel):
    properties: List[PropertyResponse]
