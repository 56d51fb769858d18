"""
Pydantic schemas for property image responses.
Covers image records, per-property listings and batch upload results.
"""

from pydantic import Field
from typing import List, Union

from sejour.schemas.base import CamelModel


class PropertyImageSummary(CamelModel):
    """Image as listed under a property; the property id is implied."""

    id: int = Field(..., description="Image unique identifier", examples=[1])

    image_key: str = Field(
        ...,
        description="Object storage key of the image",
        examples=["8f14e45f-ceea-467f-a8f6-2d1a5c2b9e10"]
    )

    is_cover_image: bool = Field(
        False,
        description="Whether this is the cover image of the property"
    )


class ImageResponse(PropertyImageSummary):
    """Full image record."""

    property_id: int = Field(..., description="ID of the owning property", examples=[1])


class UploadError(CamelModel):
    """Per-file failure in a batch upload."""

    error: str = Field(..., examples=["Error uploading living_room.jpg"])


class ImageEnvelope(CamelModel):
    image: ImageResponse


class ImageListResponse(CamelModel):
    images: List[PropertyImageSummary]


class ImageUploadResponse(CamelModel):
    """Batch upload result, position-aligned with the uploaded files."""

    images: List[Union[ImageResponse, UploadError]]
