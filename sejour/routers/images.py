"""
Property image API endpoints.
Handles batch upload, listing, cover selection and deletion.
"""

from typing import List
from fastapi import APIRouter, Depends, UploadFile, File, Path, status
import logging

from sejour.schemas.base import MessageResponse
from sejour.schemas.image import ImageEnvelope, ImageListResponse, ImageUploadResponse
from sejour.services.error_handler import ERROR_RESPONSES
from sejour.services.image import ImageService
from sejour.services.storage import S3ImageStorage
from sejour.utils.dependencies import (
    get_image_service,
    get_image_storage,
    get_owned_property_id,
)
from sejour.utils.file_utils import FileValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties/{property_id}/images", tags=["Images"])


@router.post(
    "",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload images for property",
    description=(
        "Upload up to 12 JPEG or PNG files (1MB each). The result lists one entry per "
        "file, in order: the stored image or an error for that file."
    ),
    responses={code: ERROR_RESPONSES[code] for code in (400, 401, 403, 404)}
)
async def upload_property_images(
    files: List[UploadFile] = File(..., description="Image files to upload"),
    property_id: int = Depends(get_owned_property_id),
    image_service: ImageService = Depends(get_image_service),
    storage: S3ImageStorage = Depends(get_image_storage)
) -> ImageUploadResponse:
    """Validate the whole batch, then store every file concurrently."""
    uploads = await FileValidator.read_upload_files(files)
    images = await image_service.upload_batch(property_id, uploads, storage)
    return ImageUploadResponse(images=images)


@router.get(
    "",
    response_model=ImageListResponse,
    summary="List property images",
    responses={404: ERROR_RESPONSES[404]}
)
async def list_property_images(
    property_id: int = Path(..., description="Property ID"),
    image_service: ImageService = Depends(get_image_service)
) -> ImageListResponse:
    """List images of a property ordered by id."""
    images = await image_service.get_all_by_property(property_id)
    return ImageListResponse(images=images)


@router.patch(
    "/{image_id}/cover",
    response_model=ImageEnvelope,
    summary="Set cover image",
    description="Make this image the cover image; the previous cover is cleared. Owner only.",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 404)}
)
async def set_cover_image(
    image_id: int = Path(..., description="Image ID"),
    property_id: int = Depends(get_owned_property_id),
    image_service: ImageService = Depends(get_image_service)
) -> ImageEnvelope:
    """Set the cover image of a property."""
    image = await image_service.set_cover(image_id, property_id)
    return ImageEnvelope(image=image)


@router.delete(
    "/{image_key}",
    response_model=MessageResponse,
    summary="Delete image",
    description="Delete an image and its stored object. Owner only.",
    responses={code: ERROR_RESPONSES[code] for code in (401, 403, 404)}
)
async def delete_property_image(
    image_key: str = Path(..., description="Image storage key"),
    property_id: int = Depends(get_owned_property_id),
    image_service: ImageService = Depends(get_image_service),
    storage: S3ImageStorage = Depends(get_image_storage)
) -> MessageResponse:
    """Delete an image of the property."""
    await image_service.delete(image_key, property_id=property_id, storage=storage)
    return MessageResponse(message=f"Successfully deleted Image {image_key}")
