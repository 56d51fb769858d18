"""
File handling utilities for image uploads.
Validates uploaded images and reads them into memory for object storage.
"""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional
from PIL import Image, UnidentifiedImageError
from fastapi import UploadFile

from sejour.config import get_settings
from sejour.utils.exceptions import (
    FileUploadError,
    UnsupportedFileTypeError,
    FileSizeExceededError,
)

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass
class UploadedFile:
    """An uploaded file fully read into memory."""

    filename: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class FileValidator:
    """Utility class for image upload validation."""

    # Pillow format names accepted for each MIME type
    PIL_FORMATS = {
        "image/jpeg": "JPEG",
        "image/jpg": "JPEG",
        "image/png": "PNG",
    }

    @classmethod
    def validate_mime_type(cls, mime_type: str, allowed_types: Optional[List[str]] = None) -> str:
        """
        Validate MIME type against the allowed image types.

        Raises:
            UnsupportedFileTypeError: If MIME type is not supported
        """
        allowed = allowed_types or settings.allowed_file_types
        if mime_type not in allowed:
            raise UnsupportedFileTypeError(mime_type or "unknown", allowed)
        return mime_type

    @classmethod
    def validate_file_size(cls, file_size: int, max_size: Optional[int] = None) -> int:
        """
        Validate file size.

        Raises:
            FileSizeExceededError: If file is larger than the limit
        """
        max_size = max_size or settings.max_file_size
        if file_size > max_size:
            raise FileSizeExceededError(file_size, max_size)
        if file_size == 0:
            raise FileUploadError("File is empty")
        return file_size

    @classmethod
    def validate_image_content(cls, content: bytes, mime_type: str) -> None:
        """
        Check the bytes really are an image of the declared type.

        Raises:
            FileUploadError: If the content is not a readable image of that type
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                pil_format = img.format
        except (UnidentifiedImageError, OSError) as e:
            raise FileUploadError(f"Invalid image file: {e}")

        expected = cls.PIL_FORMATS.get(mime_type)
        if expected and pil_format != expected:
            raise FileUploadError(
                f"Image format '{pil_format}' doesn't match MIME type '{mime_type}'"
            )

    @classmethod
    async def read_upload_file(cls, file: UploadFile) -> UploadedFile:
        """
        Validate an uploaded file and read it into memory.

        Args:
            file: FastAPI UploadFile object

        Returns:
            UploadedFile with the file content

        Raises:
            BadRequestError: If any validation fails
        """
        mime_type = cls.validate_mime_type(file.content_type or "")

        await file.seek(0)
        content = await file.read()

        cls.validate_file_size(len(content))
        cls.validate_image_content(content, mime_type)

        return UploadedFile(
            filename=file.filename or "unnamed",
            content=content,
            content_type=mime_type,
        )

    @classmethod
    async def read_upload_files(cls, files: List[UploadFile]) -> List[UploadedFile]:
        """
        Validate a whole batch before anything is stored.

        Raises:
            FileUploadError: If the batch is empty or too large
        """
        if not files:
            raise FileUploadError("No files provided")
        if len(files) > settings.max_upload_files:
            raise FileUploadError(f"Maximum {settings.max_upload_files} files allowed per upload")

        uploaded = []
        for file in files:
            uploaded.append(await cls.read_upload_file(file))

        logger.debug(f"Validated {len(uploaded)} uploaded files")
        return uploaded
