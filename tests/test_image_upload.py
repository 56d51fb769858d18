"""
Tests for image upload validation.
Checks MIME type, size, real image content and batch limits before anything reaches storage.
"""

import io

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from sejour.config import settings
from sejour.utils.exceptions import (
    FileSizeExceededError,
    FileUploadError,
    UnsupportedFileTypeError,
)
from sejour.utils.file_utils import FileValidator, UploadedFile
from tests.conftest import ImageFactory


def make_upload(content: bytes, filename: str = "photo.png", content_type: str = "image/png") -> UploadFile:
    """Build an UploadFile the way the multipart parser does."""
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_validate_mime_type_accepts_images():
    for mime_type in ("image/jpeg", "image/jpg", "image/png"):
        assert FileValidator.validate_mime_type(mime_type) == mime_type


def test_validate_mime_type_rejects_others():
    with pytest.raises(UnsupportedFileTypeError) as exc_info:
        FileValidator.validate_mime_type("image/gif")

    assert exc_info.value.status_code == 400
    assert "image/gif" in exc_info.value.detail


def test_validate_file_size():
    assert FileValidator.validate_file_size(settings.max_file_size) == settings.max_file_size

    with pytest.raises(FileSizeExceededError):
        FileValidator.validate_file_size(settings.max_file_size + 1)

    with pytest.raises(FileUploadError, match="empty"):
        FileValidator.validate_file_size(0)


def test_validate_image_content_format_mismatch():
    """PNG bytes declared as JPEG are refused."""
    png = ImageFactory.image_bytes("PNG")

    FileValidator.validate_image_content(png, "image/png")
    with pytest.raises(FileUploadError, match="doesn't match"):
        FileValidator.validate_image_content(png, "image/jpeg")


def test_validate_image_content_not_an_image():
    with pytest.raises(FileUploadError, match="Invalid image file"):
        FileValidator.validate_image_content(b"definitely not pixels", "image/png")


@pytest.mark.asyncio
async def test_read_upload_file():
    content = ImageFactory.image_bytes("JPEG")

    uploaded = await FileValidator.read_upload_file(make_upload(content, "room.jpg", "image/jpeg"))

    assert uploaded == UploadedFile(filename="room.jpg", content=content, content_type="image/jpeg")
    assert uploaded.size == len(content)


@pytest.mark.asyncio
async def test_read_upload_files_limits():
    with pytest.raises(FileUploadError, match="No files provided"):
        await FileValidator.read_upload_files([])

    content = ImageFactory.image_bytes()
    too_many = [make_upload(content, f"{i}.png") for i in range(settings.max_upload_files + 1)]
    with pytest.raises(FileUploadError, match=f"Maximum {settings.max_upload_files}"):
        await FileValidator.read_upload_files(too_many)


@pytest.mark.asyncio
async def test_read_upload_files_one_bad_file_rejects_batch():
    content = ImageFactory.image_bytes()
    files = [
        make_upload(content, "ok.png"),
        make_upload(b"GIF89a", "anim.gif", "image/gif"),
    ]

    with pytest.raises(UnsupportedFileTypeError):
        await FileValidator.read_upload_files(files)
