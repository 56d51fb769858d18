"""
Object storage adapter for property images, backed by S3 (or any S3 compatible endpoint).
"""

import asyncio
import logging
from typing import Optional

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from sejour.config import settings

logger = logging.getLogger(__name__)


class S3ImageStorage:
    """
    Stores image bytes under opaque keys.

    boto3 is blocking, so every call runs in a worker thread.
    """

    def __init__(self, client=None, bucket_name: Optional[str] = None):
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint_url,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
            region_name=settings.aws_region,
            config=BotoConfig(signature_version="s3v4"),
        )
        self.bucket_name = bucket_name or settings.s3_bucket_name

    async def store(self, key: str, content: bytes, property_id: int,
                    content_type: str = "application/octet-stream") -> str:
        """
        Upload one object.

        Args:
            key: Object key, unique per image
            content: Raw file bytes
            property_id: Owning property, recorded as object metadata
            content_type: MIME type of the content

        Returns:
            The key the object was stored under

        Raises:
            ClientError, BotoCoreError: If the upload fails
        """
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
                Metadata={"property-id": str(property_id)},
            )
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Failed to store object {key}: {e}")
            raise

        logger.debug(f"Stored object {key} ({len(content)} bytes) for property {property_id}")
        return key

    async def delete(self, key: str) -> None:
        """Remove one object. Deleting a missing key is not an error in S3."""
        try:
            await asyncio.to_thread(
                self.client.delete_object,
                Bucket=self.bucket_name,
                Key=key,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to delete object {key}: {e}")
            raise

        logger.debug(f"Deleted object {key}")
