"""
S3 client for raw link content.

Stores the downloaded bytes of each link at "<prefix>/<document_id>.<ext>".

Dependencies: boto3
System role: Blob store adapter
"""

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from linkshelf.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class S3BlobStore:
    """S3 client for the content bucket (put/delete only)."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        client: Any | None = None,
    ) -> None:
        """
        Initialize S3 client for content bucket.

        Args:
            bucket: S3 bucket name for content storage
            region: AWS region for S3 bucket
            client: Optional pre-built boto3 S3 client
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    async def put(self, path: str, content: bytes, content_type: str) -> None:
        """
        Upload content to the bucket.

        Args:
            path: S3 object key
            content: Raw bytes
            content_type: MIME type stored as ContentType

        Raises:
            StoreError: If the upload fails
        """
        try:
            await asyncio.to_thread(
                self._s3_client.put_object,
                Bucket=self._bucket,
                Key=path,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                f"Failed to upload s3://{self._bucket}/{path}: {e}",
                store="blob",
                operation="put",
                details={"bucket": self._bucket, "key": path},
            ) from e

        logger.info(
            f"{__name__}:put - Uploaded {len(content)} bytes",
            extra={"bucket": self._bucket, "key": path},
        )

    async def delete(self, path: str) -> None:
        """
        Delete an object from the bucket.

        S3 reports success for keys that do not exist.

        Args:
            path: S3 object key

        Raises:
            StoreError: If the delete fails
        """
        try:
            await asyncio.to_thread(
                self._s3_client.delete_object,
                Bucket=self._bucket,
                Key=path,
            )
        except (ClientError, BotoCoreError) as e:
            raise StoreError(
                f"Failed to delete s3://{self._bucket}/{path}: {e}",
                store="blob",
                operation="delete",
                details={"bucket": self._bucket, "key": path},
            ) from e

        logger.info(f"{__name__}:delete - Deleted object", extra={"bucket": self._bucket, "key": path})
