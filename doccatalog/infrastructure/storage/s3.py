"""S3-compatible blob store (AWS S3, MinIO) backed by boto3."""

import asyncio
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...modules.common.exceptions import StorageReadError, StorageWriteError
from ..logging import get_logger
from .base import PDF_MEDIA_TYPE, BlobStore

logger = get_logger(__name__)


def _error_code(error: Exception) -> str:
    if isinstance(error, ClientError):
        return str(error.response.get("Error", {}).get("Code", "Unknown"))
    return type(error).__name__


class S3BlobStore(BlobStore):
    """Blob store writing objects into a single bucket.

    boto3 is synchronous, so every call runs in a worker thread.

    Example:
        ```python
        store = S3BlobStore(
            bucket_name="documents",
            endpoint_url="http://localhost:9000",
            access_key="minioadmin",
            secret_key="minioadmin",
        )
        url = await store.put("1700000000000-k3j2h1g0f-XYZ-TDS.pdf", data)
        ```
    """

    def __init__(
        self,
        bucket_name: str,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "us-east-1",
        public_base_url: Optional[str] = None,
        client: Any = None,
    ):
        """Initialize the S3 blob store.

        Args:
            bucket_name: Bucket holding the documents
            endpoint_url: S3 endpoint URL (None for AWS S3, URL for MinIO)
            access_key: Access key ID (None to use the default credential chain)
            secret_key: Secret access key
            region: AWS region
            public_base_url: URL prefix objects are publicly served under.
                Defaults to the bucket's path-style URL.
            client: Pre-built boto3 S3 client
        """
        if public_base_url is None:
            base = endpoint_url.rstrip("/") if endpoint_url else f"https://s3.{region}.amazonaws.com"
            public_base_url = f"{base}/{bucket_name}"
        super().__init__(public_base_url)

        self.bucket_name = bucket_name
        self.s3_client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key or None,
            aws_secret_access_key=secret_key or None,
            region_name=region,
        )

        logger.info(f"Initialized S3 blob store: bucket={bucket_name}, endpoint={endpoint_url or 'AWS S3'}, region={region}")

    async def put(self, key: str, data: bytes, content_type: str = PDF_MEDIA_TYPE) -> str:
        try:
            await asyncio.to_thread(
                self.s3_client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"S3 upload failed: storage_key={key}, error={_error_code(e)}")
            raise StorageWriteError(f"Failed to upload file: {_error_code(e)}") from e

        logger.info(f"Uploaded blob: storage_key={key}, size={len(data)}, content_type={content_type}")
        return self.public_locator(key)

    async def remove(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.s3_client.delete_object, Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageWriteError(f"Failed to delete file: {_error_code(e)}") from e

        logger.info(f"Deleted blob: storage_key={key}")

    async def read(self, locator: str) -> bytes:
        key = self.key_for_locator(locator)
        if key is None:
            raise StorageReadError(f"Locator is not served by this store: {locator}")

        def _get_object() -> bytes:
            response = self.s3_client.get_object(Bucket=self.bucket_name, Key=key)
            return response["Body"].read()

        try:
            return await asyncio.to_thread(_get_object)
        except (ClientError, BotoCoreError) as e:
            raise StorageReadError(f"Failed to retrieve file: {_error_code(e)}") from e
