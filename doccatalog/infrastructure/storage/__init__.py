"""Blob storage backends."""

from functools import lru_cache

from ..config.settings import StorageBackend, get_settings
from .base import PDF_MEDIA_TYPE, BlobStore
from .local import LocalBlobStore


@lru_cache()
def get_blob_store() -> BlobStore:
    """Get the blob store configured by ``STORAGE_BACKEND``."""
    settings = get_settings()

    if settings.STORAGE_BACKEND == StorageBackend.S3:
        from .s3 import S3BlobStore

        return S3BlobStore(
            bucket_name=settings.S3_BUCKET,
            endpoint_url=settings.S3_ENDPOINT_URL,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            region=settings.S3_REGION,
            public_base_url=settings.S3_PUBLIC_BASE_URL or None,
        )

    return LocalBlobStore(root=settings.BLOB_STORAGE_PATH, public_base_url=settings.BLOB_PUBLIC_BASE_URL)


__all__ = ["PDF_MEDIA_TYPE", "BlobStore", "LocalBlobStore", "get_blob_store"]
