"""Filesystem blob store."""

from pathlib import Path
from typing import Union

import anyio

from ...modules.common.exceptions import StorageReadError, StorageWriteError
from ..logging import get_logger
from .base import PDF_MEDIA_TYPE, BlobStore

logger = get_logger(__name__)


class LocalBlobStore(BlobStore):
    """Blob store that keeps one file per key under a root directory.

    The directory is expected to be served at ``public_base_url`` (the
    application mounts it as static files), which makes locators publicly
    resolvable.
    """

    def __init__(self, root: Union[str, Path], public_base_url: str):
        super().__init__(public_base_url)
        self.root = anyio.Path(root)

    def _path(self, key: str) -> anyio.Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / key

    async def put(self, key: str, data: bytes, content_type: str = PDF_MEDIA_TYPE) -> str:
        try:
            path = self._path(key)
            await self.root.mkdir(parents=True, exist_ok=True)
            await path.write_bytes(data)
        except (OSError, ValueError) as e:
            logger.error(f"Blob write failed: storage_key={key}, error={e}")
            raise StorageWriteError(f"Failed to store file: {e}") from e

        logger.info(f"Stored blob: storage_key={key}, size={len(data)}, content_type={content_type}")
        return self.public_locator(key)

    async def remove(self, key: str) -> None:
        try:
            await self._path(key).unlink(missing_ok=True)
        except (OSError, ValueError) as e:
            raise StorageWriteError(f"Failed to remove file: {e}") from e

        logger.info(f"Removed blob: storage_key={key}")

    async def read(self, locator: str) -> bytes:
        key = self.key_for_locator(locator)
        if key is None:
            raise StorageReadError(f"Locator is not served by this store: {locator}")

        try:
            return await self._path(key).read_bytes()
        except (OSError, ValueError) as e:
            raise StorageReadError(f"Failed to read file: {e}") from e
