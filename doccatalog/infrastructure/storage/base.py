"""Abstract base class for blob storage backends."""

from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import quote, unquote

PDF_MEDIA_TYPE = "application/pdf"


class BlobStore(ABC):
    """Durable object storage keyed by opaque strings.

    Every stored key has a publicly resolvable locator (URL). Implementations
    raise ``StorageWriteError`` from ``put``/``remove`` and
    ``StorageReadError`` from ``read``; callers on rollback and delete paths
    treat ``remove`` failures as log-only.
    """

    def __init__(self, public_base_url: str):
        """Initialize the store.

        Args:
            public_base_url: URL prefix under which stored keys are served
        """
        self.public_base_url = public_base_url.rstrip("/")

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: str = PDF_MEDIA_TYPE) -> str:
        """Store ``data`` under ``key``.

        Returns:
            The public locator of the stored blob
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """Remove the blob stored under ``key``. Removing a missing key is not an error."""
        pass

    @abstractmethod
    async def read(self, locator: str) -> bytes:
        """Read the content of a blob by its public locator."""
        pass

    def public_locator(self, key: str) -> str:
        """Return the publicly resolvable URL for ``key``."""
        return f"{self.public_base_url}/{quote(key)}"

    def key_for_locator(self, locator: str) -> Optional[str]:
        """Return the key a locator of this store points at, or None for foreign locators."""
        prefix = f"{self.public_base_url}/"
        if not locator.startswith(prefix):
            return None
        key = unquote(locator[len(prefix) :])
        return key or None

    def owns_locator(self, locator: str) -> bool:
        return self.key_for_locator(locator) is not None
