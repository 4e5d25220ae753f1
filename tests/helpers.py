"""Test doubles shared across the test suite."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, List, Optional

from doccatalog.infrastructure.storage import BlobStore
from doccatalog.modules.common.exceptions import MetadataError, StorageReadError, StorageWriteError
from doccatalog.modules.document.schemas import DocumentCreateInternal, DocumentRead
from doccatalog.modules.document.store import MetadataStore

TEST_PUBLIC_BASE_URL = "http://test/files"


def make_pdf(size: int = 2048) -> bytes:
    """Bytes that pass PDF validation, padded to ``size``."""
    header = b"%PDF-1.4\n"
    return header + b"0" * (size - len(header))


class InMemoryBlobStore(BlobStore):
    """Blob store keeping blobs in a dict, with switchable failures."""

    def __init__(self, public_base_url: str = TEST_PUBLIC_BASE_URL):
        super().__init__(public_base_url)
        self.blobs: Dict[str, bytes] = {}
        self.removed: List[str] = []
        self.fail_put = False
        self.fail_remove = False
        self.fail_read = False

    async def put(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        if self.fail_put:
            raise StorageWriteError("Bucket unavailable")
        self.blobs[key] = data
        return self.public_locator(key)

    async def remove(self, key: str) -> None:
        if self.fail_remove:
            raise StorageWriteError("Bucket unavailable")
        self.removed.append(key)
        self.blobs.pop(key, None)

    async def read(self, locator: str) -> bytes:
        key = self.key_for_locator(locator)
        if self.fail_read or key is None or key not in self.blobs:
            raise StorageReadError(f"Cannot read {locator}")
        return self.blobs[key]


class InMemoryMetadataStore(MetadataStore):
    """Metadata store keeping records in a dict, with switchable failures."""

    def __init__(self):
        self.records: Dict[uuid.UUID, DocumentRead] = {}
        self.fail_insert = False
        self.fail_update = False
        self.fail_delete = False
        self._clock = datetime(2024, 1, 1, tzinfo=UTC)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    async def insert(self, record: DocumentCreateInternal) -> DocumentRead:
        if self.fail_insert:
            raise MetadataError("Failed to save document metadata: database offline")
        now = self._tick()
        document = DocumentRead(id=uuid.uuid4(), created_at=now, updated_at=now, **record.model_dump())
        self.records[document.id] = document
        return document

    async def update(self, document_id: uuid.UUID, changes: Dict[str, Any]) -> bool:
        if self.fail_update:
            raise MetadataError("Failed to update document metadata: database offline")
        if document_id not in self.records:
            return False
        current = self.records[document_id].model_dump()
        current.update(changes)
        self.records[document_id] = DocumentRead(**current)
        return True

    async def delete(self, document_id: uuid.UUID) -> bool:
        if self.fail_delete:
            raise MetadataError("Failed to delete document metadata: database offline")
        return self.records.pop(document_id, None) is not None

    async def get_by_id(self, document_id: uuid.UUID) -> Optional[DocumentRead]:
        return self.records.get(document_id)

    async def list(self, product_type: Optional[str] = None) -> List[DocumentRead]:
        documents = [d for d in self.records.values() if product_type is None or d.product_type == product_type]
        return sorted(documents, key=lambda d: d.created_at, reverse=True)


