"""Document lifecycle service: upload pipeline, lookup, update and delete."""

import inspect
import uuid
from datetime import UTC, datetime
from typing import Any, Callable, List, Optional, Union

from pydantic import ValidationError as SchemaValidationError

from ...infrastructure.logging import get_logger
from ...infrastructure.storage import BlobStore
from ..common.exceptions import InvalidInputError, MetadataError, StorageWriteError
from ..common.result import Result
from .classification import build_storage_key, classify_document, display_name, size_variants_for
from .schemas import DocumentCreateInternal, DocumentRead, DocumentUpdate
from .store import MetadataStore
from .validation import MAX_SIZE_BYTES, MIN_SIZE_BYTES, AsyncReadable, validate_pdf

logger = get_logger(__name__)

ProgressObserver = Callable[[int], Any]


async def _report_progress(observer: Optional[ProgressObserver], percent: int) -> None:
    if observer is None:
        return
    try:
        outcome = observer(percent)
        if inspect.isawaitable(outcome):
            await outcome
    except Exception as e:
        logger.warning(f"Progress observer failed at {percent}%: {e}")


class DocumentService:
    """Service for managing reference documents.

    Owns the consistency between the blob store and the metadata store:
    a metadata record is only written after its file is stored, and a
    stored file whose record could not be written is removed again.

    Both stores are passed in; the service holds no other state.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        metadata_store: MetadataStore,
        min_size: int = MIN_SIZE_BYTES,
        max_size: int = MAX_SIZE_BYTES,
    ):
        self.blob_store = blob_store
        self.metadata_store = metadata_store
        self.min_size = min_size
        self.max_size = max_size

    async def upload_document(
        self,
        content: Union[bytes, AsyncReadable],
        content_type: str,
        size: int,
        filename: str,
        product_type: str,
        on_progress: Optional[ProgressObserver] = None,
    ) -> Result[DocumentRead]:
        """Validate, store and register an uploaded PDF.

        Steps run strictly in order: validate the file and the record to be
        inserted, write the blob, insert the metadata record. If the insert
        fails the blob is deleted again (best effort) and the insert's
        ``MetadataError`` is returned. Progress observer failures are logged
        and never change the outcome.

        Args:
            content: File bytes or an async readable (e.g. ``UploadFile``)
            content_type: Declared media type
            size: Declared size in bytes
            filename: Original filename
            product_type: Product type tag for the document
            on_progress: Optional callable receiving 50 after the file is
                stored and 100 once the record exists. May be async.

        Returns:
            The persisted document, or one of ``InvalidInputError``,
            ``StorageWriteError``, ``MetadataError``
        """
        if not isinstance(content, (bytes, bytearray, memoryview)) and not callable(getattr(content, "seek", None)):
            # A source that cannot rewind is buffered so the signature check consumes nothing.
            try:
                content = await content.read()
            except Exception as e:
                logger.warning(f"Upload could not be read: filename={filename}, error={e}")
                return Result.failure(InvalidInputError("Failed to read file"))

        verdict = await validate_pdf(content, content_type, size, min_size=self.min_size, max_size=self.max_size)
        if not verdict.valid:
            logger.info(f"Upload rejected: filename={filename}, reason={verdict.reason}")
            return Result.failure(InvalidInputError(verdict.reason or "Invalid PDF file"))

        storage_key = build_storage_key(filename)
        document_type = classify_document(filename)

        try:
            record = DocumentCreateInternal(
                name=display_name(filename, document_type),
                description=f"{document_type.value} Document",
                filename=filename,
                url=self.blob_store.public_locator(storage_key),
                storage_key=storage_key,
                size=size,
                type=document_type,
                required=False,
                products=size_variants_for(product_type),
                product_type=product_type,
            )
        except SchemaValidationError as e:
            fields = ", ".join(str(error["loc"][0]) for error in e.errors() if error.get("loc"))
            logger.info(f"Upload rejected: filename={filename[:255]}, invalid fields={fields}")
            return Result.failure(InvalidInputError(f"Invalid document metadata: {fields}"))

        if isinstance(content, (bytes, bytearray, memoryview)):
            data = bytes(content)
        else:
            try:
                data = await content.read()
            except Exception as e:
                logger.warning(f"Upload could not be read: filename={filename}, error={e}")
                return Result.failure(InvalidInputError("Failed to read file"))

        try:
            await self.blob_store.put(storage_key, data, content_type)
        except StorageWriteError as e:
            return Result.failure(e)

        await _report_progress(on_progress, 50)

        try:
            document = await self.metadata_store.insert(record)
        except MetadataError as e:
            logger.warning(f"Metadata insert failed, removing stored blob: storage_key={storage_key}, error={e}")
            await self._remove_blob_quietly(storage_key)
            return Result.failure(e)

        await _report_progress(on_progress, 100)
        logger.info(
            f"Document uploaded: id={document.id}, type={document.type.value}, "
            f"product_type={product_type}, storage_key={storage_key}"
        )
        return Result.success(document)

    async def get_document(self, document_id: uuid.UUID) -> Optional[DocumentRead]:
        """Get a document by id, or None if it does not exist."""
        return await self.metadata_store.get_by_id(document_id)

    async def list_documents(self, product_type: Optional[str] = None) -> List[DocumentRead]:
        """List documents newest first, optionally only one product type."""
        return await self.metadata_store.list(product_type)

    async def update_document(
        self,
        document_id: uuid.UUID,
        update_data: DocumentUpdate,
    ) -> Result[DocumentRead]:
        """Update a document's metadata. The stored file is never touched.

        Returns:
            The updated document, None as value if it does not exist, or a
            ``MetadataError``
        """
        changes = update_data.model_dump(exclude_unset=True, mode="json")
        changes["updated_at"] = datetime.now(UTC)

        try:
            updated = await self.metadata_store.update(document_id, changes)
            if not updated:
                return Result.success(None)
            return Result.success(await self.metadata_store.get_by_id(document_id))
        except MetadataError as e:
            logger.error(f"Document update failed: id={document_id}, error={e}")
            return Result.failure(e)

    async def delete_document(self, document_id: uuid.UUID) -> Result[bool]:
        """Delete a document record, then its stored file.

        The record goes first; a failure to remove the file afterwards is
        only logged, since the record is already gone.

        Returns:
            True if deleted, False if it did not exist, or a ``MetadataError``
        """
        try:
            document = await self.metadata_store.get_by_id(document_id)
            if document is None:
                return Result.success(False)

            if not await self.metadata_store.delete(document_id):
                return Result.success(False)
        except MetadataError as e:
            logger.error(f"Document delete failed: id={document_id}, error={e}")
            return Result.failure(e)

        storage_key = document.storage_key or self.blob_store.key_for_locator(document.url)
        if storage_key:
            await self._remove_blob_quietly(storage_key)

        logger.info(f"Document deleted: id={document_id}")
        return Result.success(True)

    async def _remove_blob_quietly(self, storage_key: str) -> None:
        try:
            await self.blob_store.remove(storage_key)
        except StorageWriteError as e:
            logger.error(f"Failed to delete file from storage: storage_key={storage_key}, error={e}")
