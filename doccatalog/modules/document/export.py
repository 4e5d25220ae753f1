"""Batch export of stored documents with their file content embedded."""

import base64
from typing import Optional

import httpx

from ...infrastructure.logging import get_logger
from ...infrastructure.storage import BlobStore
from ..common.exceptions import StorageReadError
from .schemas import DocumentRead, ExportReport, MaterializedDocument, SkippedDocument
from .store import MetadataStore

logger = get_logger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0


class ExportMaterializer:
    """Builds the export payload consumed by the document-assembly process.

    Each document's file is fetched and base64-encoded into the payload.
    A document whose file cannot be fetched is left out and recorded in
    ``ExportReport.skipped``; the export itself does not fail because of it.

    Files are read through the blob store when it serves the document's
    locator, otherwise with an HTTP GET.
    """

    def __init__(
        self,
        metadata_store: MetadataStore,
        blob_store: BlobStore,
        http_client: Optional[httpx.AsyncClient] = None,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT,
    ):
        self.metadata_store = metadata_store
        self.blob_store = blob_store
        self.http_client = http_client
        self.fetch_timeout = fetch_timeout

    async def export_all(self) -> ExportReport:
        """Materialize every document, one at a time."""
        report = ExportReport()
        documents = await self.metadata_store.list()

        if self.http_client is not None:
            await self._materialize_all(documents, report, self.http_client)
        else:
            async with httpx.AsyncClient(timeout=self.fetch_timeout, follow_redirects=True) as client:
                await self._materialize_all(documents, report, client)

        logger.info(
            f"Export finished: exported={len(report.documents)}, skipped={len(report.skipped)}, total={len(documents)}"
        )
        return report

    async def _materialize_all(self, documents, report: ExportReport, client: httpx.AsyncClient) -> None:
        for document in documents:
            if not document.url:
                report.skipped.append(SkippedDocument(id=document.id, filename=document.filename, reason="missing locator"))
                continue

            try:
                data = await self._fetch(document, client)
            except StorageReadError as e:
                logger.error(f"Failed to get file data for document {document.id}: {e}")
                report.skipped.append(SkippedDocument(id=document.id, filename=document.filename, reason=str(e)))
                continue

            report.documents.append(
                MaterializedDocument(
                    **document.model_dump(),
                    file_data=base64.b64encode(data).decode("ascii"),
                )
            )

    async def _fetch(self, document: DocumentRead, client: httpx.AsyncClient) -> bytes:
        if self.blob_store.owns_locator(document.url):
            return await self.blob_store.read(document.url)

        try:
            response = await client.get(document.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageReadError(f"Failed to fetch {document.url}: {e}") from e

        return response.content
