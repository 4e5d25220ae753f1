"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config.settings import get_settings
from ...infrastructure.database import async_session
from ...infrastructure.storage import BlobStore, get_blob_store
from ...modules.category.services import CategoryService
from ...modules.document.export import ExportMaterializer
from ...modules.document.services import DocumentService
from ...modules.document.store import MetadataStore, SQLAlchemyMetadataStore

DbSession = Annotated[AsyncSession, Depends(async_session)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]


def get_metadata_store(db: DbSession) -> MetadataStore:
    """Dependency for a metadata store bound to the request's session."""
    return SQLAlchemyMetadataStore(db)


MetadataStoreDep = Annotated[MetadataStore, Depends(get_metadata_store)]


def get_document_service(blob_store: BlobStoreDep, metadata_store: MetadataStoreDep) -> DocumentService:
    """Dependency for providing a DocumentService instance."""
    settings = get_settings()
    return DocumentService(
        blob_store,
        metadata_store,
        min_size=settings.UPLOAD_MIN_SIZE_BYTES,
        max_size=settings.UPLOAD_MAX_SIZE_BYTES,
    )


def get_export_materializer(blob_store: BlobStoreDep, metadata_store: MetadataStoreDep) -> ExportMaterializer:
    """Dependency for providing an ExportMaterializer instance."""
    return ExportMaterializer(metadata_store, blob_store, fetch_timeout=get_settings().EXPORT_FETCH_TIMEOUT)


def get_category_service() -> CategoryService:
    """Dependency for providing a CategoryService instance."""
    return CategoryService()
