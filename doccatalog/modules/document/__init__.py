"""Reference document ingestion and export."""

from .export import ExportMaterializer
from .schemas import DocumentRead, DocumentType, DocumentUpdate, ExportReport
from .services import DocumentService
from .store import MetadataStore, SQLAlchemyMetadataStore

__all__ = [
    "DocumentService",
    "ExportMaterializer",
    "MetadataStore",
    "SQLAlchemyMetadataStore",
    "DocumentRead",
    "DocumentType",
    "DocumentUpdate",
    "ExportReport",
]
