import os

from fastapi.staticfiles import StaticFiles

from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import StorageBackend, get_settings
from ..interfaces.api import router as api_router

settings = get_settings()


app = create_application(
    router=api_router,
    settings=settings,
    title="Document Catalog API",
    summary="REST API for ingesting and exporting product reference documents",
    description="""
    # Document Catalog API

    This API manages the PDF reference documents attached to products:

    * 📄 **Upload**: Validate, store and classify PDF documents
    * 🗂️ **Catalog**: Query documents by product type, edit their metadata
    * 📦 **Export**: Download every document with its file content embedded
    * 🏷️ **Categories**: Maintain the product categories documents belong to

    ## Features

    - PDF validation by media type, size and file signature
    - Document type classification from the filename
    - Local filesystem or S3-compatible blob storage
    - Stored files are removed again when their catalog record cannot be written
    """,
    version=settings.VERSION,
)

if settings.STORAGE_BACKEND == StorageBackend.LOCAL:
    os.makedirs(settings.BLOB_STORAGE_PATH, exist_ok=True)
    app.mount(settings.BLOB_PUBLIC_PATH, StaticFiles(directory=settings.BLOB_STORAGE_PATH), name="files")
