"""Document API endpoints."""

import uuid
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status

from ....modules.common.utils.error_handler import handle_exception
from ....modules.document.export import ExportMaterializer
from ....modules.document.schemas import DocumentRead, DocumentUpdate, ExportReport
from ....modules.document.services import DocumentService
from ..dependencies import get_document_service, get_export_materializer

router = APIRouter(prefix="/document", tags=["Documents"])


def _http_error(error: Exception) -> HTTPException:
    http_exc = handle_exception(error)
    if http_exc:
        return http_exc
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.post(
    "/upload",
    status_code=status.HTTP_201_CREATED,
    summary="Upload Document",
    description="""
    Uploads a PDF reference document.

    The file is validated, stored, classified from its filename and
    registered in the catalog. If the catalog record cannot be written the
    stored file is removed again.

    - **file**: PDF file (more than 1KB, at most 50MB, `application/pdf`)
    - **product_type**: Product type the document belongs to
    """,
    responses={
        201: {"description": "Document uploaded and registered"},
        422: {"description": "File rejected by validation"},
        500: {"description": "Document record could not be saved"},
        502: {"description": "File could not be stored"},
    },
    response_description="The registered document",
)
async def upload_document(
    file: Annotated[UploadFile, File(description="PDF file to upload")],
    product_type: Annotated[str, Form(min_length=1, max_length=64, description="Product type tag")],
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    """Upload a new document."""
    try:
        size = file.size
        if size is None:
            size = len(await file.read())
            await file.seek(0)

        result = await document_service.upload_document(
            content=file,
            content_type=file.content_type or "",
            size=size,
            filename=file.filename or "document.pdf",
            product_type=product_type,
        )
        document = result.unwrap()
        if document is None:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Upload produced no document")
        return document
    except Exception as e:
        raise _http_error(e)


@router.get(
    "/export",
    summary="Export Documents",
    description="""
    Returns every document with its file content embedded as base64.

    Documents whose file cannot be fetched are left out of `documents` and
    listed in `skipped` with the reason. The export itself does not fail
    because of individual documents.
    """,
    responses={200: {"description": "Export payload"}},
)
async def export_documents(
    materializer: ExportMaterializer = Depends(get_export_materializer),
) -> ExportReport:
    """Export all documents with their file data."""
    try:
        return await materializer.export_all()
    except Exception as e:
        raise _http_error(e)


@router.get(
    "/{document_id}",
    summary="Get Document Details",
    responses={
        200: {"description": "Document details"},
        404: {"description": "Document not found"},
    },
)
async def get_document(
    document_id: uuid.UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    """Get a specific document by ID."""
    try:
        result = await document_service.get_document(document_id)
        if not result:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
        return result
    except Exception as e:
        raise _http_error(e)


@router.get(
    "/",
    summary="List Documents",
    description="""
    Lists documents, most recently uploaded first.

    - **product_type**: Optional product type to filter by
    """,
    responses={200: {"description": "Documents"}},
)
async def get_documents(
    product_type: Annotated[Optional[str], Query(description="Filter by product type")] = None,
    document_service: DocumentService = Depends(get_document_service),
) -> List[DocumentRead]:
    """List documents with optional product type filtering."""
    try:
        return await document_service.list_documents(product_type)
    except Exception as e:
        raise _http_error(e)


@router.patch(
    "/{document_id}",
    response_model=DocumentRead,
    summary="Update Document",
    description="""Update a document's catalog metadata.

    Only the catalog record changes; the stored file is left as it is.
    """,
    responses={
        200: {"description": "Document updated successfully"},
        404: {"description": "Document not found"},
        422: {"description": "Invalid update data"},
    },
)
async def update_document(
    document_id: uuid.UUID,
    update_data: DocumentUpdate,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentRead:
    """Update a document."""
    try:
        result = await document_service.update_document(document_id, update_data)
        document = result.unwrap()
        if not document:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
        return document
    except Exception as e:
        raise _http_error(e)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Document",
    description="""Delete a document record and its stored file.

    The record is removed first. Failing to remove the file afterwards is
    logged and does not fail the request.
    """,
    responses={
        204: {"description": "Document deleted successfully"},
        404: {"description": "Document not found"},
    },
)
async def delete_document(
    document_id: uuid.UUID,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """Delete a document and its file."""
    try:
        result = await document_service.delete_document(document_id)
        if not result.unwrap():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    except Exception as e:
        raise _http_error(e)
