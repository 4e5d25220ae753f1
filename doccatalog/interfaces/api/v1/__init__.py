from fastapi import APIRouter

from .category import router as category_router
from .document import router as document_router

router = APIRouter(prefix="/v1")
router.include_router(document_router)
router.include_router(category_router)


@router.get(
    "/health",
    summary="API Health Check",
    description="Simple health check endpoint for monitoring and container orchestration.",
    responses={
        200: {"description": "API is healthy and responding"},
    },
)
async def health_check():
    """Health check endpoint for Docker health checks."""
    return {"status": "healthy", "message": "Document Catalog API is running"}
