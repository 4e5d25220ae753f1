"""Category API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ....modules.category.schemas import CategoryCreate, CategoryListResponse, CategoryRead, CategoryUpdate
from ....modules.category.services import CategoryService
from ....modules.common.utils.error_handler import handle_exception
from ..dependencies import DbSession, get_category_service

router = APIRouter(prefix="/category", tags=["Categories"])


@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Create New Category",
    description="""
    Creates a new product category.

    - **name**: Unique category name
    - **product_type**: Product type tag shared with documents
    - **description**: Optional description
    """,
    responses={
        201: {"description": "Category created successfully"},
        409: {"description": "Category name already exists"},
        422: {"description": "Invalid category data"},
    },
)
async def create_category(
    category_data: CategoryCreate,
    db: DbSession,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryRead:
    """Create a new category."""
    try:
        return await category_service.create_category(category_data, db)
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.get(
    "/exists",
    summary="Check Category Name",
    responses={200: {"description": "Whether the name is taken"}},
)
async def category_name_exists(
    name: Annotated[str, Query(min_length=1, description="Category name to check")],
    db: DbSession,
    category_service: CategoryService = Depends(get_category_service),
) -> dict[str, bool]:
    """Check if a category name is already taken."""
    return {"exists": await category_service.category_name_exists(name, db)}


@router.get(
    "/{category_id}",
    summary="Get Category Details",
    responses={
        200: {"description": "Category details"},
        404: {"description": "Category not found"},
    },
)
async def get_category(
    category_id: int,
    db: DbSession,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryRead:
    """Get a specific category by ID."""
    result = await category_service.get_category(category_id, db)
    if not result:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return result


@router.get(
    "/",
    response_model=CategoryListResponse,
    summary="List Categories",
    description="""
    Retrieves a paginated list of categories, most recent first.

    - **product_type**: Optional product type filter
    - **page**: Page number (1-indexed, default: 1)
    - **items_per_page**: Number of categories per page (default: 50, max: 100)
    """,
)
async def get_categories(
    db: DbSession,
    product_type: Annotated[Optional[str], Query(description="Filter by product type")] = None,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    items_per_page: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 50,
    category_service: CategoryService = Depends(get_category_service),
):
    """Get categories with pagination and optional product type filtering."""
    return await category_service.get_categories(db, product_type, page, items_per_page)


@router.patch(
    "/{category_id}",
    response_model=CategoryRead,
    summary="Update Category",
    responses={
        200: {"description": "Category updated successfully"},
        404: {"description": "Category not found"},
        409: {"description": "Category name already exists"},
    },
)
async def update_category(
    category_id: int,
    update_data: CategoryUpdate,
    db: DbSession,
    category_service: CategoryService = Depends(get_category_service),
) -> CategoryRead:
    """Update a category."""
    try:
        result = await category_service.update_category(category_id, update_data, db)
        if not result:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        return result
    except Exception as e:
        http_exc = handle_exception(e)
        if http_exc:
            raise http_exc
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Category",
    responses={
        204: {"description": "Category deleted successfully"},
        404: {"description": "Category not found"},
    },
)
async def delete_category(
    category_id: int,
    db: DbSession,
    category_service: CategoryService = Depends(get_category_service),
) -> None:
    """Delete a category."""
    if not await category_service.delete_category(category_id, db):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
