"""Category management service."""

from datetime import UTC, datetime
from typing import Any, Dict, Optional, cast

from fastcrud.paginated.response import paginated_response
from sqlalchemy.ext.asyncio import AsyncSession

from ..common.exceptions import ResourceExistsError
from .crud import category_crud
from .schemas import CategoryCreate, CategoryRead, CategoryUpdate


class CategoryService:
    """Service for managing product categories.

    Categories are plain records; the only rule is that names are unique.
    """

    async def category_name_exists(self, name: str, db: AsyncSession) -> bool:
        """Check whether a category with this exact name exists."""
        return bool(await category_crud.exists(db=db, name=name))

    async def create_category(
        self,
        category_data: CategoryCreate,
        db: AsyncSession,
    ) -> CategoryRead:
        """Create a new category.

        Args:
            category_data: Category creation data
            db: Database session

        Returns:
            The created category

        Raises:
            ResourceExistsError: If the name is already taken
        """
        if await self.category_name_exists(category_data.name, db):
            raise ResourceExistsError(f"Category '{category_data.name}' already exists")

        created_category = cast(Any, await category_crud.create(db=db, object=category_data))

        return CategoryRead.model_validate(created_category, from_attributes=True)

    async def get_category(
        self,
        category_id: int,
        db: AsyncSession,
    ) -> Optional[CategoryRead]:
        """Get a category by ID, or None if it does not exist."""
        row = await category_crud.get(db=db, id=category_id)
        if not row:
            return None
        return CategoryRead(**row)

    async def get_categories(
        self,
        db: AsyncSession,
        product_type: Optional[str] = None,
        page: int = 1,
        items_per_page: int = 50,
    ) -> dict[str, Any]:
        """Get categories newest first, optionally filtered by product type.

        Args:
            db: Database session
            product_type: Only return categories of this product type
            page: Page number (1-indexed)
            items_per_page: Number of categories per page

        Returns:
            Paginated response with categories
        """
        filters: Dict[str, Any] = {}
        if product_type is not None:
            filters["product_type"] = product_type

        offset = (page - 1) * items_per_page
        stmt = await category_crud.select(sort_columns="created_at", sort_orders="desc", **filters)
        stmt = stmt.offset(offset).limit(items_per_page)

        result = await db.execute(stmt)
        categories = [CategoryRead(**row).model_dump() for row in result.mappings().all()]
        total_count = await category_crud.count(db=db, **filters)

        crud_data = {"data": categories, "total_count": total_count}

        return paginated_response(crud_data, page, items_per_page)

    async def update_category(
        self,
        category_id: int,
        update_data: CategoryUpdate,
        db: AsyncSession,
    ) -> Optional[CategoryRead]:
        """Update a category.

        Returns:
            The updated category, or None if it does not exist

        Raises:
            ResourceExistsError: If renamed to a name another category uses
        """
        existing = await self.get_category(category_id, db)
        if existing is None:
            return None

        update_dict = update_data.model_dump(exclude_unset=True)
        new_name = update_dict.get("name")
        if new_name is not None and new_name != existing.name and await self.category_name_exists(new_name, db):
            raise ResourceExistsError(f"Category '{new_name}' already exists")

        update_dict["updated_at"] = datetime.now(UTC)
        await category_crud.update(db=db, id=category_id, object=update_dict)

        return await self.get_category(category_id, db)

    async def delete_category(
        self,
        category_id: int,
        db: AsyncSession,
    ) -> bool:
        """Delete a category.

        Returns:
            True if deleted, False if it did not exist
        """
        if not await category_crud.exists(db=db, id=category_id):
            return False

        await category_crud.delete(db=db, id=category_id)
        return True
