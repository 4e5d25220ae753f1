"""Pydantic schemas for category entities."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..common.schemas import TimestampSchema


class CategoryBase(BaseModel):
    """Base schema for category data."""

    name: Annotated[str, Field(min_length=1, max_length=255, description="Category name")]
    product_type: Annotated[str, Field(min_length=1, max_length=64, description="Product type tag")]
    description: str = Field(default="", max_length=1000, description="Category description")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""

    pass


class CategoryUpdate(BaseModel):
    """Schema for updating an existing category."""

    name: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = None
    product_type: Optional[Annotated[str, Field(min_length=1, max_length=64)]] = None
    description: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name", "product_type", "description", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class CategoryRead(TimestampSchema, CategoryBase):
    """Schema for reading category data."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class CategoryListResponse(BaseModel):
    """Schema for paginated category list response."""

    data: List[CategoryRead]
    total_count: int
    has_more: bool
    page: int
    items_per_page: int
