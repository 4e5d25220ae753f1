"""Product categories."""

from .schemas import CategoryCreate, CategoryRead, CategoryUpdate
from .services import CategoryService

__all__ = ["CategoryService", "CategoryCreate", "CategoryRead", "CategoryUpdate"]
