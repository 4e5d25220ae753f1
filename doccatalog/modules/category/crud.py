"""CRUD operations for category entities using FastCRUD."""

from fastcrud import FastCRUD

from .models import Category

category_crud: FastCRUD = FastCRUD(Category)
