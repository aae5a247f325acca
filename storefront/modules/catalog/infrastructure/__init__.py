"""Catalog infrastructure: SQLAlchemy models and repository implementations."""

from .models import CategoryModel, ProductModel
from .repositories import SQLAlchemyCategoryRepository, SQLAlchemyProductRepository

__all__ = [
    "CategoryModel",
    "ProductModel",
    "SQLAlchemyCategoryRepository",
    "SQLAlchemyProductRepository",
]
