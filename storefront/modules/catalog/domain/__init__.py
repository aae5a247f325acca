"""Catalog domain: entities and repository contracts."""

from .models import Category, Product
from .repositories import CategoryRepository, ProductRepository

__all__ = ["Category", "Product", "CategoryRepository", "ProductRepository"]
