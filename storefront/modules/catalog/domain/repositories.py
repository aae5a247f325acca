# 📄 File: storefront/modules/catalog/domain/repositories.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for finding categories and products without saying which
# database holds them.
# 🧪 Purpose (Technical Summary):
# Repository interfaces for catalog entities following the Repository pattern
# and dependency inversion; implementations live in the infrastructure layer.
# 🔄 Connected Modules / Calls From:
# Global context middleware, products and index routes, SQLAlchemy implementations

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from uuid import UUID

from .models import Category, Product


class CategoryRepository(ABC):
    """
    Repository interface for Category data access.
    """

    @abstractmethod
    async def list_by_title(self) -> Sequence[Category]:
        """
        Get every category ordered by title ascending.

        Returns:
            All categories; never cached, read fresh on every call
        """
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Category]:
        """
        Get a category by its URL slug.

        Returns:
            Category if found, None otherwise
        """
        pass


class ProductRepository(ABC):
    """
    Repository interface for Product data access.
    """

    @abstractmethod
    async def list_all(self) -> Sequence[Product]:
        """Get all products, newest first."""
        pass

    @abstractmethod
    async def list_latest(self, limit: int) -> Sequence[Product]:
        """Get the `limit` most recently created products."""
        pass

    @abstractmethod
    async def list_by_category(self, category_id: UUID) -> Sequence[Product]:
        """Get the products of one category, newest first."""
        pass

    @abstractmethod
    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        """
        Get a product by ID.

        Returns:
            Product if found, None otherwise
        """
        pass
