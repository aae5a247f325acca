# 📄 File: storefront/modules/catalog/infrastructure/repositories.py
# 🧭 Purpose (Layman Explanation):
# The actual code that reads categories and products out of the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementations of the catalog repository contracts. Each call
# opens a read-only session from the DatabaseManager and maps ORM rows to
# immutable domain entities.
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (repository wiring in the lifespan)

import logging
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import select

from storefront.modules.catalog.domain.models import Category, Product
from storefront.modules.catalog.domain.repositories import CategoryRepository, ProductRepository
from storefront.shared.infrastructure.database.connection import DatabaseManager

from .models import CategoryModel, ProductModel

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(CategoryRepository):
    """
    Category repository backed by async SQLAlchemy.
    """

    def __init__(self, database: DatabaseManager):
        self._database = database

    async def list_by_title(self) -> Sequence[Category]:
        stmt = select(CategoryModel).order_by(CategoryModel.title.asc())
        async with self._database.read_only_session() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        return tuple(self._model_to_domain(row) for row in rows)

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        stmt = select(CategoryModel).where(CategoryModel.slug == slug)
        async with self._database.read_only_session() as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()

        if row is None:
            logger.debug(f"Category not found: {slug}")
            return None
        return self._model_to_domain(row)

    @staticmethod
    def _model_to_domain(model: CategoryModel) -> Category:
        return Category(
            id=model.id,
            title=model.title,
            slug=model.slug,
            created_at=model.created_at,
        )


class SQLAlchemyProductRepository(ProductRepository):
    """
    Product repository backed by async SQLAlchemy.
    """

    def __init__(self, database: DatabaseManager):
        self._database = database

    async def list_all(self) -> Sequence[Product]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc())
        return await self._fetch(stmt)

    async def list_latest(self, limit: int) -> Sequence[Product]:
        stmt = select(ProductModel).order_by(ProductModel.created_at.desc()).limit(limit)
        return await self._fetch(stmt)

    async def list_by_category(self, category_id: UUID) -> Sequence[Product]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.category_id == category_id)
            .order_by(ProductModel.created_at.desc())
        )
        return await self._fetch(stmt)

    async def get_by_id(self, product_id: UUID) -> Optional[Product]:
        async with self._database.read_only_session() as session:
            row = await session.get(ProductModel, product_id)

        if row is None:
            logger.debug(f"Product not found: {product_id}")
            return None
        return self._model_to_domain(row)

    async def _fetch(self, stmt) -> Sequence[Product]:
        async with self._database.read_only_session() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
        return tuple(self._model_to_domain(row) for row in rows)

    @staticmethod
    def _model_to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            product_code=model.product_code,
            title=model.title,
            image_path=model.image_path,
            description=model.description,
            price=model.price,
            manufacturer=model.manufacturer,
            available=model.available,
            category_id=model.category_id,
            created_at=model.created_at,
        )
