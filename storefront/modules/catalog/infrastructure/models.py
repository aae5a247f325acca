# 📄 File: storefront/modules/catalog/infrastructure/models.py
# 🧭 Purpose (Layman Explanation):
# Defines how categories and products are stored in the database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models mapping catalog entities to the `categories` and
# `products` tables with UUID primary keys and timestamps.
#
# 🔄 Connected Modules / Calls From:
# - repositories.py (queries and entity mapping)
# - migrations/versions/001_initial_tables.py (schema)

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.shared.config.database import DatabaseBase


class CategoryModel(DatabaseBase):
    """
    SQLAlchemy model for product categories.
    """
    __tablename__ = "categories"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(140), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    products: Mapped[list["ProductModel"]] = relationship(back_populates="category")

    def __repr__(self) -> str:
        return f"<CategoryModel(id={self.id}, slug='{self.slug}')>"


class ProductModel(DatabaseBase):
    """
    SQLAlchemy model for catalog products.
    """
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("price >= 0", name="price_non_negative"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    product_code: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    image_path: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    manufacturer: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )

    category: Mapped[CategoryModel] = relationship(back_populates="products")

    def __repr__(self) -> str:
        return f"<ProductModel(id={self.id}, code='{self.product_code}')>"
