# 📄 File: storefront/modules/catalog/domain/models.py
# 🧭 Purpose (Layman Explanation):
# Describes what a product category and a product look like in the shop,
# independent of how they are stored.
# 🧪 Purpose (Technical Summary):
# Immutable domain entities returned by catalog repositories and handed to views.
# 🔄 Connected Modules / Calls From:
# Catalog repositories, global context middleware, products and index routes

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Category:
    """A product category shown in the site navigation."""
    title: str
    slug: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class Product:
    """A product listed in the catalog."""
    product_code: str
    title: str
    price: Decimal
    category_id: UUID
    description: str = ""
    image_path: Optional[str] = None
    manufacturer: Optional[str] = None
    available: bool = True
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=_utcnow)
