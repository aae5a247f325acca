# 📄 File: storefront/api/routes/products.py
# 🧭 Purpose (Layman Explanation):
# The catalog pages: every product, the products of one category, and a single product.
# 🧪 Purpose (Technical Summary):
# Product router mounted under /products. Missing categories or products raise
# NotFoundError, rendered as 404 by the error boundary.
# 🔄 Connected Modules / Calls From:
# storefront.api.routes (ROUTE_MOUNTS)

import logging
from uuid import UUID

from fastapi import APIRouter, Request
from starlette.responses import Response

from storefront.api.templating import render
from storefront.modules.catalog.domain.models import Category
from storefront.shared.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_category(request: Request, slug: str) -> Category:
    category = await request.app.state.category_repository.get_by_slug(slug)
    if category is None:
        raise NotFoundError("Category not found", resource_type="category", resource_id=slug)
    return category


@router.get("")
async def all_products(request: Request) -> Response:
    products = await request.app.state.product_repository.list_all()
    return render(request, "products/list.html", {"pageName": "All Products", "products": products})


@router.get("/{slug}")
async def category_products(request: Request, slug: str) -> Response:
    """Products of one category."""
    category = await _get_category(request, slug)
    products = await request.app.state.product_repository.list_by_category(category.id)
    return render(
        request,
        "products/list.html",
        {"pageName": category.title, "category": category, "products": products},
    )


@router.get("/{slug}/{product_id}")
async def product_detail(request: Request, slug: str, product_id: str) -> Response:
    """Single product page; the product must belong to the category in the URL."""
    category = await _get_category(request, slug)
    try:
        parsed_id = UUID(product_id)
    except ValueError:
        raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

    product = await request.app.state.product_repository.get_by_id(parsed_id)
    if product is None or product.category_id != category.id:
        raise NotFoundError("Product not found", resource_type="product", resource_id=product_id)

    return render(
        request,
        "products/detail.html",
        {"pageName": product.title, "category": category, "product": product},
    )
