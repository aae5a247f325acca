# 📄 File: storefront/api/routes/admin.py
# 🧭 Purpose (Layman Explanation):
# The shop owner's dashboard. Only administrators may open it.
# 🧪 Purpose (Technical Summary):
# Admin router mounted first under /admin; every route depends on require_admin.
# 🔄 Connected Modules / Calls From:
# storefront.api.routes (ROUTE_MOUNTS)

import logging

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from storefront.api.templating import render
from storefront.shared.core.dependencies import require_admin

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("")
async def dashboard(request: Request) -> Response:
    """Catalog overview for administrators."""
    products = await request.app.state.product_repository.list_all()
    categories = request.state.categories
    counts = {category.id: 0 for category in categories}
    for product in products:
        if product.category_id in counts:
            counts[product.category_id] += 1

    return render(
        request,
        "admin/dashboard.html",
        {
            "pageName": "Dashboard",
            "product_count": len(products),
            "category_counts": [(category, counts[category.id]) for category in categories],
        },
    )
