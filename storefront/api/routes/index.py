# 📄 File: storefront/api/routes/index.py
# 🧭 Purpose (Layman Explanation):
# The shop's front page, showing the newest products.
# 🧪 Purpose (Technical Summary):
# Catch-all router mounted last at "/".
# 🔄 Connected Modules / Calls From:
# storefront.api.routes (ROUTE_MOUNTS)

from fastapi import APIRouter, Request
from starlette.responses import Response

from storefront.api.templating import render

router = APIRouter()


@router.get("/")
async def home(request: Request) -> Response:
    """Home page with the latest products."""
    settings = request.app.state.settings
    products = await request.app.state.product_repository.list_latest(settings.HOME_PRODUCTS_LIMIT)
    return render(request, "index.html", {"pageName": "Home", "products": products})
