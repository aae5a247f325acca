# 📄 File: storefront/api/routes/pages.py
# 🧭 Purpose (Layman Explanation):
# The shop's static information pages: about us, shipping policy and careers.
# 🧪 Purpose (Technical Summary):
# Template-only routes mounted under /pages.
# 🔄 Connected Modules / Calls From:
# storefront.api.routes (ROUTE_MOUNTS)

from fastapi import APIRouter, Request
from starlette.responses import Response

from storefront.api.templating import render

router = APIRouter()


@router.get("/about-us")
async def about_us(request: Request) -> Response:
    return render(request, "pages/about_us.html", {"pageName": "About Us"})


@router.get("/shipping-policy")
async def shipping_policy(request: Request) -> Response:
    return render(request, "pages/shipping_policy.html", {"pageName": "Shipping Policy"})


@router.get("/careers")
async def careers(request: Request) -> Response:
    return render(request, "pages/careers.html", {"pageName": "Careers"})
