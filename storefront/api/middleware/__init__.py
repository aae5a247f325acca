# 📄 File: storefront/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Gathers the helpers that look at every request before a page is built: logging,
# reading forms, serving files, sessions, sign-in and the shared page data.
# 🧪 Purpose (Technical Summary):
# Package initialization for the pipeline stages. The order they run in is owned
# by storefront.api.pipeline, not by this package.
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline, storefront.main, route modules (auth helpers)

"""
Storefront Request Pipeline Stages

Stage order (outermost first):
    1. RequestLoggingMiddleware
    2. BodyParserMiddleware
    3. PublicAssetsMiddleware (may end the request)
    4. ServerSideSessionMiddleware
    5. FlashMiddleware
    6. AuthInitMiddleware
    7. SessionAuthMiddleware
    8. GlobalContextMiddleware (may end the request with a redirect)
    9. BreadcrumbMiddleware
"""

from .authentication import (
    AUTH_SESSION_KEY,
    AuthInitMiddleware,
    SessionAuthMiddleware,
    login_user,
    logout_user,
)
from .breadcrumbs import Breadcrumb, BreadcrumbMiddleware, build_breadcrumbs
from .context import CategoryFetch, GlobalContextMiddleware, fetch_categories
from .flash import FlashMessages, FlashMiddleware
from .logging import RequestLoggingMiddleware
from .parsers import BodyParserMiddleware
from .sessions import ServerSideSessionMiddleware, Session
from .static_files import PublicAssetsMiddleware

__all__ = [
    "AUTH_SESSION_KEY",
    "AuthInitMiddleware",
    "SessionAuthMiddleware",
    "login_user",
    "logout_user",
    "Breadcrumb",
    "BreadcrumbMiddleware",
    "build_breadcrumbs",
    "CategoryFetch",
    "GlobalContextMiddleware",
    "fetch_categories",
    "FlashMessages",
    "FlashMiddleware",
    "RequestLoggingMiddleware",
    "BodyParserMiddleware",
    "ServerSideSessionMiddleware",
    "Session",
    "PublicAssetsMiddleware",
]
