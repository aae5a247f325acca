# 📄 File: storefront/api/middleware/context.py
# 🧭 Purpose (Layman Explanation):
# Before any page is drawn, gathers the things every page shows: whether the
# visitor is signed in, who they are, and the list of shop categories for the menu.
# 🧪 Purpose (Technical Summary):
# Global context stage. Copies auth state to request state and fetches the
# category list fresh on every request. The fetch returns an explicit
# CategoryFetch result; what happens on failure is the configured
# ContextFailurePolicy (redirect to "/" or raise to the error boundary).
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, storefront.modules.catalog, storefront.shared.config
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (eighth stage), storefront.api.templating (view context)

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from fastapi import Request, Response
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from storefront.modules.catalog.domain.models import Category
from storefront.modules.catalog.domain.repositories import CategoryRepository
from storefront.shared.config.settings import ContextFailurePolicy
from storefront.shared.core.exceptions import PipelineConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryFetch:
    """Outcome of loading the category menu: either categories or the error."""
    categories: Tuple[Category, ...] = ()
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def fetch_categories(repository: CategoryRepository) -> CategoryFetch:
    """
    Load every category ordered by title.

    Never raises; a failing repository is reported through `CategoryFetch.error`.
    """
    try:
        categories = await repository.list_by_title()
    except Exception as e:
        return CategoryFetch(error=e)
    return CategoryFetch(categories=tuple(categories))


class GlobalContextMiddleware(BaseHTTPMiddleware):
    """
    Pipeline stage exposing shared view state.

    Pre: auth_session has run. Post: `request.state.login`,
    `request.state.current_user`, `request.state.session` and
    `request.state.categories` are set, or the request was answered by the
    failure policy.
    """

    def __init__(
        self,
        app: ASGIApp,
        failure_policy: ContextFailurePolicy = ContextFailurePolicy.REDIRECT_HOME,
        redirect_url: str = "/",
    ):
        super().__init__(app)
        self.failure_policy = ContextFailurePolicy(failure_policy)
        self.redirect_url = redirect_url

    async def dispatch(self, request: Request, call_next) -> Response:
        if "user" not in request.scope.get("state", {}):
            raise PipelineConfigurationError(stage="global_context", requires="auth_session")

        user = request.state.user
        request.state.login = user is not None
        request.state.current_user = user
        request.state.session = request.session

        result = await fetch_categories(request.app.state.category_repository)
        if not result.ok:
            if self.failure_policy is ContextFailurePolicy.RAISE:
                raise result.error

            logger.error(
                f"Category fetch failed for {request.method} {request.url.path}, "
                f"redirecting to {self.redirect_url}: {type(result.error).__name__}: {result.error}"
            )
            return RedirectResponse(self.redirect_url, status_code=302)

        request.state.categories = result.categories
        return await call_next(request)
