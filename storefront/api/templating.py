# 📄 File: storefront/api/templating.py
# 🧭 Purpose (Layman Explanation):
# Connects the page templates to the data every page needs, so each page knows
# who is signed in, which categories to list and where the visitor is on the site.
# 🧪 Purpose (Technical Summary):
# Jinja2Templates factory with a context processor publishing the shared view
# contract (`login`, `session`, `currentUser`, `categories`, `breadcrumbs`,
# `get_flashed_messages`) from request state, plus a `render` helper for routes
# and the error boundary.
# 🔗 Dependencies:
# fastapi.templating (Jinja2)
# 🔄 Connected Modules / Calls From:
# storefront.main (templates on app.state), route modules, storefront.api.errors

import logging
from typing import Any, Callable, Dict, List, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from storefront.shared.config.settings import Settings

logger = logging.getLogger(__name__)


def _flash_reader(request: Request) -> Callable[..., List[str]]:
    flash = request.scope.get("state", {}).get("flash")

    def get_flashed_messages(category: Optional[str] = None) -> List[str]:
        if flash is None:
            return []
        return flash.pop(category)

    return get_flashed_messages


def storefront_context(request: Request) -> Dict[str, Any]:
    """
    Shared view variables for every rendered page.

    Reads request state defensively: error pages can be rendered before the
    pipeline populated it.
    """
    state = request.scope.get("state", {})
    return {
        "login": bool(state.get("login", False)),
        "session": request.scope.get("session"),
        "currentUser": state.get("current_user"),
        "categories": state.get("categories", ()),
        "breadcrumbs": state.get("breadcrumbs", ()),
        "get_flashed_messages": _flash_reader(request),
    }


def create_templates(settings: Settings) -> Jinja2Templates:
    """Create the template renderer for the configured template directory."""
    templates = Jinja2Templates(
        directory=str(settings.TEMPLATES_DIR),
        context_processors=[storefront_context],
    )
    templates.env.globals["app_name"] = settings.APP_NAME
    return templates


def render(
    request: Request,
    name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
) -> Response:
    """Render a template with the application's renderer."""
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, name, context or {}, status_code=status_code)
