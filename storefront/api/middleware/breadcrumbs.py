# 📄 File: storefront/api/middleware/breadcrumbs.py
# 🧭 Purpose (Layman Explanation):
# Builds the "Home > Products > Shoes" trail shown at the top of each page
# from the address the visitor asked for.
# 🧪 Purpose (Technical Summary):
# Pure breadcrumb builder (a fold over the path segments carrying the
# cumulative URL prefix) and the pipeline stage that stores the result on
# request state.
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (stage registration), storefront.api.templating (view context)

from dataclasses import dataclass
from functools import reduce
from typing import Optional, Tuple

from starlette.types import ASGIApp, Receive, Scope, Send

HOME = "Home"


@dataclass(frozen=True)
class Breadcrumb:
    """One navigational label; `url` is None for the current page."""
    name: str
    url: Optional[str]


def _label(segment: str) -> str:
    return segment[:1].upper() + segment[1:]


def build_breadcrumbs(path: str) -> Tuple[Breadcrumb, ...]:
    """
    Map a request path to its breadcrumb trail.

    Every segment but the last links to the cumulative path up to it; the
    last one is the current page. Empty segments (root path, trailing slash)
    produce an entry with an empty name.

    >>> [b.url for b in build_breadcrumbs("/products/shoes")]
    ['/', '/products', None]
    """
    segments = tuple(path[1:].split("/"))
    last = len(segments) - 1

    def step(acc, indexed):
        crumbs, prefix = acc
        index, segment = indexed
        prefix = f"{prefix}/{segment}"
        url = prefix if index != last else None
        return crumbs + (Breadcrumb(_label(segment), url),), prefix

    crumbs, _ = reduce(step, enumerate(segments), ((Breadcrumb(HOME, "/"),), ""))
    return crumbs


class BreadcrumbMiddleware:
    """
    Pipeline stage storing `build_breadcrumbs(path)` on request state.

    Pre: none. Post: `request.state.breadcrumbs` is set for HTTP requests.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            scope.setdefault("state", {})["breadcrumbs"] = build_breadcrumbs(scope["path"])
        await self.app(scope, receive, send)
