# 📄 File: storefront/api/routes/__init__.py
# 🧭 Purpose (Layman Explanation):
# Lists the sections of the site (admin, products, user, pages, home) and the
# address each one lives under, in the order they are checked.
# 🧪 Purpose (Technical Summary):
# Router composition. ROUTE_MOUNTS fixes prefix precedence; mount_routers checks
# the table (unique prefixes, catch-all "/" last) and includes the routers in
# order so the first matching prefix wins.
# 🔄 Connected Modules / Calls From:
# storefront.main (create_application)

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from fastapi import APIRouter, FastAPI

from . import admin, index, pages, products, user

logger = logging.getLogger(__name__)

ROOT_PREFIX = "/"


@dataclass(frozen=True)
class RouteMount:
    """A router and the path prefix it is mounted on."""
    prefix: str
    router: APIRouter
    name: str


ROUTE_MOUNTS: Tuple[RouteMount, ...] = (
    RouteMount("/admin", admin.router, "admin"),
    RouteMount("/products", products.router, "products"),
    RouteMount("/user", user.router, "user"),
    RouteMount("/pages", pages.router, "pages"),
    RouteMount(ROOT_PREFIX, index.router, "index"),
)


def validate_mounts(mounts: Sequence[RouteMount]) -> None:
    """
    Check a mount table.

    Raises:
        ValueError: On a malformed or duplicate prefix, or a catch-all "/"
            mount that is not last
    """
    seen = set()
    for position, mount in enumerate(mounts):
        if not mount.prefix.startswith("/"):
            raise ValueError(f"Mount prefix must start with '/': {mount.prefix!r}")
        if mount.prefix != ROOT_PREFIX and mount.prefix.endswith("/"):
            raise ValueError(f"Mount prefix must not end with '/': {mount.prefix!r}")
        if mount.prefix in seen:
            raise ValueError(f"Duplicate mount prefix: {mount.prefix!r}")
        if mount.prefix == ROOT_PREFIX and position != len(mounts) - 1:
            raise ValueError("The catch-all '/' mount must be registered last")
        seen.add(mount.prefix)


def mount_routers(app: FastAPI, mounts: Sequence[RouteMount] = ROUTE_MOUNTS) -> None:
    """Include every router in mount order."""
    validate_mounts(mounts)
    for mount in mounts:
        prefix = "" if mount.prefix == ROOT_PREFIX else mount.prefix
        app.include_router(mount.router, prefix=prefix, tags=[mount.name])
        logger.debug(f"Mounted {mount.name} routes at {mount.prefix}")
