# 📄 File: storefront/api/middleware/static_files.py
# 🧭 Purpose (Layman Explanation):
# Hands out the shop's stylesheets, pictures and scripts straight from the public
# folder, without bothering the rest of the app (sessions, login, categories).
# 🧪 Purpose (Technical Summary):
# Public asset stage (pure ASGI). When a GET/HEAD path resolves to a regular file
# inside the public directory, the request is answered by Starlette's StaticFiles
# and the remaining pipeline stages never run. Anything else passes through.
# 🔗 Dependencies:
# starlette.staticfiles
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (third stage, the only short-circuiting stage)

import logging
import os
from pathlib import Path
from typing import Optional, Union

from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)


def resolve_public_file(public_dir: Union[str, Path], request_path: str) -> Optional[Path]:
    """
    Map a request path to a file under `public_dir`.

    Returns None when the path is not a regular file or escapes the directory.
    """
    root = os.path.realpath(public_dir)
    relative = request_path.lstrip("/")
    if not relative:
        return None

    candidate = os.path.realpath(os.path.join(root, relative))
    if os.path.commonpath([root, candidate]) != root:
        logger.warning(f"Rejected asset path outside public directory: {request_path}")
        return None
    if not os.path.isfile(candidate):
        return None
    return Path(candidate)


class PublicAssetsMiddleware:
    """
    Pipeline stage serving files from the public directory.

    Pre: none. Post: either the response is the file (short-circuit) or the
    request continues unchanged.
    """

    def __init__(self, app: ASGIApp, directory: Union[str, Path]):
        self.app = app
        self.directory = Path(directory)
        self.files = StaticFiles(directory=self.directory, check_dir=False)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] == "http"
            and scope["method"] in ("GET", "HEAD")
            and resolve_public_file(self.directory, scope["path"]) is not None
        ):
            await self.files(scope, receive, send)
            return

        await self.app(scope, receive, send)
