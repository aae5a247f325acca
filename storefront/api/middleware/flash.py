# 📄 File: storefront/api/middleware/flash.py
# 🧭 Purpose (Layman Explanation):
# Lets one page leave a short note ("Welcome back!") that is shown once on the
# next page the visitor sees, then thrown away.
# 🧪 Purpose (Technical Summary):
# One-shot message facility stored in the session under "flash". The stage
# attaches a FlashMessages helper to `request.state.flash`; it must run after
# the session stage.
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (fifth stage), auth guards, user routes

import logging
from typing import Dict, List, Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from storefront.shared.core.exceptions import PipelineConfigurationError

logger = logging.getLogger(__name__)

FLASH_KEY = "flash"


class FlashMessages:
    """Category-keyed messages that survive exactly one read."""

    def __init__(self, session: dict):
        self.session = session

    def add(self, category: str, message: str) -> None:
        messages: Dict[str, List[str]] = dict(self.session.get(FLASH_KEY) or {})
        messages[category] = [*messages.get(category, []), message]
        # Reassign so the session records the write
        self.session[FLASH_KEY] = messages

    def pop(self, category: Optional[str] = None) -> List[str]:
        """
        Return and remove queued messages.

        With no category, every queued message is returned in insertion order.
        """
        messages: Dict[str, List[str]] = dict(self.session.get(FLASH_KEY) or {})
        if not messages:
            return []

        if category is None:
            result = [m for queued in messages.values() for m in queued]
            messages = {}
        else:
            result = messages.pop(category, [])
            if not result:
                return []

        if messages:
            self.session[FLASH_KEY] = messages
        else:
            self.session.pop(FLASH_KEY, None)
        return result


class FlashMiddleware:
    """
    Pipeline stage attaching `request.state.flash`.

    Pre: session stage has run. Post: `request.state.flash` is a FlashMessages.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            if "session" not in scope:
                raise PipelineConfigurationError(stage="flash", requires="session")
            scope.setdefault("state", {})["flash"] = FlashMessages(scope["session"])
        await self.app(scope, receive, send)
