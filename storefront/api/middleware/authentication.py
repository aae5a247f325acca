# 📄 File: storefront/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# Works out whether the visitor is signed in by looking at their session, and
# offers the helpers used when someone signs in or out.
# 🧪 Purpose (Technical Summary):
# Two pipeline stages: auth initialization (anonymous default on request state)
# and session restore (user id in the session -> User via the user repository,
# dropping stale ids). Plus login/logout helpers that rotate or destroy the session.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, storefront.modules.accounts
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (sixth and seventh stages), user routes,
# storefront.shared.core.dependencies (route guards)

import logging
from typing import Optional
from uuid import UUID

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from storefront.modules.accounts.domain.models import User
from storefront.shared.core.exceptions import PipelineConfigurationError

logger = logging.getLogger(__name__)

AUTH_SESSION_KEY = "auth_user_id"


class AuthInitMiddleware:
    """
    Pipeline stage resetting the authenticated user.

    Pre: session stage has run. Post: `request.state.user` is None.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            if "session" not in scope:
                raise PipelineConfigurationError(stage="auth_init", requires="session")
            scope.setdefault("state", {})["user"] = None
        await self.app(scope, receive, send)


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """
    Pipeline stage restoring the signed-in user from the session.

    Pre: auth_init has run. Post: `request.state.user` is a User or None; a
    session pointing at a deleted account loses its user id.
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next) -> Response:
        if "user" not in request.scope.get("state", {}):
            raise PipelineConfigurationError(stage="auth_session", requires="auth_init")

        request.state.user = await self._restore_user(request)
        return await call_next(request)

    async def _restore_user(self, request: Request) -> Optional[User]:
        raw_id = request.session.get(AUTH_SESSION_KEY)
        if not raw_id:
            return None

        try:
            user_id = UUID(str(raw_id))
        except ValueError:
            logger.warning("Dropping malformed user id from session")
            request.session.pop(AUTH_SESSION_KEY, None)
            return None

        user = await request.app.state.user_repository.get_by_id(user_id)
        if user is None:
            logger.info(f"Session refers to missing user {user_id}")
            request.session.pop(AUTH_SESSION_KEY, None)
        return user


def login_user(request: Request, user: User) -> None:
    """
    Bind a user to the current session.

    The session moves to a new id so a pre-login cookie cannot be reused.
    """
    request.session.regenerate()
    request.session[AUTH_SESSION_KEY] = str(user.id)
    request.state.user = user
    logger.info(f"User signed in: {user.id}")


def logout_user(request: Request) -> None:
    """Destroy the current session and forget the user."""
    user = getattr(request.state, "user", None)
    request.session.invalidate()
    request.state.user = None
    if user is not None:
        logger.info(f"User signed out: {user.id}")
