# 📄 File: storefront/api/middleware/sessions.py
# 🧭 Purpose (Layman Explanation):
# Remembers each visitor between page loads (who they are, messages waiting for them)
# by giving their browser a signed ticket and keeping the details on the server.
# 🧪 Purpose (Technical Summary):
# Server-side session stage (pure ASGI). The cookie carries only a signed session
# id with an absolute expiry; data lives in a SessionStore. New sessions are
# persisted only once something is written to them, unmodified sessions are not
# re-saved, and neither the cookie nor the store TTL is ever extended.
# 🔗 Dependencies:
# starlette, storefront.shared.core.security (cookie signer),
# storefront.shared.infrastructure.session_store
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (fourth stage), flash and auth stages (request.session)

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from storefront.shared.core.security import SessionCookieSigner
from storefront.shared.infrastructure.session_store import SessionStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Session(dict):
    """
    Per-request session data.

    Behaves as a plain dict; writes mark it modified so the middleware knows
    whether it has to be persisted.
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
        issued_at: Optional[datetime] = None,
        is_new: bool = True,
    ):
        super().__init__(data or {})
        self.session_id = session_id or secrets.token_urlsafe(32)
        self.issued_at = issued_at or _now()
        self.is_new = is_new
        self.modified = False
        self.invalidated = False
        self.previous_id: Optional[str] = None

    def __setitem__(self, key, value) -> None:
        self.modified = True
        super().__setitem__(key, value)

    def __delitem__(self, key) -> None:
        self.modified = True
        super().__delitem__(key)

    def pop(self, key, *args):
        if key in self:
            self.modified = True
        return super().pop(key, *args)

    def setdefault(self, key, default=None):
        if key not in self:
            self.modified = True
        return super().setdefault(key, default)

    def update(self, *args, **kwargs) -> None:
        self.modified = True
        super().update(*args, **kwargs)

    def clear(self) -> None:
        if self:
            self.modified = True
        super().clear()

    def regenerate(self) -> None:
        """Move the data to a fresh session id with a new expiry window."""
        if not self.is_new and self.previous_id is None:
            self.previous_id = self.session_id
        self.session_id = secrets.token_urlsafe(32)
        self.issued_at = _now()
        self.is_new = True
        self.modified = True

    def invalidate(self) -> None:
        """Drop all data and remove the session from the store."""
        super().clear()
        self.invalidated = True
        self.modified = True


class ServerSideSessionMiddleware:
    """
    Pipeline stage attaching `request.session`.

    Pre: none. Post: `scope["session"]` holds a Session, loaded from the store
    when the request carries a valid, unexpired cookie.
    """

    def __init__(
        self,
        app: ASGIApp,
        store: SessionStore,
        secret_key: str,
        cookie_name: str = "storefront.sid",
        max_age: timedelta = timedelta(hours=3),
        https_only: bool = False,
        same_site: str = "lax",
        path: str = "/",
        algorithm: str = "HS256",
    ):
        self.app = app
        self.store = store
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.signer = SessionCookieSigner(secret_key, max_age, algorithm=algorithm)
        self.path = path
        self.security_flags = "httponly; samesite=" + same_site
        if https_only:
            self.security_flags += "; secure"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        session = await self._load(connection.cookies.get(self.cookie_name))
        scope["session"] = session

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                await self._commit(session, MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_wrapper)

    async def _load(self, cookie: Optional[str]) -> Session:
        if not cookie:
            return Session()

        token = self.signer.decode(cookie)
        if token is None:
            return Session()

        data = await self.store.load(token.session_id)
        if data is None:
            logger.debug("Session cookie refers to an unknown or expired session")
            return Session()

        return Session(data, session_id=token.session_id, issued_at=token.issued_at, is_new=False)

    async def _commit(self, session: Session, headers: MutableHeaders) -> None:
        if session.previous_id is not None:
            await self.store.destroy(session.previous_id)

        if session.invalidated:
            if not session.is_new:
                await self.store.destroy(session.session_id)
            headers.append("Set-Cookie", self._cookie_header("null", max_age=0))
            return

        if not session.modified:
            return

        if session.is_new:
            # Uninitialized sessions are never persisted
            if not session:
                return
            await self.store.save(session.session_id, dict(session), ttl=self._remaining(session))
            value = self.signer.encode(session.session_id, issued_at=session.issued_at)
            headers.append("Set-Cookie", self._cookie_header(value, max_age=self._remaining(session)))
            return

        saved = await self.store.save(session.session_id, dict(session))
        if not saved:
            logger.info("Session expired before it could be saved")

    def _remaining(self, session: Session) -> int:
        expires_at = session.issued_at + self.max_age
        return max(int((expires_at - _now()).total_seconds()), 1)

    def _cookie_header(self, value: str, max_age: int) -> str:
        return "%s=%s; path=%s; Max-Age=%d; %s" % (
            self.cookie_name,
            value,
            self.path,
            max_age,
            self.security_flags,
        )
