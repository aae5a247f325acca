# 📄 File: storefront/api/middleware/parsers.py
# 🧭 Purpose (Layman Explanation):
# Reads what the visitor's browser sent (form fields, JSON, cookies) once, up front,
# so every later step can look at it.
# 🧪 Purpose (Technical Summary):
# Body/cookie parsing stage (pure ASGI). Reads JSON and urlencoded payloads
# through a Starlette Request (form parsing backed by python-multipart) into
# `request.state.body`, the cookie map into `request.state.cookies`, then feeds
# the cached body downstream so handlers can still read it. Malformed or
# oversized bodies are answered here with the shared error page.
# 🔗 Dependencies:
# starlette (Request, form parsing), python-multipart, storefront.api.errors
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (second stage), user routes (form fields)

import logging
from typing import Any, Dict

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from storefront.api.errors import render_error
from storefront.shared.core.exceptions import StorefrontException, ValidationError

logger = logging.getLogger(__name__)

JSON_TYPES = ("application/json",)
FORM_TYPES = ("application/x-www-form-urlencoded",)


class PayloadTooLargeError(StorefrontException):
    """Raised when a request body exceeds the configured limit."""

    status_code = 413
    error_code = "PAYLOAD_TOO_LARGE"
    default_message = "Request entity too large"

    def __init__(self, limit: int):
        super().__init__(details={"limit_bytes": limit})


def _media_type(request: Request) -> str:
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def limit_body(receive: Receive, max_body_size: int) -> Receive:
    """
    Wrap `receive` so reading more than `max_body_size` body bytes fails.

    Raises:
        PayloadTooLargeError: From the wrapped callable, once the limit is crossed
    """
    received = 0

    async def receive_limited() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > max_body_size:
                raise PayloadTooLargeError(max_body_size)
        return message

    return receive_limited


async def parse_body(request: Request) -> Dict[str, Any]:
    """
    Parse an already cached body by its content type.

    Urlencoded bodies are flat: a repeated key keeps its last value. A JSON
    document that is not an object is kept under `_json`.
    """
    if not await request.body():
        return {}

    if _media_type(request) in JSON_TYPES:
        try:
            parsed = await request.json()
        except ValueError as e:
            raise ValidationError("Malformed JSON body") from e
        return parsed if isinstance(parsed, dict) else {"_json": parsed}

    form = await request.form()
    return dict(form)


class BodyParserMiddleware:
    """
    Pipeline stage populating parsed body and cookie map.

    Pre: none. Post: `request.state.body` (dict) and `request.state.cookies`
    (dict) are set and the downstream app receives the original body, or the
    request was answered with a 413/422 error page.
    """

    def __init__(self, app: ASGIApp, max_body_size: int = 100 * 1024):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, limit_body(receive, self.max_body_size))
        request.state.cookies = dict(request.cookies)

        if _media_type(request) not in JSON_TYPES + FORM_TYPES:
            request.state.body = {}
            await self.app(scope, receive, send)
            return

        try:
            declared = request.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > self.max_body_size:
                raise PayloadTooLargeError(self.max_body_size)
            body = await request.body()
            request.state.body = await parse_body(request)
        except StorefrontException as e:
            logger.info(f"Rejected body for {request.method} {request.url.path}: {e.message}")
            response = render_error(request, e, e.message, e.status_code)
            await response(scope, receive, send)
            return

        logger.debug(f"Parsed {len(body)} byte body into {len(request.state.body)} field(s)")

        replayed = False

        async def receive_cached() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, receive_cached, send)
