# 📄 File: storefront/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the storefront, recording what was asked
# for, how it was answered and how long it took.
# 🧪 Purpose (Technical Summary):
# Request logging stage: assigns a correlation id (bound to the logging context
# variable and echoed in X-Request-ID) and emits one line per request in the
# `METHOD path status duration` shape, leveled by status class. No control-flow effect.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, storefront.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# storefront.api.pipeline (first stage)

import logging
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from storefront.shared.utils.logging import request_id_var

logger = logging.getLogger("storefront.access")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Pre: none. Post: `request.state.request_id` is set; the response carries
    the X-Request-ID header.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._log_response(request, response.status_code, duration_ms)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path} failed after {duration_ms:.3f} ms: "
                f"{type(e).__name__}: {e}"
            )
            raise
        finally:
            request_id_var.reset(token)

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or uuid.uuid4().hex
        request.state.request_id = request_id
        return request_id

    def _log_response(self, request: Request, status_code: int, duration_ms: float) -> None:
        if status_code >= 500:
            level = logging.ERROR
        elif status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        message = f"{request.method} {request.url.path} {status_code} {duration_ms:.3f} ms"
        if duration_ms / 1000 > self.slow_request_threshold:
            message += " (slow)"

        logger.log(
            level,
            message,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "duration_ms": round(duration_ms, 3),
            },
        )
