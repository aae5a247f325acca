# 📄 File: storefront/api/errors.py
# 🧭 Purpose (Layman Explanation):
# Decides what the visitor sees when something goes wrong: a friendly error page
# with the right status, and technical details only outside production.
# 🧪 Purpose (Technical Summary):
# Error boundary. Registers FastAPI exception handlers for HTTP errors (404 on
# unmatched routes), request validation errors, the StorefrontException hierarchy
# and any other exception. Every handler renders `error.html` with `message`,
# `error` (empty in production) and `status_code`.
# 🔗 Dependencies:
# FastAPI, starlette.exceptions, storefront.api.templating
# 🔄 Connected Modules / Calls From:
# storefront.main (handler registration)

import logging
import traceback
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from storefront.api.templating import render
from storefront.shared.core.exceptions import LoginRequiredError, StorefrontException

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "error.html"
INTERNAL_ERROR_MESSAGE = "Something went wrong"


def _get_status_code(exc: Exception) -> int:
    status_code = getattr(exc, "status_code", None)
    if isinstance(status_code, int) and 400 <= status_code < 600:
        return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_details(request: Request, exc: Exception, status_code: int) -> Dict[str, Any]:
    if not request.app.state.settings.expose_error_details:
        return {}

    details: Dict[str, Any] = {"type": type(exc).__name__, "status": status_code}
    if isinstance(exc, StorefrontException):
        details["code"] = exc.error_code
        details["details"] = exc.details
    if status_code >= 500:
        details["traceback"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return details


def render_error(request: Request, exc: Exception, message: str, status_code: int) -> Response:
    """Render the shared error page."""
    return render(
        request,
        ERROR_TEMPLATE,
        {
            "message": message,
            "error": _error_details(request, exc, status_code),
            "status_code": status_code,
        },
        status_code=status_code,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the error boundary to the application."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """Handle HTTP errors, including 404 for unmatched routes."""
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info(f"Not found: {request.method} {request.url.path}")
        return render_error(request, exc, str(exc.detail), exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
        logger.info(f"Invalid request for {request.url.path}: {exc.errors()}")
        return render_error(
            request, exc, "Invalid request", status.HTTP_422_UNPROCESSABLE_ENTITY
        )

    @app.exception_handler(StorefrontException)
    async def storefront_exception_handler(request: Request, exc: StorefrontException) -> Response:
        """Handle storefront exceptions with their own status codes."""
        if isinstance(exc, LoginRequiredError):
            return RedirectResponse(exc.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

        if exc.status_code >= 500:
            logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}", exc_info=exc)
        else:
            logger.warning(f"{exc.error_code} on {request.url.path}: {exc.message}")
        return render_error(request, exc, exc.message, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        """Handle everything else, including errors raised inside the pipeline."""
        status_code = _get_status_code(exc)
        if isinstance(exc, StorefrontException):
            message = exc.message
        elif isinstance(exc, StarletteHTTPException):
            message = str(exc.detail)
        else:
            message = INTERNAL_ERROR_MESSAGE

        logger.error(
            f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return render_error(request, exc, message, status_code)
