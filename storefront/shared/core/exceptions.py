# 📄 File: storefront/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# Names the things that can go wrong in the shop (page not found, not signed in,
# session storage down...) so each one gets the right error page.
# 🧪 Purpose (Technical Summary):
# Exception hierarchy rooted at StorefrontException. Each class declares its
# HTTP status and error code; keyword context (resource ids, fields, stages) is
# collected into `details`, which the error boundary shows outside production.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# Route handlers, repositories, session store, middleware pipeline, error boundary

from typing import Any, Dict, Optional

from fastapi import status


def _context(details: Optional[Dict[str, Any]] = None, **values: Any) -> Dict[str, Any]:
    """Merge keyword context into a details dict, skipping empty values."""
    merged = dict(details or {})
    merged.update({key: value for key, value in values.items() if value})
    return merged


class StorefrontException(Exception):
    """
    Base exception class for the storefront.

    Subclasses set `status_code`, `error_code` and `default_message`; any of
    them can still be overridden per instance.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "STOREFRONT_ERROR"
    default_message: str = "Something went wrong"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = dict(details or {})
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "status_code": self.status_code,
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION
# =============================================================================

class AuthenticationError(StorefrontException):
    """Nobody is signed in, or the credentials did not match."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "AUTHENTICATION_ERROR"
    default_message = "Authentication failed"


class LoginRequiredError(AuthenticationError):
    """
    An anonymous visitor opened a page that needs a login.

    The error boundary answers it with a redirect to `redirect_to`.
    """

    default_message = "Please sign in to continue"

    def __init__(self, redirect_to: str = "/user/signin", next_path: Optional[str] = None):
        super().__init__(details=_context(next=next_path))
        self.redirect_to = redirect_to
        self.next_path = next_path


class AuthorizationError(StorefrontException):
    """The signed-in user may not open the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "AUTHORIZATION_ERROR"
    default_message = "Access denied"

    def __init__(
        self,
        message: Optional[str] = None,
        resource: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=_context(details, resource=resource, user_id=user_id))


# =============================================================================
# REQUEST & CATALOG
# =============================================================================

class ValidationError(StorefrontException):
    """Submitted data could not be used."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=_context(details, field=field))


class NotFoundError(StorefrontException):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "Not Found"

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            details=_context(details, resource_type=resource_type, resource_id=resource_id),
        )


class DuplicateResourceError(StorefrontException):
    """A unique value is already taken, e.g. an email at sign-up."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "DUPLICATE_RESOURCE"
    default_message = "Resource already exists"

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=_context(details, resource_type=resource_type, field=field))


# =============================================================================
# INFRASTRUCTURE
# =============================================================================

class DatabaseError(StorefrontException):
    error_code = "DATABASE_ERROR"
    default_message = "Database error"

    def __init__(
        self,
        message: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=_context(details, operation=operation))


class SessionStoreError(StorefrontException):
    """The session store could not be read or written."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "SESSION_STORE_ERROR"
    default_message = "Session store unavailable"

    def __init__(
        self,
        message: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=_context(details, operation=operation))


class PipelineConfigurationError(StorefrontException):
    """A middleware stage ran without the stage it depends on."""

    error_code = "PIPELINE_CONFIGURATION_ERROR"

    def __init__(self, stage: str, requires: str):
        super().__init__(
            f"Pipeline stage '{stage}' requires '{requires}' to run before it",
            details={"stage": stage, "requires": requires},
        )
