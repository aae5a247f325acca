"""
Core utilities package for the storefront.
Provides the exception hierarchy and security helpers.
"""

from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    DatabaseError,
    DuplicateResourceError,
    LoginRequiredError,
    NotFoundError,
    PipelineConfigurationError,
    SessionStoreError,
    StorefrontException,
    ValidationError,
)
from .security import (
    SessionCookieSigner,
    SessionToken,
    get_password_hash,
    verify_password,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "DatabaseError",
    "DuplicateResourceError",
    "LoginRequiredError",
    "NotFoundError",
    "PipelineConfigurationError",
    "SessionStoreError",
    "StorefrontException",
    "ValidationError",
    "SessionCookieSigner",
    "SessionToken",
    "get_password_hash",
    "verify_password",
]
