"""Shared utilities: logging setup and request correlation."""

from .logging import log_context, request_id_var, setup_logging

__all__ = ["log_context", "request_id_var", "setup_logging"]
