"""Async SQLAlchemy database infrastructure."""

from .connection import DatabaseManager

__all__ = ["DatabaseManager"]
