"""Accounts infrastructure: SQLAlchemy model and repository implementation."""

from .models import UserModel
from .repositories import SQLAlchemyUserRepository

__all__ = ["UserModel", "SQLAlchemyUserRepository"]
