"""Accounts domain: the User entity and its repository contract."""

from .models import User
from .repositories import UserRepository

__all__ = ["User", "UserRepository"]
