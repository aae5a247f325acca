# 📄 File: storefront/modules/accounts/domain/repositories.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving and finding user accounts.
# 🧪 Purpose (Technical Summary):
# Repository interface for User entities; the session auth stage depends on
# `get_by_id`, the sign-up/sign-in routes on `get_by_email` and `create`.
# 🔄 Connected Modules / Calls From:
# Authentication middleware, user routes, SQLAlchemy implementation

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from .models import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            DuplicateResourceError: If the email is already registered
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Returns:
            User entity if found, None otherwise
        """
        pass
