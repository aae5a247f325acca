# 📄 File: storefront/modules/accounts/infrastructure/repositories.py
# 🧭 Purpose (Layman Explanation):
# The actual code that stores new accounts and looks existing ones up.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository with entity-to-model mapping and
# unique-email violations translated to DuplicateResourceError.
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (repository wiring in the lifespan)

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from storefront.modules.accounts.domain.models import User
from storefront.modules.accounts.domain.repositories import UserRepository
from storefront.shared.core.exceptions import DuplicateResourceError
from storefront.shared.infrastructure.database.connection import DatabaseManager

from .models import UserModel

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(UserRepository):
    """
    User repository backed by async SQLAlchemy.
    """

    def __init__(self, database: DatabaseManager):
        self._database = database

    async def create(self, user: User) -> User:
        model = UserModel(
            id=user.id,
            username=user.username,
            email=user.email.lower(),
            password_hash=user.password_hash,
            is_admin=user.is_admin,
        )
        async with self._database.session() as session:
            session.add(model)
            try:
                await session.flush()
            except IntegrityError as e:
                logger.warning(f"User creation failed - email already exists: {user.email}")
                raise DuplicateResourceError(
                    "Email already in use",
                    resource_type="user",
                    field="email",
                ) from e
            await session.refresh(model)
            created = self._model_to_domain(model)

        logger.info(f"User created: {created.id}")
        return created

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        async with self._database.read_only_session() as session:
            model = await session.get(UserModel, user_id)
        return self._model_to_domain(model) if model else None

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == email.lower())
        async with self._database.read_only_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    @staticmethod
    def _model_to_domain(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            is_admin=model.is_admin,
            created_at=model.created_at,
        )
