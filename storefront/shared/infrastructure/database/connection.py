# 📄 File: storefront/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Opens the shop's database when the server starts, lends a connection to each
# lookup or save, and closes everything again on shutdown.
#
# 🧪 Purpose (Technical Summary):
# DatabaseManager owns the async engine and session factory. It is created in
# the FastAPI lifespan; repositories borrow sessions through `session()`
# (commit/rollback) or `read_only_session()`. SQLAlchemy failures surface as
# DatabaseError.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio
# - storefront.shared.config.database (engine options)
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (lifespan)
# - storefront.modules.*.infrastructure.repositories

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import exc, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from storefront.shared.config.database import engine_options
from storefront.shared.config.settings import Settings
from storefront.shared.core.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Engine and session factory for one application instance."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._engine: Optional[AsyncEngine] = None
        self._sessions: Optional[async_sessionmaker[AsyncSession]] = None

    async def initialize(self) -> None:
        """Create the engine and check that the database answers."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(self.settings.database_url, **engine_options(self.settings))
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False, autoflush=False)

        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except exc.SQLAlchemyError as e:
            logger.error(f"Database unreachable: {e}")
            await self.close()
            raise DatabaseError("Database unreachable", operation="connect") from e

        logger.info("Database engine ready")

    def _new_session(self) -> AsyncSession:
        if self._sessions is None:
            raise DatabaseError("Database manager not initialized")
        return self._sessions()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Transactional session: commits when the block succeeds, rolls back otherwise.

        Raises:
            DatabaseError: If the manager is not initialized or SQLAlchemy fails
        """
        session = self._new_session()
        try:
            yield session
            await session.commit()
        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Transaction rolled back: {e}")
            raise DatabaseError("Database write failed", operation="write") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def read_only_session(self) -> AsyncIterator[AsyncSession]:
        """Session for lookups; nothing is committed."""
        session = self._new_session()
        try:
            yield session
        except exc.SQLAlchemyError as e:
            logger.error(f"Read failed: {e}")
            raise DatabaseError("Database read failed", operation="read") from e
        finally:
            await session.close()

    async def close(self) -> None:
        """Dispose the engine and its pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessions = None
