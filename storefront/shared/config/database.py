# 📄 File: storefront/shared/config/database.py
#
# 🧭 Purpose (Layman Explanation):
# Describes how the shop opens its database: how many connections it may keep
# open, how long to wait for one, and how tables and constraints are named.
#
# 🧪 Purpose (Technical Summary):
# Engine options derived from Settings (pooled in running environments, NullPool
# under test) and the declarative base whose metadata carries the constraint
# naming convention used by the ORM models and Alembic.
#
# 🔗 Dependencies:
# - SQLAlchemy
# - storefront.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - storefront.shared.infrastructure.database.connection
# - storefront.modules.*.infrastructure.models
# - migrations/env.py

from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from .settings import Settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def engine_options(settings: Settings) -> Dict[str, Any]:
    """
    Keyword arguments for `create_async_engine`.

    Tests get a NullPool so no connection outlives its event loop.
    """
    options: Dict[str, Any] = {"echo": settings.DEBUG and settings.is_development}
    if settings.is_testing:
        options["poolclass"] = NullPool
        return options

    options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )
    return options


class DatabaseBase(DeclarativeBase):
    """Declarative base shared by every storefront table."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
