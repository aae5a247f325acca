# 📄 File: migrations/env.py
# 🧭 Purpose (Layman Explanation):
# Tells Alembic where the shop's database is and which tables belong to the
# shop, so schema upgrades can be generated and applied.
# 🧪 Purpose (Technical Summary):
# Alembic environment. The URL comes from storefront settings (never from
# alembic.ini); the storefront ORM models are imported so their tables are on
# DatabaseBase.metadata. Online runs go through an async engine.
# 🔗 Dependencies:
# alembic, SQLAlchemy (async engine), asyncpg, python-dotenv
# 🔄 Connected Modules / Calls From:
# alembic CLI (upgrade, downgrade, revision --autogenerate)

import asyncio
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import async_engine_from_config

load_dotenv()

from storefront.modules.accounts.infrastructure import models as account_models  # noqa: E402,F401
from storefront.modules.catalog.infrastructure import models as catalog_models  # noqa: E402,F401
from storefront.shared.config.database import DatabaseBase  # noqa: E402
from storefront.shared.config.settings import get_settings  # noqa: E402

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = DatabaseBase.metadata
COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    context.configure(
        url=get_settings().database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata, **COMPARE_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = get_settings().database_url
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    async with engine.connect() as connection:
        await connection.run_sync(_migrate)
    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
