# 📄 File: storefront/main.py
#
# 🧭 Purpose (Layman Explanation):
# The control center that starts the shop: it connects the database and session
# storage, lines up the request helpers in the right order and opens the doors.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point. Builds the ordered request
# pipeline, mounts route groups in fixed precedence, registers the error
# boundary and manages database/Redis lifetimes in the lifespan.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - storefront.shared.config (settings, Redis)
# - storefront.shared.infrastructure (database, session store)
# - storefront.api (pipeline, routes, errors, templating)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup
# - `storefront` console script
# - tests (create_application with injected collaborators)

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI

from storefront import __version__
from storefront.api.errors import register_error_handlers
from storefront.api.pipeline import build_pipeline, to_middleware
from storefront.api.routes import ROUTE_MOUNTS, mount_routers
from storefront.api.templating import create_templates
from storefront.modules.accounts.infrastructure.repositories import SQLAlchemyUserRepository
from storefront.modules.catalog.infrastructure.repositories import (
    SQLAlchemyCategoryRepository,
    SQLAlchemyProductRepository,
)
from storefront.shared.config.redis import RedisConfig, check_redis_health
from storefront.shared.config.settings import Settings, get_settings
from storefront.shared.infrastructure.database.connection import DatabaseManager
from storefront.shared.infrastructure.session_store import RedisSessionStore, SessionStore
from storefront.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

REPOSITORY_NAMES = ("category_repository", "product_repository", "user_repository")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database and builds the SQLAlchemy repositories unless
    repositories were injected, checks Redis, and releases both on shutdown.
    """
    settings: Settings = app.state.settings
    database: Optional[DatabaseManager] = None
    redis_config: Optional[RedisConfig] = app.state.redis_config

    logger.info(f"🛒 {settings.APP_NAME} starting up ({settings.ENVIRONMENT})...")

    try:
        if not app.state.repositories_injected:
            database = DatabaseManager(settings)
            await database.initialize()
            app.state.database = database
            app.state.category_repository = SQLAlchemyCategoryRepository(database)
            app.state.product_repository = SQLAlchemyProductRepository(database)
            app.state.user_repository = SQLAlchemyUserRepository(database)
            logger.info("✅ Database connection initialized")

        if redis_config is not None:
            health = await check_redis_health(redis_config.create_redis_client())
            if health["status"] != "healthy":
                raise RuntimeError(f"Redis unavailable: {health.get('error')}")
            logger.info("✅ Redis session store connected")

        logger.info(f"✅ {settings.APP_NAME} listening on port {settings.PORT}")
        yield

    except Exception as e:
        logger.error(f"❌ Startup failed: {e}")
        raise

    finally:
        logger.info(f"🔄 {settings.APP_NAME} shutting down...")

        if database is not None:
            await database.close()
            logger.info("✅ Database connections closed")

        if redis_config is not None:
            await redis_config.close_connections()
            logger.info("✅ Redis connections closed")


def create_application(
    settings: Optional[Settings] = None,
    *,
    session_store: Optional[SessionStore] = None,
    repositories: Optional[Dict[str, Any]] = None,
) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Application settings (loaded from the environment if omitted)
        session_store: Session store (a Redis store is built if omitted)
        repositories: Mapping with `category_repository`, `product_repository`
            and `user_repository`; SQLAlchemy repositories are built in the
            lifespan if omitted

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    setup_logging(settings)

    redis_config: Optional[RedisConfig] = None
    if session_store is None:
        redis_config = RedisConfig(settings)
        session_store = RedisSessionStore(
            redis_config.create_redis_client(),
            key_prefix=settings.SESSION_KEY_PREFIX,
        )

    stages = build_pipeline(settings, session_store)

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        debug=settings.DEBUG,
        lifespan=lifespan,
        middleware=to_middleware(stages),
    )

    app.state.settings = settings
    app.state.redis_config = redis_config
    app.state.session_store = session_store
    app.state.pipeline = stages
    app.state.templates = create_templates(settings)

    app.state.repositories_injected = repositories is not None
    if repositories is not None:
        missing = [name for name in REPOSITORY_NAMES if name not in repositories]
        if missing:
            raise ValueError(f"Missing repositories: {', '.join(missing)}")
        for name in REPOSITORY_NAMES:
            setattr(app.state, name, repositories[name])

    mount_routers(app, ROUTE_MOUNTS)
    register_error_handlers(app)

    return app


# Create the FastAPI application
app = create_application()


def main():
    """
    Run the application with uvicorn.

    Used by the `storefront` console script and `python -m storefront.main`.
    """
    settings = get_settings()
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
