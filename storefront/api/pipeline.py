"""
Request pipeline definition.

The storefront's middleware chain is data: an ordered tuple of named stages,
first stage outermost. `build_pipeline` is the only place the order is decided;
`create_application` turns the stages into Starlette `Middleware` entries.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, List, Sequence, Tuple, Type

from starlette.middleware import Middleware

from storefront.api.middleware import (
    AuthInitMiddleware,
    BodyParserMiddleware,
    BreadcrumbMiddleware,
    FlashMiddleware,
    GlobalContextMiddleware,
    PublicAssetsMiddleware,
    RequestLoggingMiddleware,
    ServerSideSessionMiddleware,
    SessionAuthMiddleware,
)
from storefront.shared.config.settings import Settings
from storefront.shared.infrastructure.session_store import SessionStore

logger = logging.getLogger(__name__)

STAGE_ORDER = (
    "request_logging",
    "body_parsers",
    "public_assets",
    "session",
    "flash",
    "auth_init",
    "auth_session",
    "global_context",
    "breadcrumbs",
)


@dataclass(frozen=True)
class PipelineStage:
    """One named middleware registration."""
    name: str
    middleware: Type[Any]
    options: Dict[str, Any] = field(default_factory=dict)
    short_circuit: bool = False

    def as_middleware(self) -> Middleware:
        return Middleware(self.middleware, **self.options)


def build_pipeline(settings: Settings, session_store: SessionStore) -> Tuple[PipelineStage, ...]:
    """
    Build the ordered request pipeline.

    Args:
        settings: Application settings
        session_store: Backing store for server-side sessions

    Returns:
        Stages in execution order
    """
    return (
        PipelineStage("request_logging", RequestLoggingMiddleware),
        PipelineStage("body_parsers", BodyParserMiddleware),
        PipelineStage(
            "public_assets",
            PublicAssetsMiddleware,
            {"directory": settings.PUBLIC_DIR},
            short_circuit=True,
        ),
        PipelineStage(
            "session",
            ServerSideSessionMiddleware,
            {
                "store": session_store,
                "secret_key": settings.SESSION_SECRET,
                "cookie_name": settings.SESSION_COOKIE_NAME,
                "max_age": timedelta(seconds=settings.session_max_age),
                "https_only": settings.SESSION_COOKIE_SECURE,
                "algorithm": settings.SESSION_SIGNING_ALGORITHM,
            },
        ),
        PipelineStage("flash", FlashMiddleware),
        PipelineStage("auth_init", AuthInitMiddleware),
        PipelineStage("auth_session", SessionAuthMiddleware),
        PipelineStage(
            "global_context",
            GlobalContextMiddleware,
            {"failure_policy": settings.CONTEXT_FAILURE_POLICY},
            short_circuit=True,
        ),
        PipelineStage("breadcrumbs", BreadcrumbMiddleware),
    )


def validate_pipeline(stages: Sequence[PipelineStage]) -> None:
    """
    Check stage names against the fixed order.

    Raises:
        ValueError: If stages are missing, duplicated or out of order
    """
    names = tuple(stage.name for stage in stages)
    if names != STAGE_ORDER:
        raise ValueError(f"Pipeline stages {names} do not match required order {STAGE_ORDER}")


def to_middleware(stages: Sequence[PipelineStage]) -> List[Middleware]:
    """Convert stages to Starlette middleware, first entry outermost."""
    validate_pipeline(stages)
    logger.debug(f"Request pipeline: {' -> '.join(stage.name for stage in stages)}")
    return [stage.as_middleware() for stage in stages]
