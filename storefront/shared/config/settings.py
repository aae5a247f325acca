# 📄 File: storefront/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# Every knob of the shop in one place: which port to listen on, where the
# database and Redis live, how long a login lasts, and what to do when the
# category menu cannot be loaded.
#
# 🧪 Purpose (Technical Summary):
# pydantic-settings model read from the process environment and an optional
# `.env` file. Enumerated values are normalized and checked by validators;
# derived values (database URL, session lifetime, error detail exposure) are
# read-only properties.
#
# 🔗 Dependencies:
# - pydantic, pydantic-settings
#
# 🔄 Connected Modules / Calls From:
# - storefront.main (create_application, uvicorn entry point)
# - storefront.api.pipeline (stage options)
# - storefront.shared.config.database / redis, migrations/env.py

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_ROOT = Path(__file__).resolve().parents[2]

ENVIRONMENTS = ("development", "staging", "production", "test")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "console")
SIGNING_ALGORITHMS = ("HS256", "HS384", "HS512")


class ContextFailurePolicy(str, Enum):
    """What the global context stage does when the category fetch fails."""

    REDIRECT_HOME = "redirect_home"
    RAISE = "raise"


def _one_of(value: str, choices: Sequence[str], label: str) -> str:
    if value not in choices:
        raise ValueError(f"{label} must be one of {list(choices)}")
    return value


class Settings(BaseSettings):
    """
    Storefront configuration.

    Values come from environment variables (exact, upper-case names) with
    `.env` as a fallback; `SESSION_SECRET` has no default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION
    # =========================================================================

    APP_NAME: str = Field(default="Storefront", description="Shop name shown in page titles")
    ENVIRONMENT: str = Field(default="development", description="development, staging, production or test")
    DEBUG: bool = Field(default=False, description="Echo SQL in development")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    LOG_FORMAT: str = Field(default="console", description="json or console")

    # =========================================================================
    # HTTP SERVER
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    PORT: int = Field(default=3000, ge=1, le=65535, description="Port uvicorn listens on")
    RELOAD: bool = Field(default=False, description="Auto-reload (development only)")

    # =========================================================================
    # DATABASE
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Full async SQLAlchemy URL; overrides DB_*")
    DB_HOST: str = Field(default="localhost")
    DB_PORT: int = Field(default=5432)
    DB_NAME: str = Field(default="storefront")
    DB_USER: str = Field(default="postgres")
    DB_PASSWORD: str = Field(default="")

    DB_POOL_SIZE: int = Field(default=10, ge=1)
    DB_MAX_OVERFLOW: int = Field(default=20, ge=0)
    DB_POOL_TIMEOUT: int = Field(default=30, ge=1, description="Seconds to wait for a pooled connection")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Seconds before a connection is replaced")

    # =========================================================================
    # SESSIONS (REDIS)
    # =========================================================================

    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Session store URL")
    REDIS_MAX_CONNECTIONS: int = Field(default=20, ge=1)

    SESSION_SECRET: str = Field(..., min_length=8, description="Key signing the session cookie")
    SESSION_COOKIE_NAME: str = Field(default="storefront.sid")
    SESSION_MAX_AGE_HOURS: int = Field(
        default=3,
        ge=1,
        description="Absolute session lifetime, counted from session creation"
    )
    SESSION_KEY_PREFIX: str = Field(default="storefront:sess:", description="Redis key prefix")
    SESSION_COOKIE_SECURE: bool = Field(default=False, description="Send the cookie over HTTPS only")
    SESSION_SIGNING_ALGORITHM: str = Field(default="HS256")

    # =========================================================================
    # VIEWS & ASSETS
    # =========================================================================

    TEMPLATES_DIR: Path = Field(default=PACKAGE_ROOT / "templates")
    PUBLIC_DIR: Path = Field(default=PACKAGE_ROOT / "public", description="Served as static assets")
    HOME_PRODUCTS_LIMIT: int = Field(default=8, ge=1, description="Products shown on the home page")

    # =========================================================================
    # REQUEST CONTEXT
    # =========================================================================

    CONTEXT_FAILURE_POLICY: ContextFailurePolicy = Field(
        default=ContextFailurePolicy.REDIRECT_HOME,
        description="Reaction to a failed category fetch in the global context stage"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT", "LOG_FORMAT")
    @classmethod
    def lower_choice(cls, v: str, info: ValidationInfo) -> str:
        choices = ENVIRONMENTS if info.field_name == "ENVIRONMENT" else LOG_FORMATS
        return _one_of(v.lower(), choices, info.field_name)

    @field_validator("LOG_LEVEL")
    @classmethod
    def upper_choice(cls, v: str) -> str:
        return _one_of(v.upper(), LOG_LEVELS, "LOG_LEVEL")

    @field_validator("SESSION_SIGNING_ALGORITHM")
    @classmethod
    def signing_algorithm(cls, v: str) -> str:
        return _one_of(v, SIGNING_ALGORITHMS, "SESSION_SIGNING_ALGORITHM")

    # =========================================================================
    # DERIVED VALUES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """DATABASE_URL if set, otherwise an asyncpg URL assembled from DB_*."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def session_max_age(self) -> int:
        """Session lifetime in seconds."""
        return self.SESSION_MAX_AGE_HOURS * 3600

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "test"

    @property
    def expose_error_details(self) -> bool:
        """Full error details reach the error view outside production only."""
        return not self.is_production


@lru_cache()
def get_settings() -> Settings:
    """Settings read once per process."""
    return Settings()
