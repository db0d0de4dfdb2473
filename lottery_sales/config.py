"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy.engine import URL

SQLITE_FALLBACK_URL = "sqlite:///./lottery.db"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_database_url() -> str:
    """DATABASE_URL wins, then a PostgreSQL URL from the PG* variables.

    Without either, the app runs on a local SQLite file.
    """

    if os.getenv("DATABASE_URL"):
        return os.environ["DATABASE_URL"]

    pg = {key: os.getenv(f"PG{key.upper()}") for key in ("host", "user", "database")}
    if not all(pg.values()):
        return SQLITE_FALLBACK_URL

    sslmode = os.getenv("PGSSLMODE", "prefer")
    return URL.create(
        "postgresql+psycopg2",
        username=pg["user"],
        password=os.getenv("PGPASSWORD"),
        host=pg["host"],
        port=_int_env("PGPORT", 5432),
        database=pg["database"],
        query={"sslmode": sslmode} if sslmode else {},
    ).render_as_string(hide_password=False)


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    DATABASE_URL: str = resolve_database_url()
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Ticket inventory
    TICKET_NUMBER_WIDTH: int = _int_env("TICKET_NUMBER_WIDTH", 4)
    MAX_TICKETS_PER_BATCH: int = _int_env("MAX_TICKETS_PER_BATCH", 10_000)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration used by the test suite."""

    DEBUG: bool = False
    TESTING: bool = True
    DATABASE_URL: str = "sqlite:///./lottery-test.db"


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
