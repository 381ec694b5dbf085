"""Configuration management for ormkit."""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from .types import DatabaseDriver, Environment

IN_MEMORY_PATH = ":memory:"

DEFAULT_PRAGMAS: dict[str, Any] = {
    "journal_mode": "DELETE",
    "synchronous": "NORMAL",
    "foreign_keys": "ON",
}


class Settings(BaseModel):
    """Runtime settings."""

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development/production/testing)",
    )
    log_level: str = Field(default="INFO", description="Logging level")

    database_driver: DatabaseDriver = Field(
        default=DatabaseDriver.SQLITE,
        description="Driver implementation backing the Database handle",
    )
    database_path: str | None = Field(
        default=None,
        description="SQLite file path or ':memory:'; derived from environment if unset",
    )
    sqlite_timeout: float = Field(
        default=60.0, description="Seconds SQLite waits on a locked database"
    )
    sqlite_pragmas: dict[str, Any] = Field(
        default_factory=lambda: dict(DEFAULT_PRAGMAS),
        description="PRAGMA statements applied after connecting",
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == Environment.TESTING

    @property
    def resolved_database_path(self) -> str:
        """Database path, falling back to the environment default."""
        if self.database_path:
            return self.database_path
        return default_database_path(self.environment)


def default_database_path(environment: Environment) -> str:
    """Get the default database location for an environment.

    Args:
        environment: Environment type

    Returns:
        ':memory:' for testing, otherwise a file path under ./db
    """
    if environment == Environment.TESTING:
        return IN_MEMORY_PATH
    if environment == Environment.PRODUCTION:
        return str(Path("db", "ormkit.db"))
    return str(Path("db", "ormkit.dev.db"))


def load_settings() -> Settings:
    """Load settings from environment variables (and a .env file if present)."""
    load_dotenv()

    return Settings(
        environment=Environment(os.getenv("ORMKIT_ENV", "development")),
        log_level=os.getenv("ORMKIT_LOG_LEVEL", "INFO").upper(),
        database_driver=DatabaseDriver(os.getenv("ORMKIT_DB_DRIVER", "sqlite")),
        database_path=os.getenv("ORMKIT_DB_PATH") or None,
        sqlite_timeout=float(os.getenv("ORMKIT_SQLITE_TIMEOUT", "60.0")),
    )
