"""ormkit: typed entities over parameterized SQL, with tracked migrations."""

from .config import Settings, load_settings
from .exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    DecodeError,
    MigrationError,
    NotFoundError,
    OrmError,
    QueryError,
)
from .log import (
    configure_logging,
    get_logger,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .types import DatabaseDriver, Environment, SortOrder

__all__ = [
    "ConfigurationError",
    "DatabaseConnectionError",
    "DatabaseDriver",
    "DecodeError",
    "Environment",
    "MigrationError",
    "NotFoundError",
    "OrmError",
    "QueryError",
    "Settings",
    "SortOrder",
    "configure_logging",
    "get_logger",
    "load_settings",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
]
