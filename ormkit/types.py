"""Common type definitions for ormkit."""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class DatabaseDriver(str, Enum):
    """Driver implementations selectable through configuration."""

    SQLITE = "sqlite"
    FAKE = "fake"


class SortOrder(str, Enum):
    """ORDER BY direction."""

    ASC = "ASC"
    DESC = "DESC"
