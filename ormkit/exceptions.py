"""Exceptions raised by ormkit."""


class OrmError(Exception):
    """Base exception for ormkit errors."""

    pass


class DatabaseConnectionError(OrmError):
    """Raised when the database cannot be opened or is not connected."""

    pass


class QueryError(OrmError):
    """Raised when the driver rejects or fails a statement.

    The original driver exception is kept as ``__cause__``.
    """

    def __init__(self, message: str, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


class DecodeError(OrmError):
    """Raised when a row does not match the shape or types of a model."""

    pass


class NotFoundError(OrmError):
    """Raised where absence of a row is an error rather than an empty result."""

    pass


class MigrationError(OrmError):
    """Raised for malformed migration history or unreadable migration sources."""

    pass


class ConfigurationError(OrmError):
    """Raised when an operation is not supported by the active configuration.

    This is not retryable; fix the configuration instead.
    """

    pass
