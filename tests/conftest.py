"""Global pytest configuration and fixtures."""

from logging import Logger

import pytest

from ormkit import get_logger, setup_test_logging


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    return get_logger("test")
