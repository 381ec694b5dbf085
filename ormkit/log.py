"""Logging setup for ormkit."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import colorlog

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .config import Settings

BASE_LOG_FORMAT = (
    "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
)
DATE_FORMAT = "%m-%d %H:%M:%S"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    use_colors: bool = True,
    enable_file_logging: bool = False,
    log_dir: Path | None = None,
    is_test_env: bool = False,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level to use
        format_string: Custom console format string
        use_colors: Whether console output is colorized
        enable_file_logging: Whether a file handler is attached as well
        log_dir: Directory for log files (defaults to ./logs or ./logs/test)
        is_test_env: Whether this is a test run
    """
    if log_dir is None:
        log_dir = Path("logs") / "test" if is_test_env else Path("logs")

    handlers = [
        _console_handler(format_string or _console_format(use_colors), use_colors)
    ]

    if enable_file_logging:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_dir, is_test_env))

    logging.basicConfig(level=level, handlers=handlers, force=True)


def _console_format(use_colors: bool) -> str:
    if not use_colors:
        return BASE_LOG_FORMAT
    return (
        "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
        "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
    )


def _console_handler(format_string: str, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    formatter: logging.Formatter
    if use_colors:
        formatter = colorlog.ColoredFormatter(
            format_string,
            datefmt=DATE_FORMAT,
            log_colors=LOG_COLORS,
            style="%",
        )
    else:
        formatter = logging.Formatter(format_string, datefmt=DATE_FORMAT)
    handler.setFormatter(formatter)
    return handler


def _file_handler(log_dir: Path, is_test_env: bool) -> logging.Handler:
    handler: logging.Handler
    if is_test_env:
        # Each test run starts from an empty file
        handler = logging.FileHandler(log_dir / "test.log", mode="w")
    else:
        handler = logging.handlers.RotatingFileHandler(
            log_dir / "ormkit.log",
            maxBytes=5 * 1024 * 1024,
            backupCount=4,
            encoding="utf-8",
        )
    handler.setFormatter(logging.Formatter(BASE_LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_production_logging(level: int = logging.INFO) -> None:
    """Log to console and to a rotating file under ./logs."""
    setup_logging(level=level, enable_file_logging=True, is_test_env=False)


def setup_test_logging(level: int = logging.DEBUG) -> None:
    """Log to console and to ./logs/test/test.log, overwritten per run."""
    setup_logging(level=level, enable_file_logging=True, is_test_env=True)


def configure_logging(settings: "Settings") -> None:
    """Set up logging for the configured environment and level.

    Raises:
        ConfigurationError: If ``settings.log_level`` is not a logging level name
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {settings.log_level}")

    if settings.is_production:
        setup_production_logging(level)
    elif settings.is_testing:
        setup_test_logging(level)
    else:
        setup_logging(level=level)
