"""Logging configuration module for environment-aware setup.

Configuration Logic:
- Development: Verbose console logging with colors
- Staging: Structured logging with optional file output
- Production: JSON console logging, quieter third-party loggers
- Testing: Minimal logging to avoid test output noise
"""

import logging

from ..config.settings import EnvironmentOption, get_settings
from .handlers import (
    create_console_handler,
    create_file_handler,
    create_null_handler,
)


def setup_logging_configuration() -> None:
    """Set up logging configuration based on application settings.

    Configures the root logger once during application startup. Handlers
    already attached to the root logger are replaced.
    """
    settings = get_settings()

    logging.getLogger().handlers.clear()

    if settings.ENVIRONMENT == EnvironmentOption.STAGING:
        _configure_staging_logging(settings)
    elif settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        _configure_production_logging(settings)
    else:
        _configure_development_logging(settings)

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL_INT)

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION:
        _configure_noisy_loggers()


def _configure_development_logging(settings) -> None:
    """Colored, detailed console output; optional file logging."""
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.DEBUG if settings.LOG_DEVELOPMENT_VERBOSE else settings.LOG_LEVEL_INT
        console_handler = create_console_handler(format_type="detailed", level=console_level, use_colors=True)
        handlers.append(console_handler)

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings))

    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)


def _configure_staging_logging(settings) -> None:
    """Structured console output for machine parsing; optional file logging."""
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        console_handler = create_console_handler(
            format_type=settings.LOG_FORMAT,
            level=settings.LOG_LEVEL_INT,
            use_colors=False,
        )
        handlers.append(console_handler)

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings))

    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)


def _configure_production_logging(settings) -> None:
    """JSON console output for log aggregation."""
    handlers = []

    if settings.LOG_CONSOLE_ENABLED:
        console_level = logging.WARNING if settings.LOG_PRODUCTION_OPTIMIZE else settings.LOG_LEVEL_INT
        console_handler = create_console_handler(format_type="json", level=console_level, use_colors=False)
        handlers.append(console_handler)

    if settings.LOG_FILE_ENABLED:
        handlers.append(_file_handler(settings, format_type="json"))

    root_logger = logging.getLogger()
    for handler in handlers:
        root_logger.addHandler(handler)


def _file_handler(settings, format_type: str = "structured") -> logging.Handler:
    return create_file_handler(
        filepath=settings.LOG_FILE_PATH,
        format_type=format_type,
        level=logging.DEBUG,
        max_bytes=settings.LOG_FILE_MAX_SIZE,
        backup_count=settings.LOG_FILE_BACKUP_COUNT,
    )


def _configure_noisy_loggers() -> None:
    """Raise the level of chatty third-party loggers in production."""
    noisy_loggers = {
        "asyncpg": logging.WARNING,
        "aiosqlite": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
        "sqlalchemy.dialects": logging.WARNING,
        "sqlalchemy.pool": logging.WARNING,
        "botocore": logging.WARNING,
        "boto3": logging.WARNING,
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
    }

    for logger_name, level in noisy_loggers.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)


def configure_testing_logging() -> None:
    """Configure minimal logging for testing environments.

    Can be called from test fixtures to override the normal configuration.
    Records still propagate, so pytest's ``caplog`` keeps working.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    root_logger.addHandler(create_null_handler())

    root_logger.setLevel(logging.WARNING)

    test_loggers = {
        "sqlalchemy.engine": logging.ERROR,
        "aiosqlite": logging.ERROR,
        "httpx": logging.ERROR,
    }

    for logger_name, level in test_loggers.items():
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)


def get_configured_logger(name: str) -> logging.Logger:
    """Get a logger that inherits from the configured root logger.

    Args:
        name: The name for the logger, typically __name__

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
