"""Centralized logging infrastructure for the document catalog.

Provides one environment-aware logging setup driven by application settings,
so modules ask for a logger instead of configuring handlers themselves.

Usage:
    ```python
    from ...infrastructure.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Blob stored", extra={"storage_key": key})
    ```
"""

from .config import configure_testing_logging, setup_logging_configuration
from .factory import configure_logging, get_logger

__all__ = [
    "get_logger",
    "configure_logging",
    "configure_testing_logging",
    "setup_logging_configuration",
]
