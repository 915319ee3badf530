"""
Aggregation context logger.

Provides logging interface for aggregation context with automatic [aggregate] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[aggregate]"


def _log_info(message: str) -> None:
    """Log info message with [aggregate] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [aggregate] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")
