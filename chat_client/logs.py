"""Loguru sink configuration for the CLI."""
import sys

from loguru import logger

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {name}: {message}"


def configure_logging(level: str = "INFO") -> None:
    level = level.strip().upper()
    # Raises ValueError for unknown level names before the current sinks are touched.
    logger.level(level)
    logger.remove()
    logger.add(sys.stderr, level=level, format=LOG_FORMAT)
