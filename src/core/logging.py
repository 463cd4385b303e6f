"""Logging configuration utilities."""

import sys

from loguru import logger


def setup_logging(level: str = "INFO") -> None:
    """Configure loguru for the application.

    Args:
        level: Minimum log level to display.
    """
    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )
    logger.info(f"Logging configured at level: {level}")
