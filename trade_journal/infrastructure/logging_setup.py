"""Logging configuration for the CLI entry point."""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once.

    Args:
        level: Level name; falls back to $LOG_LEVEL, then WARNING
    """
    name = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    logging.basicConfig(level=getattr(logging, name, logging.WARNING), format=LOG_FORMAT)
