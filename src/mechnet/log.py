"""Logging helpers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "mechnet",
    level: str = "INFO",
    log_file: str | Path | None = None,
    format_str: str | None = None,
) -> logging.Logger:
    """Configure the package logger with a console handler and optional file handler.

    Args:
        name: Logger name; child loggers (``mechnet.layout.*``) inherit it.
        level: Level name (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional path; parent directories are created.
        format_str: Optional record format, defaults to ``DEFAULT_FORMAT``.

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Reconfiguring replaces earlier handlers.
    logger.handlers = []

    formatter = logging.Formatter(format_str or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "mechnet") -> logging.Logger:
    """Return a logger by name (normally ``__name__`` of the calling module)."""
    return logging.getLogger(name)
