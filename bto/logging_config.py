"""
Logging setup for the BTO console.

Format: 2026-01-06T14:05:52Z [bto] LEVEL message

Logs go to a file when one is configured, otherwise to stderr, so they do
not interleave with the menus on stdout.

Usage:
    from bto.logging_config import configure_logging, get_logger

    configure_logging(level="INFO")
    logger = get_logger(__name__)
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

ROOT_LOGGER = "bto"


class ISO8601Formatter(logging.Formatter):
    """Formatter producing ISO8601 UTC timestamps."""

    def __init__(self, source: str = ROOT_LOGGER):
        self.source = source
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{timestamp} [{self.source}] {record.levelname} {message}"


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> logging.Logger:
    """Install a single handler on the package logger.

    Calling it again replaces the previous handler.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ISO8601Formatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
