"""Logging configuration for the trgrpc command line.

Library modules only create loggers; handlers are installed here, once, by
the entry point.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from trgrpc.core.redaction import redact_secrets

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class RedactingFormatter(logging.Formatter):
    """Formatter that scrubs credentials and session tokens from output."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_secrets(super().format(record))


def configure_logging(
    level: int | str = logging.WARNING,
    log_file: Path | None = None,
) -> None:
    """Install handlers on the trgrpc namespace logger.

    Args:
        level: Level for console and file output.
        log_file: Optional rotating log file (max 5MB per file, 3 backups).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    trg_logger = logging.getLogger("trgrpc")
    trg_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates on reconfigure
    for handler in list(trg_logger.handlers):
        trg_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(RedactingFormatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    trg_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(RedactingFormatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        trg_logger.addHandler(file_handler)

    trg_logger.propagate = False
    logger.debug("Logging configured: level=%s, file=%s", logging.getLevelName(level), log_file)


def configure_http_logging(level: int = logging.DEBUG) -> None:
    """Route httpx/httpcore wire-level logs to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(RedactingFormatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    for logger_name in ("httpx", "httpcore"):
        http_logger = logging.getLogger(logger_name)
        http_logger.handlers = [handler]
        http_logger.setLevel(level)
        http_logger.propagate = False
