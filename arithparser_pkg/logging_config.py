"""Structured logging for Arithparser.

Every record is one line: ISO timestamp, level, logger name and message,
followed by any context fields passed through ``extra``::

    logger.debug("Rejected formula", extra={"formula": "2+", "code": "UNEXPECTED_TOKEN"})

renders as ``... [DEBUG] arithparser.parser: Rejected formula formula='2+'
code='UNEXPECTED_TOKEN'``.
"""

import logging
import sys
from datetime import datetime
from typing import Optional

from . import config

ROOT_LOGGER_NAME = "arithparser"

# Record attributes appended as key=value when present
CONTEXT_FIELDS = ("formula", "code", "position", "path")


class StructuredFormatter(logging.Formatter):
    """One-line formatter with trailing ``key=value`` context fields."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        parts = [
            f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        ]
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is None:
                continue
            parts.append(f"{field}={value!r}")
        line = " ".join(parts)
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    level: Optional[str] = None, log_file: Optional[str] = None
) -> logging.Logger:
    """Attach structured handlers to the ``arithparser`` logger.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (default: config.LOG_LEVEL)
        log_file: Also append records to this file

    Returns:
        The package root logger. Calling again replaces the previous handlers.
    """
    level = (level or config.LOG_LEVEL).upper()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, level, logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a package module, e.g. ``get_logger("parser")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
