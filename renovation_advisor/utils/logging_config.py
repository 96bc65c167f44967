"""
Logging configuration for the renovation advisor.

Console output uses a pipe-separated layout with optional colour; file
output is one dict-like record per line. Context passed through ``extra``
(archetype, scenario, persona) is appended to the message.

Usage:
    from renovation_advisor.utils.logging_config import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
    logger.info("Matched archetype", extra={"archetype_name": "SFH_Italy_1946_1969"})
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..core.config import settings


# Keys picked up from ``extra=`` and appended to records
CONTEXT_KEYS = ("archetype_name", "country", "scenario_id", "persona_id")


class AdvisorFormatter(logging.Formatter):
    """Console formatter with ANSI colours on a TTY."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        self.use_colors = use_colors and sys.stdout.isatty()
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        context = [f"{key}={getattr(record, key)}" for key in CONTEXT_KEYS if hasattr(record, key)]
        formatted = super().format(record)
        if context:
            formatted = f"{formatted} [{', '.join(context)}]"

        if self.use_colors:
            return f"{self.COLORS.get(record.levelname, '')}{formatted}{self.RESET}"
        return formatted


class FileFormatter(logging.Formatter):
    """One dict-like line per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_KEYS + ("error_kind",):
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return str(entry)


def setup_logging(
    level: Optional[str] = None,
    log_to_file: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name (default: settings.log_level)
        log_to_file: Also write records to a file
        log_file: File path (default: {settings.log_dir}/renovation_advisor_YYYYMMDD.log)
    """
    level = level or settings.log_level
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(AdvisorFormatter(use_colors=True))
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(settings.log_dir)
        log_dir.mkdir(exist_ok=True)
        path = Path(log_file) if log_file else log_dir / f"renovation_advisor_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(path)
        file_handler.setFormatter(FileFormatter())
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    # Quiet HTTP stack
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)


_initialized = False


def ensure_logging(level: Optional[str] = None) -> None:
    """Run setup_logging once per process; later calls are no-ops."""
    global _initialized
    if not _initialized:
        setup_logging(level)
        _initialized = True
