"""Colored logging formatter and root logger setup for console output."""

from __future__ import annotations

import logging
import logging.config
import os
import sys

from share_it.domain.shared.messages import LogTemplates

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ColoredFormatter(logging.Formatter):
    """Logging formatter that applies ANSI color codes to the levelname field.

    Colors are disabled when the ``NO_COLOR`` environment variable is set or
    when the output stream is not a TTY (e.g. redirected to a file).
    """

    COLORS: dict[int, str] = {
        logging.DEBUG: "\033[36m",     # cyan
        logging.INFO: "\033[32m",      # green
        logging.WARNING: "\033[33m",   # yellow
        logging.ERROR: "\033[31m",     # red
        logging.CRITICAL: "\033[1;31m",  # bold red
    }
    RESET = "\033[0m"

    def __init__(self, *args, stream=None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._stream = stream

    def _use_color(self) -> bool:
        if os.environ.get("NO_COLOR") is not None:
            return False
        stream = self._stream or sys.stdout
        return hasattr(stream, "isatty") and stream.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self._use_color():
            color = self.COLORS.get(record.levelno, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(log_level: str = "INFO") -> None:
    """Route all loggers through one colored stderr handler at ``log_level``.

    Unknown level names fall back to INFO with a warning.
    """
    resolved_level = logging.getLevelName(log_level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO
        unknown = log_level
    else:
        unknown = None

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "colored": {
                    "()": ColoredFormatter,
                    "fmt": LOG_FORMAT,
                    "datefmt": DATE_FORMAT,
                    "stream": sys.stderr,
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "colored",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {"level": resolved_level, "handlers": ["console"]},
            # aiosqlite logs every statement at DEBUG.
            "loggers": {"aiosqlite": {"level": "INFO"}},
        }
    )

    if unknown is not None:
        logging.getLogger(__name__).warning(LogTemplates.LOGGING_FALLBACK, unknown)
