"""Structured logging on top of stdlib `logging` + Rich.

`StdlibEventLogger` implements the core `EventLogger` contract by attaching
the event fields to the record (`extra={"fields": ...}`); `FieldsFormatter`
renders them as `key=value` pairs after the message. Logs go to stderr so
they never mix with command output or the MCP stdio stream.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ln_channel_query"


class StdlibEventLogger:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    def log(self, level: int, message: str, fields: Mapping[str, Any]) -> None:
        clean = {k: v for k, v in fields.items() if v is not None}
        self._logger.log(level, message, extra={"fields": clean})


class FieldsFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        fields = getattr(record, "fields", None)
        if not isinstance(fields, Mapping) or not fields:
            return base
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{base} [{rendered}]"


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> logging.Logger:
    """Install a single Rich handler on the package logger.

    Safe to call more than once: the previous handler is replaced.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
        markup=False,
    )
    handler.setFormatter(FieldsFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
