"""Logging configuration for the slick CLI."""

from __future__ import annotations

import logging
import os
from enum import StrEnum
from logging.config import dictConfig
from pathlib import Path


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(log_output: str | None = None, log_level: str | LogLevel | None = None) -> None:
    """Single source of truth for logging configuration.

    - Routes ALL logs through stdlib logging
    - Never writes to the terminal unless asked: stdout carries the prompt records,
      and anything on stderr would end up in the user's shell

    If not specified, reads from SLICK_LOG_OUTPUT and SLICK_LOG_LEVEL environment
    variables, defaulting to none/WARNING.
    """
    if log_output is None:
        log_output = os.environ.get("SLICK_LOG_OUTPUT", "none")
    if log_level is None:
        log_level = os.environ.get("SLICK_LOG_LEVEL", LogLevel.WARNING)

    log_level_upper = log_level.upper() if isinstance(log_level, str) else log_level
    try:
        log_level_enum = LogLevel(log_level_upper)
    except ValueError:
        raise ValueError(f"Invalid log level: {log_level}. Must be one of {', '.join(LogLevel)}") from None

    if log_output == "none":
        handlers_config: dict = {"null": {"class": "logging.NullHandler"}}
        root_handlers = ["null"]
    elif log_output in ("stdout", "stderr"):
        stream = "ext://sys.stdout" if log_output == "stdout" else "ext://sys.stderr"
        handlers_config = {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level_enum,
                "formatter": "console",
                "stream": stream,
            }
        }
        root_handlers = ["console"]
    else:
        # Treat as file path
        handlers_config = {
            "file": {
                "class": "logging.FileHandler",
                "level": log_level_enum,
                "formatter": "file",
                "filename": str(Path(log_output).expanduser().resolve()),
                "encoding": "utf-8",
            }
        }
        root_handlers = ["file"]

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": "%(levelname)s %(name)s: %(message)s"},
                "file": {"format": "%(asctime)s %(process)d %(levelname)s %(name)s %(message)s"},
            },
            "handlers": handlers_config,
            "root": {"level": log_level_enum, "handlers": root_handlers},
        }
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)
