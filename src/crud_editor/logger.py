# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logger factories for editors.

Editors log through a standard ``logging.Logger``. The level scale is
NONE < DEBUG < INFO < WARN < ERROR, and a configured level lets through
every line whose level is at or below it: ERROR emits everything, DEBUG
emits only debug lines, NONE emits nothing.
"""

from __future__ import annotations

import itertools
import logging
import sys
from enum import IntEnum

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_logger_ids = itertools.count(1)


class LogLevel(IntEnum):
    NONE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @classmethod
    def from_name(cls, name: str) -> LogLevel:
        key = name.strip().upper()
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: '{name}'") from None

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> LogLevel:
        if record.levelno >= logging.ERROR:
            return cls.ERROR
        if record.levelno >= logging.WARNING:
            return cls.WARN
        if record.levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG

    def should_log(self, level: LogLevel) -> bool:
        return LogLevel.NONE < level <= self


class LevelGate(logging.Filter):
    """Filter passing records whose LogLevel is enabled by ``level``."""

    def __init__(self, level: LogLevel):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return self.level.should_log(LogLevel.from_record(record))


def console_logger(
    level: LogLevel = LogLevel.DEBUG, name: str = "crud_editor.console"
) -> logging.Logger:
    """Return a logger writing to stdout, gated by ``level``.

    Each call returns a distinct logger so editors never share handlers.
    """
    logger = logging.getLogger(f"{name}.{next(_logger_ids)}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler.addFilter(LevelGate(level))
    logger.addHandler(handler)
    return logger


__all__ = ["LevelGate", "LogLevel", "console_logger"]
