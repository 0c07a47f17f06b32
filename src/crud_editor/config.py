# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Runtime settings for tools built on crud-editor.

Usage:
    settings = settings_from_env()
    db = SqlDb(settings.db_url)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .logger import LogLevel


@dataclass
class Settings:
    """Settings shared by the CLI and applications.

    Attributes:
        db_url: SQLite path or postgresql:// / mysql:// URL.
        debug: Build editors in debug mode (console logger at DEBUG).
        log_level: Level of the console logger used by the CLI.
        page_size: Default page size for paginated reads.
    """

    db_url: str = ":memory:"
    """Database connection string."""

    debug: bool = False
    """Log every built statement to stdout."""

    log_level: LogLevel = LogLevel.NONE
    """Console log level."""

    page_size: int = 50
    """Default page size for paginated reads."""


def settings_from_env() -> Settings:
    """Build Settings from CRUD_EDITOR_* environment variables.

    Environment variables:
        CRUD_EDITOR_DB: Database connection string (default: :memory:)
        CRUD_EDITOR_DEBUG: Enable debug mode (default: false)
        CRUD_EDITOR_LOG_LEVEL: none, debug, info, warn or error (default: none)
        CRUD_EDITOR_PAGE_SIZE: Default page size (default: 50)
    """
    return Settings(
        db_url=os.environ.get("CRUD_EDITOR_DB", ":memory:"),
        debug=os.environ.get("CRUD_EDITOR_DEBUG", "").lower() in ("1", "true", "yes"),
        log_level=LogLevel.from_name(os.environ.get("CRUD_EDITOR_LOG_LEVEL", "none")),
        page_size=int(os.environ.get("CRUD_EDITOR_PAGE_SIZE", "50")),
    )


__all__ = ["Settings", "settings_from_env"]
