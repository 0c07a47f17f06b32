# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""crud-editor: table-level CRUD statement builder and executor.

Components:
    EditorConfig: Fluent configuration of a table editor, validated by build().
    Editor: Immutable handle with precomputed statements and async CRUD verbs.
    Dialect: MySQL, PostgreSQL and SQLite quoting/placeholder rules.
    Field: Column descriptor built with new_field() and option combinators.
    SqlDb: Default executor, adapter plus per-task connection.

Example:
    Building an editor and running it against SQLite::

        from crud_editor import (
            Dialect, EditorConfig, MapBackedDataForm, SqlDb,
            INCLUDE_ALWAYS, INCLUDE_ON_READ, IS_PRIMARY_KEY, new_field,
        )

        students = EditorConfig(
            "students",
            Dialect.SQLITE,
            new_field("id", IS_PRIMARY_KEY, INCLUDE_ON_READ),
            new_field("name", INCLUDE_ALWAYS),
        ).build()

        db = SqlDb("/data/school.db")
        async with db.connection():
            row = await students.create(MapBackedDataForm(name="Ann"), db)
"""

from .adapters import DbAdapter, ExecResult, get_adapter
from .dialects import Dialect, build_placeholders, parameterize_fields
from .editor import Callbacks, Editor, EditorConfig, Executor
from .errors import ConfigurationError, PaginationMismatchError
from .fields import (
    INCLUDE_ALWAYS,
    INCLUDE_ON_CREATE,
    INCLUDE_ON_READ,
    INCLUDE_ON_UPDATE,
    IS_PRIMARY_KEY,
    IS_SELECTION_FILTER,
    IS_UNIQUE,
    Field,
    new_field,
)
from .form import (
    DataForm,
    MapBackedDataForm,
    form_from_json_struct,
    form_from_model,
    form_from_struct,
)
from .logger import LogLevel, console_logger
from .pagination import (
    KeysetPage,
    OffsetPage,
    Pageable,
    PaginationStrategy,
    keyset_paging,
    offset_paging,
)
from .rows import DbRow
from .sqldb import SqlDb

__version__ = "0.1.0"

__all__ = [
    # Editor
    "Callbacks",
    "Editor",
    "EditorConfig",
    "Executor",
    # Dialects
    "Dialect",
    "build_placeholders",
    "parameterize_fields",
    # Fields
    "Field",
    "new_field",
    "INCLUDE_ALWAYS",
    "INCLUDE_ON_CREATE",
    "INCLUDE_ON_READ",
    "INCLUDE_ON_UPDATE",
    "IS_PRIMARY_KEY",
    "IS_SELECTION_FILTER",
    "IS_UNIQUE",
    # Forms and rows
    "DataForm",
    "MapBackedDataForm",
    "DbRow",
    "form_from_json_struct",
    "form_from_model",
    "form_from_struct",
    # Pagination
    "KeysetPage",
    "OffsetPage",
    "Pageable",
    "PaginationStrategy",
    "keyset_paging",
    "offset_paging",
    # Errors
    "ConfigurationError",
    "PaginationMismatchError",
    # Logging
    "LogLevel",
    "console_logger",
    # Database
    "DbAdapter",
    "ExecResult",
    "SqlDb",
    "get_adapter",
]
