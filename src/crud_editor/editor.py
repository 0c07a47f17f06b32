# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Table editor: configuration, statement building and CRUD execution.

An editor is configured once per table with EditorConfig, then built into an
immutable Editor that holds the precomputed statements:

    students = (
        EditorConfig(
            "students",
            Dialect.POSTGRESQL,
            new_field("id", IS_PRIMARY_KEY, INCLUDE_ON_READ),
            new_field("name", INCLUDE_ALWAYS),
            new_field("school_id", INCLUDE_ON_CREATE, INCLUDE_ON_READ, IS_SELECTION_FILTER),
        )
        .soft_delete(True, "deleted_at")
        .paginate(PaginationStrategy.KEYSET, "id")
        .build()
    )

    async with db.connection():
        row = await students.create(MapBackedDataForm(name="Ann", school_id=1), db)

The Editor keeps no per-call state, so one instance can serve any number of
concurrent calls. Create and update on MySQL/SQLite (and every delete) run
two statements, a write and a read, that are not atomic unless the caller
wraps them in a transaction: the read may observe a later state written by
another connection in between.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol

from .dialects import Dialect, is_null_check
from .errors import ConfigurationError, PaginationMismatchError
from .fields import Field, FieldSets, classify_fields, find_primary_key, validate_fields
from .logger import LogLevel, console_logger
from .pagination import Pageable, PaginationStrategy
from .rows import DbRow, first_row, scan_rows
from .statements import Statements, build_statements

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .adapters import ExecResult
    from .form import DataForm

PreActionCallback = Callable[["Editor", "DataForm"], Any]
PostActionCallback = Callable[["Editor", "list[DbRow]"], Any]


class Executor(Protocol):
    """What an editor needs to run its statements (SqlDb implements it)."""

    async def execute(self, query: str, args: Sequence[Any] = ()) -> ExecResult: ...

    async def fetch_all(self, query: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]: ...


@dataclass(frozen=True)
class Callbacks:
    """Optional pre/post hooks per verb.

    Pre hooks receive (editor, form) before binding, post hooks receive
    (editor, rows). Hooks may be plain or coroutine functions; whatever they
    raise propagates to the caller.
    """

    pre_create: PreActionCallback | None = None
    post_create: PostActionCallback | None = None
    pre_read: PreActionCallback | None = None
    post_read: PostActionCallback | None = None
    pre_update: PreActionCallback | None = None
    post_update: PostActionCallback | None = None
    pre_delete: PreActionCallback | None = None
    post_delete: PostActionCallback | None = None


async def _invoke(callback: Callable[..., Any] | None, *args: Any) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class EditorConfig:
    """Mutable configuration of a table editor.

    Chained setters return the config itself. build() validates the whole
    configuration and returns an immutable Editor. Do not share a config
    between tasks while it is being set up.

    Raises:
        ConfigurationError: If ``fields`` is empty or contains duplicate names.
    """

    def __init__(self, table: str, dialect: Dialect, *fields: Field):
        validate_fields(fields, table)
        self.table = table
        self.dialect = dialect
        self.fields: tuple[Field, ...] = tuple(fields)
        self.logger: logging.Logger | None = None
        self.debug_enabled = False
        self.soft_delete_enabled = False
        self.soft_delete_columns: tuple[str, ...] = ()
        self.pagination = PaginationStrategy.NONE
        self.keyset_field: str | None = None
        self.callbacks: dict[str, Callable[..., Any]] = {}

    def set_logger(self, logger: logging.Logger) -> EditorConfig:
        self.logger = logger
        return self

    def debug(self, enabled: bool) -> EditorConfig:
        """Toggle debug mode: equivalent to a console logger at DEBUG level."""
        self.debug_enabled = enabled
        return self

    def soft_delete(self, enabled: bool, *columns: str) -> EditorConfig:
        """Turn delete() into an update of ``columns``.

        The values written to the columns come from the form passed to
        delete(), e.g. ``form.set("deleted_at", now)``.
        """
        self.soft_delete_enabled = enabled
        self.soft_delete_columns = tuple(columns)
        return self

    def paginate(self, strategy: PaginationStrategy, *fields: str) -> EditorConfig:
        """Configure bulk-read pagination.

        Raises:
            ConfigurationError: If strategy is KEYSET and no field is given.
        """
        if strategy is PaginationStrategy.KEYSET:
            if not fields:
                raise ConfigurationError(
                    "Keyset pagination requires a field to be specified", self.table
                )
            self.keyset_field = fields[0]
        else:
            self.keyset_field = None
        self.pagination = strategy
        return self

    def on_pre_create(self, f: PreActionCallback) -> EditorConfig:
        self.callbacks["pre_create"] = f
        return self

    def on_post_create(self, f: PostActionCallback) -> EditorConfig:
        self.callbacks["post_create"] = f
        return self

    def on_pre_read(self, f: PreActionCallback) -> EditorConfig:
        self.callbacks["pre_read"] = f
        return self

    def on_post_read(self, f: PostActionCallback) -> EditorConfig:
        self.callbacks["post_read"] = f
        return self

    def on_pre_update(self, f: PreActionCallback) -> EditorConfig:
        self.callbacks["pre_update"] = f
        return self

    def on_post_update(self, f: PostActionCallback) -> EditorConfig:
        self.callbacks["post_update"] = f
        return self

    def on_pre_delete(self, f: PreActionCallback) -> EditorConfig:
        self.callbacks["pre_delete"] = f
        return self

    def on_post_delete(self, f: PostActionCallback) -> EditorConfig:
        self.callbacks["post_delete"] = f
        return self

    def _validate(self) -> Field:
        validate_fields(self.fields, self.table)
        pk = find_primary_key(self.fields)
        if pk is None:
            raise ConfigurationError("no field is marked as primary key", self.table)
        if (self.pagination is PaginationStrategy.KEYSET) != bool(self.keyset_field):
            raise ConfigurationError(
                "a keyset field is required exactly when pagination is KEYSET", self.table
            )
        if self.soft_delete_enabled and not self.soft_delete_columns:
            raise ConfigurationError("soft delete requires at least one column", self.table)
        return pk

    def build(self) -> Editor:
        """Validate the configuration and render all statements.

        Raises:
            ConfigurationError: On any inconsistent setting.
        """
        pk = self._validate()
        dialect = self.dialect

        if self.debug_enabled:
            logger = console_logger(LogLevel.DEBUG)
        else:
            logger = self.logger or logging.getLogger(f"{__name__}.{self.table}")

        field_sets = classify_fields(self.fields, dialect)
        soft_delete_columns = (
            tuple(dialect.quote(c) for c in self.soft_delete_columns)
            if self.soft_delete_enabled
            else ()
        )
        keyset_field = dialect.quote(self.keyset_field) if self.keyset_field else None
        table_quoted = dialect.quote(self.table)
        pk_quoted = dialect.quote(pk.name)

        statements = build_statements(
            table_quoted,
            dialect,
            field_sets,
            pk_quoted,
            pagination=self.pagination,
            keyset_field=keyset_field,
            soft_delete_columns=soft_delete_columns,
        )
        for kind, sql in statements.items():
            logger.debug("%s statement => %s", kind, sql)

        return Editor(
            table_name=self.table,
            table_name_quoted=table_quoted,
            dialect=dialect,
            fields=self.fields,
            field_sets=field_sets,
            primary_key_field=pk_quoted,
            statements=statements,
            soft_delete_enabled=self.soft_delete_enabled,
            soft_delete_columns=soft_delete_columns,
            pagination=self.pagination,
            keyset_field=keyset_field,
            callbacks=Callbacks(**self.callbacks),
            logger=logger,
        )


@dataclass(frozen=True, eq=False)
class Editor:
    """Immutable, stateless CRUD handle for one table.

    Every verb is a coroutine taking the input form and an executor. Errors
    raised by the executor propagate unchanged; nothing is retried or
    rolled back here.
    """

    table_name: str
    table_name_quoted: str
    dialect: Dialect
    fields: tuple[Field, ...]
    field_sets: FieldSets
    primary_key_field: str
    statements: Statements
    soft_delete_enabled: bool = False
    soft_delete_columns: tuple[str, ...] = ()
    pagination: PaginationStrategy = PaginationStrategy.NONE
    keyset_field: str | None = None
    callbacks: Callbacks = field(default_factory=Callbacks, repr=False)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__), repr=False)

    def uses_keyset_pagination(self) -> bool:
        return self.pagination is PaginationStrategy.KEYSET

    @property
    def primary_key(self) -> str:
        """Bare primary-key name, as used for form lookups."""
        return self.dialect.unquote(self.primary_key_field)

    # -------------------------------------------------------------------------
    # Binding
    # -------------------------------------------------------------------------

    def field_values(self, fields: Sequence[str], form: DataForm) -> list[Any]:
        """Values for ``fields`` in order, looked up by unquoted name.

        Null checks (``"col" IS NULL``) have no placeholder and are skipped.
        """
        return [form.get(self.dialect.unquote(f)) for f in fields if not is_null_check(f)]

    def single_read_args(self, form: DataForm) -> list[Any]:
        return [form.get(self.primary_key), *self.field_values(self.field_sets.filter, form)]

    def read_args(self, form: DataForm, pageable: Pageable | None = None) -> list[Any]:
        """Filter values followed by the page bounds.

        Raises:
            PaginationMismatchError: If ``pageable`` does not match the
                configured strategy, or is missing on a paginated editor.
        """
        args = self.field_values(self.field_sets.filter, form)
        if pageable is None:
            if self.pagination is not PaginationStrategy.NONE:
                raise PaginationMismatchError(self.table_name, self.pagination.value, "no")
            return args
        if pageable.strategy is not self.pagination:
            raise PaginationMismatchError(
                self.table_name, self.pagination.value, pageable.strategy.value
            )
        if self.uses_keyset_pagination():
            args += [pageable.keyset_value(), pageable.size()]
        elif self.dialect.numbered_placeholders:
            # OFFSET $n FETCH NEXT $n+1 ROWS ONLY
            args += [pageable.offset(), pageable.size()]
        else:
            # LIMIT ? OFFSET ?
            args += [pageable.size(), pageable.offset()]
        return args

    def update_args(self, form: DataForm) -> list[Any]:
        return [
            *self.field_values(self.field_sets.update, form),
            form.get(self.primary_key),
            *self.field_values(self.field_sets.filter, form),
        ]

    def delete_args(self, form: DataForm) -> list[Any]:
        return [
            *self.field_values(self.soft_delete_columns, form),
            form.get(self.primary_key),
            *self.field_values(self.field_sets.filter, form),
        ]

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def create(self, form: DataForm, db: Executor) -> DbRow:
        """Insert a row and return it as stored.

        PostgreSQL returns the row through RETURNING. MySQL and SQLite store
        the driver-assigned id in ``form`` under the primary key, then read
        the row back with single_read().
        """
        await _invoke(self.callbacks.pre_create, self, form)
        args = self.field_values(self.field_sets.create, form)
        if self.dialect.supports_returning:
            row = first_row(await db.fetch_all(self.statements.create, args))
        else:
            result = await db.execute(self.statements.create, args)
            form.set(self.primary_key, result.last_insert_id)
            row = await self.single_read(form, db)
        await _invoke(self.callbacks.post_create, self, [row])
        return row

    async def single_read(self, form: DataForm, db: Executor) -> DbRow:
        """Read the row whose primary key is in ``form``.

        Returns an empty DbRow (has_data() is False) when nothing matches.
        """
        rows = await db.fetch_all(self.statements.single_read, self.single_read_args(form))
        return first_row(rows)

    async def read(
        self, form: DataForm, db: Executor, pageable: Pageable | None = None
    ) -> list[DbRow]:
        """Read all rows matching the filter fields, one page when paginated."""
        await _invoke(self.callbacks.pre_read, self, form)
        args = self.read_args(form, pageable)
        rows = scan_rows(await db.fetch_all(self.statements.read, args))
        await _invoke(self.callbacks.post_read, self, rows)
        return rows

    async def update(self, form: DataForm, db: Executor) -> DbRow:
        """Update the row identified by the primary key and return its new state."""
        await _invoke(self.callbacks.pre_update, self, form)
        args = self.update_args(form)
        if self.dialect.supports_returning:
            row = first_row(await db.fetch_all(self.statements.update, args))
        else:
            await db.execute(self.statements.update, args)
            row = await self.single_read(form, db)
        await _invoke(self.callbacks.post_update, self, [row])
        return row

    async def delete(self, form: DataForm, db: Executor) -> DbRow:
        """Delete (or soft delete) the row and return it as it was before.

        The returned row is empty when no row matched the primary key and
        filters.
        """
        await _invoke(self.callbacks.pre_delete, self, form)
        row = await self.single_read(form, db)
        await db.execute(self.statements.delete, self.delete_args(form))
        await _invoke(self.callbacks.post_delete, self, [row])
        return row


__all__ = ["Callbacks", "Editor", "EditorConfig", "Executor"]
