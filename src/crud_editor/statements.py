# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rendering of the five CRUD statements of a table editor.

Statements are rendered once, when the editor is built, and reused on every
call. Placeholder numbering (PostgreSQL) is threaded across clauses in the
order the binder supplies values:

    create       create fields
    single read  primary key, filters
    read         filters, then (offset, size) or (keyset value, size)
    update       update fields, primary key, filters
    delete       soft-delete columns (soft delete only), primary key, filters

Example (PostgreSQL, fields id/name/age):
    INSERT INTO "students"("name","age") VALUES ($1,$2) RETURNING "id","name","age"
    SELECT "id","name","age" FROM "students" WHERE ("id"=$1)
    UPDATE "students" SET "name"=$1,"age"=$2 WHERE "id"=$3 RETURNING "id","name","age"
    DELETE FROM "students" WHERE "id"=$1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .dialects import Dialect, build_placeholders, count_bound, parameterize_fields
from .pagination import PaginationStrategy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .fields import FieldSets


@dataclass(frozen=True)
class Statements:
    """The five precomputed statements of an editor."""

    create: str
    single_read: str
    read: str
    update: str
    delete: str

    def items(self) -> list[tuple[str, str]]:
        """(kind, sql) pairs in a stable order."""
        return [
            ("create", self.create),
            ("read", self.read),
            ("update", self.update),
            ("delete", self.delete),
            ("single selection", self.single_read),
        ]


def _returning(dialect: Dialect, read_fields: Sequence[str]) -> str:
    if not dialect.supports_returning:
        return ""
    return " RETURNING " + ",".join(read_fields)


def _filter_clause(filters: Sequence[str], dialect: Dialect, start: int) -> str:
    if not filters:
        return ""
    return f" AND ({parameterize_fields(filters, dialect, use_and=True, start=start)})"


def render_create(table: str, dialect: Dialect, fields: FieldSets) -> str:
    return (
        f"INSERT INTO {table}({','.join(fields.create)})"
        f" VALUES ({build_placeholders(len(fields.create), dialect)})"
        f"{_returning(dialect, fields.read)}"
    )


def render_single_read(table: str, dialect: Dialect, fields: FieldSets, pk: str) -> str:
    return (
        f"SELECT {','.join(fields.read)} FROM {table}"
        f" WHERE ({pk}={dialect.placeholder(1)})"
        f"{_filter_clause(fields.filter, dialect, 2)}"
    )


def render_read(
    table: str,
    dialect: Dialect,
    fields: FieldSets,
    pagination: PaginationStrategy = PaginationStrategy.NONE,
    keyset_field: str | None = None,
) -> str:
    """Render the bulk-read statement with its optional paging clause."""
    sql = f"SELECT {','.join(fields.read)} FROM {table}"
    bound = 0
    if fields.filter:
        sql += f" WHERE ({parameterize_fields(fields.filter, dialect, use_and=True)})"
        bound = count_bound(fields.filter)

    if pagination is PaginationStrategy.OFFSET:
        if dialect.numbered_placeholders:
            sql += f" OFFSET ${bound + 1} FETCH NEXT ${bound + 2} ROWS ONLY"
        else:
            sql += " LIMIT ? OFFSET ?"
    elif pagination is PaginationStrategy.KEYSET:
        if not keyset_field:
            raise ValueError("Keyset pagination requires a field to be specified")
        joiner = " AND " if fields.filter else " WHERE "
        sql += (
            f"{joiner}({keyset_field}>{dialect.placeholder(bound + 1)})"
            f" ORDER BY {keyset_field} ASC LIMIT {dialect.placeholder(bound + 2)}"
        )
    return sql


def render_update(table: str, dialect: Dialect, fields: FieldSets, pk: str) -> str:
    bound = count_bound(fields.update)
    return (
        f"UPDATE {table} SET {parameterize_fields(fields.update, dialect)}"
        f" WHERE {pk}={dialect.placeholder(bound + 1)}"
        f"{_filter_clause(fields.filter, dialect, bound + 2)}"
        f"{_returning(dialect, fields.read)}"
    )


def render_delete(
    table: str,
    dialect: Dialect,
    fields: FieldSets,
    pk: str,
    soft_delete_columns: Sequence[str] | None = None,
) -> str:
    """Render DELETE, or the soft-delete UPDATE when columns are given."""
    if soft_delete_columns:
        sql = f"UPDATE {table} SET {parameterize_fields(soft_delete_columns, dialect)}"
        bound = count_bound(soft_delete_columns)
    else:
        sql = f"DELETE FROM {table}"
        bound = 0
    return (
        f"{sql} WHERE {pk}={dialect.placeholder(bound + 1)}"
        f"{_filter_clause(fields.filter, dialect, bound + 2)}"
    )


def build_statements(
    table: str,
    dialect: Dialect,
    fields: FieldSets,
    pk: str,
    pagination: PaginationStrategy = PaginationStrategy.NONE,
    keyset_field: str | None = None,
    soft_delete_columns: Sequence[str] | None = None,
) -> Statements:
    """Render all statements. Identifiers must already be quoted."""
    return Statements(
        create=render_create(table, dialect, fields),
        single_read=render_single_read(table, dialect, fields, pk),
        read=render_read(table, dialect, fields, pagination, keyset_field),
        update=render_update(table, dialect, fields, pk),
        delete=render_delete(table, dialect, fields, pk, soft_delete_columns),
    )


__all__ = [
    "Statements",
    "build_statements",
    "render_create",
    "render_delete",
    "render_read",
    "render_single_read",
    "render_update",
]
