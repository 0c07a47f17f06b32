# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Field descriptors and role-based classification.

A Field describes one table column and the CRUD roles it takes part in.
Fields are built once with option combinators and never mutated:

    fields = [
        new_field("id", IS_PRIMARY_KEY, INCLUDE_ON_READ),
        new_field("name", INCLUDE_ALWAYS),
        new_field("school_id", INCLUDE_ON_CREATE, INCLUDE_ON_READ, IS_SELECTION_FILTER),
    ]

classify_fields() splits a field list into the quoted create/read/update/filter
subsets used by the statement builder, keeping declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .dialects import Dialect


@dataclass(frozen=True)
class Field:
    """Immutable column descriptor.

    Attributes:
        name: Column name, unique within a table.
        primary_key: Column is the table's primary key.
        create: Column is written by create().
        read: Column is returned by reads.
        update: Column is written by update().
        selection_filter: Column restricts reads, updates and deletes.
        unique: Informational, not used when building statements.
    """

    name: str
    primary_key: bool = False
    create: bool = False
    read: bool = False
    update: bool = False
    selection_filter: bool = False
    unique: bool = False


FieldOption = Callable[[Field], Field]


def IS_PRIMARY_KEY(f: Field) -> Field:  # noqa: N802
    return replace(f, primary_key=True)


def INCLUDE_ALWAYS(f: Field) -> Field:  # noqa: N802
    return replace(f, create=True, read=True, update=True)


def INCLUDE_ON_CREATE(f: Field) -> Field:  # noqa: N802
    return replace(f, create=True)


def INCLUDE_ON_READ(f: Field) -> Field:  # noqa: N802
    return replace(f, read=True)


def INCLUDE_ON_UPDATE(f: Field) -> Field:  # noqa: N802
    return replace(f, update=True)


def IS_UNIQUE(f: Field) -> Field:  # noqa: N802
    return replace(f, unique=True)


def IS_SELECTION_FILTER(f: Field) -> Field:  # noqa: N802
    """Mark the field as a selection filter.

    editor.read() on a table with ``school_id`` marked as filter renders
    ``SELECT ... FROM "students" WHERE ("school_id"=$1)``.
    """
    return replace(f, selection_filter=True)


OPTIONS: dict[str, FieldOption] = {
    "primary_key": IS_PRIMARY_KEY,
    "always": INCLUDE_ALWAYS,
    "create": INCLUDE_ON_CREATE,
    "read": INCLUDE_ON_READ,
    "update": INCLUDE_ON_UPDATE,
    "unique": IS_UNIQUE,
    "filter": IS_SELECTION_FILTER,
}


def new_field(name: str, *options: FieldOption) -> Field:
    """Create a Field and apply each option in order."""
    f = Field(name=name)
    for option in options:
        f = option(f)
    return f


def validate_fields(fields: Sequence[Field], table: str | None = None) -> None:
    """Reject empty field lists and duplicate names.

    Raises:
        ConfigurationError: If ``fields`` is empty or two fields share a name.
    """
    if not fields:
        raise ConfigurationError("fields cannot be empty", table)
    for i, current in enumerate(fields):
        for j in range(i + 1, len(fields)):
            if current.name == fields[j].name:
                raise ConfigurationError(
                    f"duplicate field '{current.name}' at {i} and {j}", table
                )


def find_primary_key(fields: Sequence[Field]) -> Field | None:
    """Return the first field marked as primary key, or None."""
    for f in fields:
        if f.primary_key:
            return f
    return None


@dataclass(frozen=True)
class FieldSets:
    """Quoted field names per role, in declaration order."""

    create: tuple[str, ...] = ()
    read: tuple[str, ...] = ()
    update: tuple[str, ...] = ()
    filter: tuple[str, ...] = ()


def classify_fields(fields: Sequence[Field], dialect: Dialect) -> FieldSets:
    """Split fields into quoted create/read/update/filter subsets.

    A field can belong to several subsets.
    """
    return FieldSets(
        create=tuple(dialect.quote(f.name) for f in fields if f.create),
        read=tuple(dialect.quote(f.name) for f in fields if f.read),
        update=tuple(dialect.quote(f.name) for f in fields if f.update),
        filter=tuple(dialect.quote(f.name) for f in fields if f.selection_filter),
    )


__all__ = [
    "Field",
    "FieldOption",
    "FieldSets",
    "INCLUDE_ALWAYS",
    "INCLUDE_ON_CREATE",
    "INCLUDE_ON_READ",
    "INCLUDE_ON_UPDATE",
    "IS_PRIMARY_KEY",
    "IS_SELECTION_FILTER",
    "IS_UNIQUE",
    "OPTIONS",
    "classify_fields",
    "find_primary_key",
    "new_field",
    "validate_fields",
]
