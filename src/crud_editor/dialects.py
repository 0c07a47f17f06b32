# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SQL dialect rules: identifier quoting, placeholders and RETURNING support.

All helpers are pure functions of a Dialect and their arguments. They hold
no state and are shared by the statement builder and the binder.

Placeholder styles:
    - MYSQL, SQLITE: positional ``?`` (order only, no numbering)
    - POSTGRESQL: numbered ``$1, $2, ...`` (numbering is per statement)

Example:
    >>> build_placeholders(3, Dialect.POSTGRESQL)
    '$1,$2,$3'
    >>> parameterize_fields(['`a`', '`b`'], Dialect.SQLITE, use_and=True)
    '`a`=? AND `b`=?'
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

NULL_CHECK_SUFFIXES = ("IS NULL", "IS NOT NULL")


class Dialect(Enum):
    """Target SQL engine family.

    Each member carries its name, identifier quote character and whether
    INSERT/UPDATE/DELETE can return the affected row inline.
    """

    MYSQL = ("mysql", "`", False)
    POSTGRESQL = ("postgresql", '"', True)
    SQLITE = ("sqlite", "`", False)

    def __init__(self, dialect_id: str, quote_char: str, supports_returning: bool) -> None:
        self.dialect_id = dialect_id
        self.quote_char = quote_char
        self.supports_returning = supports_returning

    @property
    def numbered_placeholders(self) -> bool:
        """True when placeholders carry their position ($n)."""
        return self is Dialect.POSTGRESQL

    def placeholder(self, index: int) -> str:
        """Return the placeholder for the 1-based parameter ``index``."""
        if self.numbered_placeholders:
            return f"${index}"
        return "?"

    def quote(self, name: str) -> str:
        """Quote an identifier with this dialect's quote character.

        For a null check such as ``deleted_at IS NULL`` only the column part
        is quoted, so the result still ends with the null-check suffix.
        """
        for suffix in NULL_CHECK_SUFFIXES:
            if name.endswith(suffix):
                column = name[: -len(suffix)].strip()
                return f"{self.quote_char}{column}{self.quote_char} {suffix}"
        return f"{self.quote_char}{name}{self.quote_char}"

    def unquote(self, name: str) -> str:
        """Strip the quote character from a quoted identifier.

        Names that are not wrapped in the quote character are returned as is.
        """
        q = self.quote_char
        if len(name) >= 3 and name[0] == q and name[-1] == q:
            return name.strip(q)
        return name

    @classmethod
    def from_name(cls, name: str) -> Dialect:
        """Resolve a dialect from its name ("mysql", "postgres", "sqlite", ...)."""
        key = name.strip().lower()
        if key == "postgres":
            key = "postgresql"
        for dialect in cls:
            if dialect.dialect_id == key:
                return dialect
        raise ValueError(f"Unknown dialect: '{name}'. Supported: mysql, postgresql, sqlite")

    def __str__(self) -> str:
        return self.dialect_id


def is_null_check(field: str) -> bool:
    """True if the field is a constant null check (no bound value)."""
    return field.endswith(NULL_CHECK_SUFFIXES)


def build_placeholders(count: int, dialect: Dialect) -> str:
    """Return ``count`` comma-separated placeholders numbered from 1."""
    return ",".join(dialect.placeholder(i + 1) for i in range(count))


def parameterize_fields(
    fields: Sequence[str],
    dialect: Dialect,
    use_and: bool = False,
    start: int = 1,
) -> str:
    """Render ``field=<placeholder>`` assignments or conditions.

    Args:
        fields: Field names, usually already quoted.
        dialect: Target dialect.
        use_and: Join with `` AND `` (conditions) instead of ``,`` (SET lists).
        start: Index of the first placeholder (PostgreSQL only).

    Fields ending in ``IS NULL`` or ``IS NOT NULL`` are emitted as bare
    conditions and do not consume a placeholder index.
    """
    separator = " AND " if use_and else ","
    parts: list[str] = []
    index = start
    for field in fields:
        if is_null_check(field):
            parts.append(field)
            continue
        parts.append(f"{field}={dialect.placeholder(index)}")
        index += 1
    return separator.join(parts)


def count_bound(fields: Sequence[str]) -> int:
    """Number of placeholders ``parameterize_fields`` renders for ``fields``."""
    return sum(1 for f in fields if not is_null_check(f))


__all__ = [
    "Dialect",
    "build_placeholders",
    "count_bound",
    "is_null_check",
    "parameterize_fields",
]
