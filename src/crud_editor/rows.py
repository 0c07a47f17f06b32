# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Result rows returned by editor operations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class DbRow(dict[str, Any]):
    """A database row as a column-name to value mapping.

    Being a plain dict subclass, a row serializes directly to JSON.
    Call has_data() to tell "no matching row" (empty row) apart from a row
    whose values happen to be NULL.
    """

    def has(self, column: str) -> bool:
        return column in self

    def remove(self, column: str) -> None:
        self.pop(column, None)

    def has_data(self) -> bool:
        """True if any column was read into this row."""
        return len(self) > 0


def scan_rows(records: Iterable[Mapping[str, Any]]) -> list[DbRow]:
    """Wrap driver records into fresh DbRow instances, keeping column values as is."""
    return [DbRow(record) for record in records]


def first_row(records: Iterable[Mapping[str, Any]]) -> DbRow:
    """Return the first record as a DbRow, or an empty DbRow."""
    for record in records:
        return DbRow(record)
    return DbRow()


__all__ = ["DbRow", "first_row", "scan_rows"]
