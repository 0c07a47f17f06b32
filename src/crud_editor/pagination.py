# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pagination strategies and pageables for bulk reads.

Two interchangeable policies:

- OFFSET: ``LIMIT``/``OFFSET`` paging. The larger the offset, the slower
  the query, since the engine scans every skipped row.
- KEYSET: compares an indexed, monotonic column with ``>`` and orders by
  it. Faster than offset paging on large tables.

A Pageable is passed to Editor.read() and supplies the trailing bound
arguments of the bulk-read statement.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol


class PaginationStrategy(Enum):
    """How bulk reads are paged. Default is NONE (no paging clause)."""

    NONE = "none"
    OFFSET = "offset"
    KEYSET = "keyset"


class Pageable(Protocol):
    """Page request consumed by Editor.read()."""

    strategy: PaginationStrategy

    def offset(self) -> int: ...

    def size(self) -> int: ...

    def keyset_value(self) -> Any: ...


@dataclass(frozen=True)
class OffsetPage:
    """Offset page: skip ``page_offset`` rows, return ``page_size`` rows."""

    page_offset: int
    page_size: int
    strategy: PaginationStrategy = PaginationStrategy.OFFSET

    def offset(self) -> int:
        return self.page_offset

    def size(self) -> int:
        return self.page_size

    def keyset_value(self) -> Any:
        return None


@dataclass(frozen=True)
class KeysetPage:
    """Keyset page: rows whose keyset column is greater than ``value``."""

    value: Any
    page_size: int
    strategy: PaginationStrategy = PaginationStrategy.KEYSET

    def offset(self) -> int:
        return 0

    def size(self) -> int:
        return self.page_size

    def keyset_value(self) -> Any:
        return self.value


def offset_paging(page: int, size: int) -> OffsetPage:
    """Build an offset page from a zero-based page number."""
    return OffsetPage(page_offset=page * size, page_size=size)


def keyset_paging(value: Any, size: int) -> KeysetPage:
    """Build a keyset page starting after ``value``."""
    return KeysetPage(value=value, page_size=size)


__all__ = [
    "KeysetPage",
    "OffsetPage",
    "Pageable",
    "PaginationStrategy",
    "keyset_paging",
    "offset_paging",
]
