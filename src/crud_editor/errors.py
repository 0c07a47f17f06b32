# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised by the editor layer.

Driver exceptions are never wrapped: they reach the caller unchanged.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when an editor is configured with inconsistent settings.

    Covers empty or duplicate field sets, a missing primary key, keyset
    pagination without an ordering column and soft delete without columns.
    """

    def __init__(self, message: str, table: str | None = None):
        self.table = table
        if table:
            message = f"{table}: {message}"
        super().__init__(message)


class PaginationMismatchError(ValueError):
    """Raised when a pageable does not match the editor's pagination strategy."""

    def __init__(self, table: str, expected: object, received: object):
        self.table = table
        self.expected = expected
        self.received = received
        super().__init__(
            f"Table '{table}' is configured for {expected} pagination, got {received} pageable"
        )


__all__ = ["ConfigurationError", "PaginationMismatchError"]
