# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base adapter class for async database backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ..dialects import Dialect


class ExecResult(NamedTuple):
    """Outcome of a modifying statement.

    Attributes:
        rowcount: Number of affected rows as reported by the driver.
        last_insert_id: Driver-assigned identifier of the last inserted row,
            None when the driver does not report one (PostgreSQL).
    """

    rowcount: int
    last_insert_id: Any = None


class DbAdapter(ABC):
    """Abstract base class for async database adapters.

    Provides a unified interface for SQLite, PostgreSQL and MySQL with:
    - Connection management (acquire, release, shutdown)
    - Transaction control (commit, rollback on connection)
    - Positional statement execution (execute, fetch_one, fetch_all)

    Statements use the placeholder syntax of the adapter's dialect
    (``?`` or ``$n``). Subclasses translate them to the driver's paramstyle
    in _convert_placeholders().

    Connection model:
    - acquire(): Returns a new connection (from pool or new file handle)
    - release(conn): Returns connection to pool or closes it
    - shutdown(): Closes connection pool (application shutdown only)
    """

    dialect: Dialect

    @abstractmethod
    async def acquire(self) -> Any:
        """Acquire a new connection.

        For pooled adapters: gets connection from pool.
        For file-based adapters: opens new connection.
        """
        ...

    @abstractmethod
    async def release(self, conn: Any) -> None:
        """Release a connection to the pool, or close it."""
        ...

    @abstractmethod
    async def shutdown(self) -> None:
        """Close connection pool (application shutdown).

        For file-based adapters: no-op (connections are per-request).
        """
        ...

    @abstractmethod
    async def commit(self, conn: Any) -> None:
        """Commit transaction on connection."""
        ...

    @abstractmethod
    async def rollback(self, conn: Any) -> None:
        """Rollback transaction on connection."""
        ...

    # -------------------------------------------------------------------------
    # Connection-bound operations
    # -------------------------------------------------------------------------

    @abstractmethod
    async def execute(
        self, conn: Any, query: str, args: Sequence[Any] = ()
    ) -> ExecResult:
        """Execute a modifying statement, return row count and last insert id."""
        ...

    @abstractmethod
    async def fetch_all(
        self, conn: Any, query: str, args: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        """Execute a query, return all rows as dicts keyed by column name."""
        ...

    @abstractmethod
    async def execute_script(self, conn: Any, script: str) -> None:
        """Execute multiple statements (schema setup)."""
        ...

    async def fetch_one(
        self, conn: Any, query: str, args: Sequence[Any] = ()
    ) -> dict[str, Any] | None:
        """Execute a query, return the first row or None."""
        rows = await self.fetch_all(conn, query, args)
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # SQL Helpers
    # -------------------------------------------------------------------------

    def _convert_placeholders(
        self, query: str, args: Sequence[Any]
    ) -> tuple[str, Sequence[Any]]:
        """Translate dialect placeholders to the driver paramstyle.

        Default: no translation.
        """
        return query, args
