# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SQLite async adapter using aiosqlite with per-request connections."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import aiosqlite

from ..dialects import Dialect
from .base import DbAdapter, ExecResult

if TYPE_CHECKING:
    from collections.abc import Sequence


class SqliteAdapter(DbAdapter):
    """SQLite async adapter with per-request connections.

    Uses ``?`` placeholders natively. Each acquire() opens a new connection,
    release() closes it. Values are returned exactly as sqlite3 decodes them
    (INTEGER columns come back as Python int).
    """

    dialect = Dialect.SQLITE

    def __init__(self, db_path: str):
        self.db_path = db_path or ":memory:"

    async def acquire(self) -> aiosqlite.Connection:
        """Open new connection for request."""
        return await aiosqlite.connect(self.db_path)

    async def release(self, conn: aiosqlite.Connection) -> None:
        """Close connection."""
        await conn.close()

    async def shutdown(self) -> None:
        """No-op for SQLite (no pool to close)."""
        pass

    async def commit(self, conn: aiosqlite.Connection) -> None:
        await conn.commit()

    async def rollback(self, conn: aiosqlite.Connection) -> None:
        await conn.rollback()

    async def execute(
        self, conn: aiosqlite.Connection, query: str, args: Sequence[Any] = ()
    ) -> ExecResult:
        """Execute statement, return affected row count and lastrowid."""
        async with conn.execute(query, tuple(args)) as cursor:
            return ExecResult(cursor.rowcount, cursor.lastrowid)

    async def fetch_all(
        self, conn: aiosqlite.Connection, query: str, args: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        """Execute query, return all rows as list of dicts."""
        async with conn.execute(query, tuple(args)) as cursor:
            rows = await cursor.fetchall()
            cols = [c[0] for c in cursor.description]
            return [dict(zip(cols, row, strict=True)) for row in rows]

    async def execute_script(self, conn: aiosqlite.Connection, script: str) -> None:
        """Execute multiple statements (for schema creation)."""
        await conn.executescript(script)
