# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""PostgreSQL async adapter using psycopg3 with connection pooling.

Uses connection-per-request model: acquire() gets from pool,
release() returns to pool. Each request gets isolated transaction.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from ..dialects import Dialect
from .base import DbAdapter, ExecResult

if TYPE_CHECKING:
    from collections.abc import Sequence

_NUMBERED = re.compile(r"\$(\d+)")


class PostgresAdapter(DbAdapter):
    """PostgreSQL async adapter with connection pooling.

    Statements use ``$n`` placeholders, converted to psycopg's positional
    ``%s`` with the arguments re-ordered to match. acquire() gets connection
    from pool, release() returns it. Each connection is isolated.

    Integer columns come back as Python int whatever their width (int4 or
    int8), so a primary key read here compares equal to one read from SQLite.

    Pool is initialized lazily on first acquire().
    """

    dialect = Dialect.POSTGRESQL

    def __init__(self, dsn: str, pool_size: int = 10, connect_timeout: float = 10.0):
        self.dsn = dsn
        self.pool_size = pool_size
        self.connect_timeout = connect_timeout
        self._pool: Any = None

        # Verify psycopg is available at init time
        try:
            import psycopg  # noqa: F401
        except ImportError as e:
            raise ImportError(
                "PostgreSQL support requires psycopg. "
                "Install with: pip install crud-editor[postgresql]"
            ) from e

    def _convert_placeholders(
        self, query: str, args: Sequence[Any]
    ) -> tuple[str, Sequence[Any]]:
        """Convert $n placeholders to %s, ordering args by appearance."""
        positions = [int(n) for n in _NUMBERED.findall(query)]
        query = _NUMBERED.sub("%s", query.replace("%", "%%"))
        return query, [args[n - 1] for n in positions]

    async def _ensure_pool(self) -> None:
        """Initialize connection pool if not already open."""
        if self._pool is not None:
            return

        import asyncio

        from psycopg_pool import AsyncConnectionPool

        self._pool = AsyncConnectionPool(
            self.dsn,
            min_size=1,
            max_size=self.pool_size,
            open=False,
        )
        try:
            await asyncio.wait_for(
                self._pool.open(wait=True, timeout=self.connect_timeout),
                timeout=self.connect_timeout + 1,
            )
        except asyncio.TimeoutError:
            await self._pool.close()
            self._pool = None
            raise TimeoutError(
                f"PostgreSQL connection timed out after {self.connect_timeout}s. "
                "Check credentials and server availability."
            ) from None
        except Exception as e:
            await self._pool.close()
            self._pool = None
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    async def acquire(self) -> Any:
        """Acquire connection from pool."""
        await self._ensure_pool()
        return await self._pool.getconn()

    async def release(self, conn: Any) -> None:
        """Return connection to pool."""
        if self._pool:
            await self._pool.putconn(conn)

    async def shutdown(self) -> None:
        """Close connection pool (application shutdown)."""
        if self._pool:
            await self._pool.close()
            self._pool = None

    async def commit(self, conn: Any) -> None:
        await conn.commit()

    async def rollback(self, conn: Any) -> None:
        await conn.rollback()

    async def execute(self, conn: Any, query: str, args: Sequence[Any] = ()) -> ExecResult:
        """Execute statement, return affected row count (no last insert id)."""
        query, params = self._convert_placeholders(query, args)
        async with conn.cursor() as cur:
            await cur.execute(query, params)
            return ExecResult(cur.rowcount, None)

    async def fetch_all(
        self, conn: Any, query: str, args: Sequence[Any] = ()
    ) -> list[dict[str, Any]]:
        """Execute query, return all rows as list of dicts."""
        from psycopg.rows import dict_row

        query, params = self._convert_placeholders(query, args)
        async with conn.cursor(row_factory=dict_row) as cur:
            await cur.execute(query, params)
            return await cur.fetchall()

    async def execute_script(self, conn: Any, script: str) -> None:
        """Execute multiple statements (for schema creation)."""
        async with conn.cursor() as cur:
            await cur.execute(script)
