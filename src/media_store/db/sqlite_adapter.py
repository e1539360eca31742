"""SQLite implementation of the DatabaseAdapter protocol.

Thin wrapper around a single aiosqlite.Connection opened in autocommit mode
(``isolation_level=None``): standalone statements commit on their own and
``batch()`` issues BEGIN/COMMIT/ROLLBACK explicitly. An asyncio.Lock stands
in for a pool checkout so a batch never interleaves with other statements
on the shared connection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import TYPE_CHECKING, Any

from media_store.db.placeholders import dollar_to_qmark
from media_store.db.results import ExecutionResult, RawResult
from media_store.db.statement import PreparedStatement

if TYPE_CHECKING:
    import aiosqlite

logger = logging.getLogger(__name__)


class SQLitePreparedStatement(PreparedStatement):
    """Statement executed on the adapter's shared aiosqlite connection."""

    backend_name = "sqlite"

    def __init__(self, sql: str, adapter: SQLiteAdapter) -> None:
        """Initialize with statement text and the owning adapter."""
        super().__init__(sql)
        self._adapter = adapter

    @staticmethod
    def translate(sql: str) -> str:
        """Convert Postgres-style ``$N`` to SQLite ``?N``; ``?`` passes through."""
        return dollar_to_qmark(sql)

    async def _run_once(self) -> RawResult:
        async with self._adapter.lock:
            return await self._run_on(self._adapter.conn)

    async def _run_on(self, conn: aiosqlite.Connection) -> RawResult:
        async with conn.execute(self.native_sql, self._params) as cursor:
            rows = await cursor.fetchall()
            # rowcount is only final once RETURNING rows have been consumed
            rowcount = cursor.rowcount if cursor.rowcount is not None else -1
            return RawResult(
                rows=[dict(row) for row in rows],
                rowcount=rowcount,
                last_row_id=cursor.lastrowid if rowcount > 0 else None,
            )


class SQLiteAdapter:
    """SQLite implementation of the DatabaseAdapter protocol.

    The raw connection is exposed as ``conn`` for SQLite-specific setup
    (PRAGMA, etc.) that only runs while the connection is being opened.
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        """Initialize with an aiosqlite connection in autocommit mode."""
        self.conn = conn
        self.lock = asyncio.Lock()

    def prepare(self, sql: str) -> SQLitePreparedStatement:
        """Return a statement bound to this adapter's connection."""
        return SQLitePreparedStatement(sql, self)

    async def batch(
        self, statements: Sequence[PreparedStatement]
    ) -> list[ExecutionResult]:
        """Run statements in one transaction while holding the connection lock."""
        stmts = _own_statements(statements)
        if not stmts:
            return []

        async with self.lock:
            await self.conn.execute("BEGIN")
            try:
                results = [await stmt.run_in_transaction(self.conn) for stmt in stmts]
                await self.conn.execute("COMMIT")
            except BaseException:
                try:
                    await self.conn.execute("ROLLBACK")
                except Exception:
                    logger.warning("SQLite rollback failed", exc_info=True)
                raise
        logger.debug("SQLite batch committed %d statement(s)", len(results))
        return results

    def exec(self, sql: str) -> Awaitable[ExecutionResult]:
        """Run a multi-statement script (DDL, migrations, VACUUM).

        Unlike prepared statements, a failing script raises the driver's
        ``sqlite3.Error`` instead of returning a failed result. The script is
        not wrapped in a transaction, so statements before the failing one
        stay applied.
        """
        return self._exec(sql)

    async def _exec(self, sql: str) -> ExecutionResult:
        async with self.lock:
            before = self.conn.total_changes
            await self.conn.executescript(sql)
            return ExecutionResult(success=True, changes=self.conn.total_changes - before)

    async def close(self) -> None:
        """Close the database connection."""
        await self.conn.close()


def _own_statements(statements: Sequence[Any]) -> list[SQLitePreparedStatement]:
    stmts = list(statements)
    for stmt in stmts:
        if not isinstance(stmt, SQLitePreparedStatement):
            raise TypeError(
                f"SQLite batch() requires statements from SQLiteAdapter.prepare(), "
                f"got {type(stmt).__name__}"
            )
    return stmts
