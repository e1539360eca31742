"""PostgreSQL implementation of the DatabaseAdapter protocol.

Uses asyncpg through the process-wide pool in ``media_store.db.pool``.
Application SQL uses ``?`` placeholders; this adapter translates them to
``$N`` at execute time. Text already written with ``$N`` passes through.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

from media_store.db.errors import UnsupportedOperationError
from media_store.db.placeholders import qmark_to_dollar
from media_store.db.pool import close_pool, get_pool
from media_store.db.results import ExecutionResult, RawResult
from media_store.db.statement import PreparedStatement

if TYPE_CHECKING:
    import asyncpg

logger = logging.getLogger(__name__)

PoolGetter = Callable[[], Awaitable["asyncpg.Pool"]]


def parse_rowcount(status: str | None) -> int:
    """Parse affected row count from an asyncpg status string.

    Examples: "INSERT 0 1" → 1, "UPDATE 3" → 3, "DELETE 0" → 0.
    """
    if not status:
        return -1
    parts = status.split()
    if len(parts) >= 2:
        try:
            return int(parts[-1])
        except ValueError:
            pass
    return -1


class PostgresPreparedStatement(PreparedStatement):
    """Statement executed through asyncpg.

    Standalone calls borrow a pool connection per call. ``last_row_id`` is
    always None: Postgres has no per-connection last insert id, use
    ``RETURNING`` and read ``rows`` instead.
    """

    backend_name = "postgres"

    def __init__(self, sql: str, pool_getter: PoolGetter) -> None:
        """Initialize with statement text and the pool accessor."""
        super().__init__(sql)
        self._pool_getter = pool_getter

    @staticmethod
    def translate(sql: str) -> str:
        """Convert ``?`` placeholders to ``$1, $2, ...``."""
        return qmark_to_dollar(sql)

    async def _run_once(self) -> RawResult:
        pool = await self._pool_getter()
        async with pool.acquire() as conn:
            return await self._run_on(conn)

    async def _run_on(self, conn: asyncpg.Connection) -> RawResult:
        # fetch() works for every statement kind; DML without RETURNING
        # yields no rows, and the status message carries the row count
        stmt = await conn.prepare(self.native_sql)
        records = await stmt.fetch(*self._params)
        return RawResult(
            rows=[dict(r) for r in records],
            rowcount=parse_rowcount(stmt.get_statusmsg()),
            last_row_id=None,
        )


class PostgresAdapter:
    """PostgreSQL implementation of the DatabaseAdapter protocol.

    The pool is not touched until the first statement runs, so a missing
    connection URL surfaces at first use rather than at construction.
    """

    def __init__(self, pool_getter: PoolGetter = get_pool) -> None:
        """Initialize with a pool accessor (defaults to the process-wide pool)."""
        self._pool_getter = pool_getter

    def prepare(self, sql: str) -> PostgresPreparedStatement:
        """Return a statement bound to this adapter's pool."""
        return PostgresPreparedStatement(sql, self._pool_getter)

    async def batch(
        self, statements: Sequence[PreparedStatement]
    ) -> list[ExecutionResult]:
        """Run statements in one transaction on a single checked-out connection."""
        stmts = _own_statements(statements)
        if not stmts:
            return []

        pool = await self._pool_getter()
        async with pool.acquire() as conn:
            await conn.execute("BEGIN")
            try:
                results = [await stmt.run_in_transaction(conn) for stmt in stmts]
                await conn.execute("COMMIT")
            except BaseException:
                try:
                    await conn.execute("ROLLBACK")
                except Exception:
                    logger.warning("Postgres rollback failed", exc_info=True)
                raise
        logger.debug("Postgres batch committed %d statement(s)", len(results))
        return results

    def exec(self, sql: str) -> Awaitable[ExecutionResult]:
        """Not supported, raises immediately. Use ``prepare()`` instead."""
        raise UnsupportedOperationError(
            "exec() is not supported for Postgres adapter. Use prepare() instead."
        )

    async def close(self) -> None:
        """Close the process-wide pool."""
        await close_pool()


def _own_statements(statements: Sequence[Any]) -> list[PostgresPreparedStatement]:
    stmts = list(statements)
    for stmt in stmts:
        if not isinstance(stmt, PostgresPreparedStatement):
            raise TypeError(
                f"Postgres batch() requires statements from PostgresAdapter.prepare(), "
                f"got {type(stmt).__name__}"
            )
    return stmts
