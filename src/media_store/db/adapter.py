"""Database adapter protocol — the contract data-access code programs against.

Each backend (SQLite, Postgres) provides a concrete implementation. All
application SQL uses ``?`` placeholders; backends translate at execute time.
Data-access code never checks which backend it is talking to.
"""

from __future__ import annotations

from collections.abc import Awaitable, Sequence
from typing import Protocol, runtime_checkable

from media_store.db.results import ExecutionResult
from media_store.db.statement import PreparedStatement


@runtime_checkable
class DatabaseAdapter(Protocol):
    """Uniform prepared-statement interface over a database backend."""

    def prepare(self, sql: str) -> PreparedStatement:
        """Return a statement for ``sql``; bind parameters before running it."""
        ...

    async def batch(self, statements: Sequence[PreparedStatement]) -> list[ExecutionResult]:
        """Run statements in order inside one transaction.

        Returns one result per statement on commit. If any statement fails,
        the transaction is rolled back and the original error is raised.
        """
        ...

    def exec(self, sql: str) -> Awaitable[ExecutionResult]:
        """Run a raw multi-statement script, where the backend supports it."""
        ...

    async def close(self) -> None:
        """Release the backend's connections."""
        ...
