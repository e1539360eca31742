"""Prepared statement base: parameter binding plus the four result shapes.

Backends subclass ``PreparedStatement`` and supply the placeholder
translation and one execution primitive. ``first``/``run``/``all``/``execute``
are written once here on top of that primitive and never raise for
execution errors; they log and turn failures into data instead.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from media_store.db.errors import ConfigurationError
from media_store.db.results import ExecutionResult, RawResult

logger = logging.getLogger(__name__)


class PreparedStatement(ABC):
    """Immutable SQL text bound to a replaceable parameter tuple."""

    backend_name = "database"

    def __init__(self, sql: str) -> None:
        """Initialize with the statement text. Parameters start empty."""
        self._sql = sql
        self._params: tuple[Any, ...] = ()

    @property
    def sql(self) -> str:
        """The statement text as written by the caller."""
        return self._sql

    @property
    def params(self) -> tuple[Any, ...]:
        """The currently bound parameters."""
        return self._params

    def bind(self, *values: Any) -> PreparedStatement:
        """Replace the bound parameters. Previous bindings are discarded."""
        self._params = tuple(values)
        return self

    @property
    def native_sql(self) -> str:
        """The statement text in the backend's placeholder syntax."""
        return self.translate(self._sql)

    @staticmethod
    @abstractmethod
    def translate(sql: str) -> str:
        """Rewrite placeholders into the backend's native syntax."""

    @abstractmethod
    async def _run_once(self) -> RawResult:
        """Execute once on a borrowed connection. May raise."""

    @abstractmethod
    async def _run_on(self, conn: Any) -> RawResult:
        """Execute once on a connection the caller already holds. May raise."""

    # -- Result shapes --

    async def first(self, column: str | None = None) -> Any | None:
        """Return the first row, one column of it, or None.

        None covers zero rows, a missing column and execution errors alike.
        A missing connection configuration still raises.
        """
        try:
            raw = await self._run_once()
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.error("%s first() error: %s", self.backend_name, exc)
            return None

        if not raw.rows:
            return None
        row = raw.rows[0]
        if column is not None:
            return row.get(column)
        return row

    async def run(self) -> ExecutionResult:
        """Execute a write and report affected rows and insert id."""
        try:
            raw = await self._run_once()
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.error("%s run() error: %s", self.backend_name, exc)
            return ExecutionResult.failure(exc)
        return _write_result(raw)

    async def all(self) -> ExecutionResult:
        """Execute a query and return every row (empty list on error)."""
        try:
            raw = await self._run_once()
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.error("%s all() error: %s", self.backend_name, exc)
            return ExecutionResult.failure(exc)
        return ExecutionResult(success=True, rows=raw.rows)

    async def execute(self) -> ExecutionResult:
        """Alias of ``run()``."""
        return await self.run()

    async def run_in_transaction(self, conn: Any) -> ExecutionResult:
        """Execute on a connection held by a batch. Errors propagate."""
        return _write_result(await self._run_on(conn))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._sql!r}, params={self._params!r})"


def _write_result(raw: RawResult) -> ExecutionResult:
    return ExecutionResult(
        success=True,
        rows=raw.rows,
        changes=raw.changes,
        last_row_id=raw.last_row_id,
    )
