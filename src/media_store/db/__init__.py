"""Provider-agnostic database adapters."""

from media_store.db.adapter import DatabaseAdapter
from media_store.db.errors import ConfigurationError, UnsupportedOperationError
from media_store.db.postgres_adapter import PostgresAdapter
from media_store.db.results import ExecutionResult
from media_store.db.sqlite_adapter import SQLiteAdapter
from media_store.db.statement import PreparedStatement

__all__ = [
    "ConfigurationError",
    "DatabaseAdapter",
    "ExecutionResult",
    "PostgresAdapter",
    "PreparedStatement",
    "SQLiteAdapter",
    "UnsupportedOperationError",
]
