"""Shared test fixtures."""

import pytest
import pytest_asyncio

from media_store.db import pool as pool_module
from media_store.db.connection import create_adapter
from media_store.db.postgres_adapter import PostgresAdapter
from media_store.db.schema import apply_schema
from media_store.store.library_store import LibraryStore
from media_store.store.user_store import UserStore


@pytest_asyncio.fixture
async def db():
    """In-memory SQLite adapter with the full schema."""
    adapter = await create_adapter(":memory:")
    await apply_schema(adapter)
    yield adapter
    await adapter.close()


@pytest_asyncio.fixture
async def users(db):
    """User store backed by the in-memory DB."""
    return UserStore(db)


@pytest_asyncio.fixture
async def library(db, users):
    """Library store with an existing user 'alice'."""
    await users.create_user("alice", "secret", created_at=1_700_000_000_000)
    return LibraryStore(db)


class FakePostgresError(Exception):
    """Stands in for asyncpg.PostgresError."""


class FakePreparedStatement:
    """Minimal asyncpg.PreparedStatement: fetch() + get_statusmsg()."""

    def __init__(self, conn: "FakeConnection", sql: str):
        self._conn = conn
        self._sql = sql
        self._status: str | None = None

    async def fetch(self, *args):
        self._conn.log.append((self._sql, args))
        rows, status = self._conn.respond(self._sql)
        self._status = status
        return rows

    def get_statusmsg(self):
        return self._status


class FakeConnection:
    """Minimal asyncpg.Connection that records every statement it sees.

    ``script(fragment, rows=..., status=...)`` sets the response for any SQL
    containing ``fragment``; ``fail_on(fragment)`` makes such SQL raise.
    """

    def __init__(self):
        self.log: list[tuple[str, tuple]] = []
        self._responses: list[tuple[str, list[dict], str]] = []
        self._failures: dict[str, Exception] = {}

    def script(self, fragment: str, rows: list[dict] | None = None, status: str = "SELECT 0"):
        self._responses.append((fragment, rows or [], status))

    def fail_on(self, fragment: str, exc: Exception | None = None):
        self._failures[fragment] = exc or FakePostgresError(f"failed: {fragment}")

    def respond(self, sql: str) -> tuple[list[dict], str]:
        for fragment, exc in self._failures.items():
            if fragment in sql:
                raise exc
        for fragment, rows, status in self._responses:
            if fragment in sql:
                return rows, status
        verb = sql.split()[0].upper() if sql.strip() else ""
        return [], "INSERT 0 1" if verb == "INSERT" else f"{verb} 0"

    async def prepare(self, sql: str) -> FakePreparedStatement:
        return FakePreparedStatement(self, sql)

    async def execute(self, sql: str, *args) -> str:
        self.log.append((sql, args))
        self.respond(sql)
        return sql

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.log]


class _Acquire:
    def __init__(self, pool: "FakePool"):
        self._pool = pool

    async def __aenter__(self) -> FakeConnection:
        self._pool.acquired += 1
        return self._pool.conn

    async def __aexit__(self, *exc_info) -> None:
        self._pool.released += 1


class FakePool:
    """Minimal asyncpg.Pool handing out a single FakeConnection."""

    def __init__(self):
        self.conn = FakeConnection()
        self.acquired = 0
        self.released = 0
        self.closed = False
        self.create_kwargs: dict = {}

    def acquire(self) -> _Acquire:
        return _Acquire(self)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_pool(monkeypatch):
    """Route the process-wide pool to a FakePool for the duration of a test."""
    pool = FakePool()
    calls: list[str] = []

    async def _fake_create_pool(url, **kwargs):
        calls.append(url)
        pool.create_kwargs = kwargs
        return pool

    pool.create_calls = calls
    monkeypatch.setenv("POSTGRES_URL", "postgresql://media@localhost/media")
    monkeypatch.setattr(pool_module, "_create_pool", _fake_create_pool)
    pool_module.reset_pool()
    yield pool
    pool_module.reset_pool()


@pytest.fixture
def pg(fake_pool):
    """Postgres adapter on the fake pool."""
    return PostgresAdapter()
