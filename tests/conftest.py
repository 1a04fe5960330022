"""
Shared fixtures: a scripted stand-in for psycopg2 connections.

Each `execute` consumes the next scripted result (rows, rowcount or an
exception to raise); unscripted statements return no rows. Every statement
is recorded with whitespace-normalized SQL so tests can assert on it.
"""

import os
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
from testcontainers.postgres import PostgresContainer

import repositories.car_repo
import repositories.driver_repo
import repositories.manufacturer_repo


@dataclass
class Result:
    rows: list = field(default_factory=list)
    rowcount: Optional[int] = None
    error: Optional[Exception] = None


class FakeCursor:
    def __init__(self, conn: "FakeConnection", cursor_factory=None):
        self.conn = conn
        self.cursor_factory = cursor_factory
        self.rowcount = -1
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, sql: str, params: Any = None) -> None:
        self.conn.db.executed.append((" ".join(sql.split()), params))
        result = self.conn.db.next_result()
        if result.error is not None:
            raise result.error
        self._rows = list(result.rows)
        self.rowcount = len(result.rows) if result.rowcount is None else result.rowcount

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows


class FakeConnection:
    def __init__(self, db: "FakeDatabase"):
        self.db = db
        self.closed = 0
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, cursor_factory=None) -> FakeCursor:
        return FakeCursor(self, cursor_factory)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1
        if self.db.rollback_error is not None:
            raise self.db.rollback_error


class FakeDatabase:
    def __init__(self):
        self.results: deque[Result] = deque()
        self.executed: list[tuple[str, Any]] = []
        self.connections: list[FakeConnection] = []
        self.released: list[FakeConnection] = []
        self.rollback_error: Optional[Exception] = None

    def script(self, rows=None, rowcount=None, error=None) -> "FakeDatabase":
        self.results.append(Result(rows=rows or [], rowcount=rowcount, error=error))
        return self

    def next_result(self) -> Result:
        return self.results.popleft() if self.results else Result()

    def get_connection(self) -> FakeConnection:
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn

    def release_connection(self, conn: FakeConnection) -> None:
        self.released.append(conn)

    @property
    def statements(self) -> list[str]:
        return [sql for sql, _ in self.executed]

    @property
    def params(self) -> list[Any]:
        return [p for _, p in self.executed]


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    """Route every repository's connection provider to a FakeDatabase."""
    db = FakeDatabase()
    for module in (
        repositories.car_repo,
        repositories.driver_repo,
        repositories.manufacturer_repo,
    ):
        monkeypatch.setattr(module, "get_connection", db.get_connection)
        monkeypatch.setattr(module, "release_connection", db.release_connection)
    return db


@pytest.fixture(scope="session")
def postgres_url():
    """
    URL of a PostgreSQL database for integration tests.

    TEST_DATABASE_URL points at an existing server; otherwise a throwaway
    container is started for the session.
    """
    override = os.getenv("TEST_DATABASE_URL")
    if override:
        yield override
        return
    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    with PostgresContainer(image) as pg:
        url = pg.get_connection_url()
        # psycopg2 takes plain postgresql://, not postgresql+psycopg2://
        if "+" in url.split("://", 1)[0]:
            url = "postgresql://" + url.split("://", 1)[1]
        yield url
