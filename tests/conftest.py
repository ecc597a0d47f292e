from __future__ import annotations

import os
import sqlite3
import sys
from contextlib import closing

import psycopg
import pytest


def _ensure_project_root_on_path() -> None:
    # When running via the venv's pytest entrypoint, the CWD is not guaranteed to
    # be on sys.path. Ensure the repository root (containing `boathouse_maint/`) is importable.
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


_ensure_project_root_on_path()


class SqliteCursor:
    """psycopg-style cursor over sqlite3 (`%s` placeholders become `?`)."""

    def __init__(self, conn: sqlite3.Connection):
        self._cur = conn.cursor()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self._cur.close()
        return False

    @property
    def rowcount(self) -> int:
        return self._cur.rowcount

    def execute(self, sql: str, params=()):
        try:
            self._cur.execute(sql.replace("%s", "?"), params)
        except sqlite3.OperationalError as e:
            raise psycopg.ProgrammingError(str(e)) from e
        return self

    def fetchone(self):
        return self._cur.fetchone()


class SqliteConnection:
    """Mimics psycopg's connection context: commit/rollback on exit, then close."""

    def __init__(self, path: str):
        self._conn = sqlite3.connect(path)
        self.closed = False
        self.committed = False
        self.rolled_back = False

    def cursor(self) -> SqliteCursor:
        return SqliteCursor(self._conn)

    def commit(self) -> None:
        self._conn.commit()
        self.committed = True

    def rollback(self) -> None:
        self._conn.rollback()
        self.rolled_back = True

    def close(self) -> None:
        self._conn.close()
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type is None:
                self.commit()
            else:
                self.rollback()
        finally:
            self.close()
        return False


class AthleteStore:
    """A sqlite file seeded with an `athletes` table, handing out fake psycopg connections."""

    def __init__(self, path: str, *, columns: str = "name TEXT NOT NULL, pin_reset_required BOOLEAN"):
        self.path = path
        self.connections: list[SqliteConnection] = []
        self.connect_kwargs: list[dict] = []
        with closing(sqlite3.connect(path)) as conn, conn:
            conn.execute(f"CREATE TABLE athletes ({columns})")

    def seed(self, *rows: tuple[str, bool]) -> None:
        with closing(sqlite3.connect(self.path)) as conn, conn:
            conn.executemany("INSERT INTO athletes(name, pin_reset_required) VALUES (?, ?)", rows)

    def rows(self) -> list[tuple[str, bool]]:
        conn = sqlite3.connect(self.path)
        try:
            out = conn.execute("SELECT name, pin_reset_required FROM athletes ORDER BY rowid").fetchall()
        finally:
            conn.close()
        return [(name, bool(flag)) for name, flag in out]

    def connect(self, **kwargs) -> SqliteConnection:
        self.connect_kwargs.append(kwargs)
        conn = SqliteConnection(self.path)
        self.connections.append(conn)
        return conn


@pytest.fixture()
def store(tmp_path) -> AthleteStore:
    return AthleteStore(str(tmp_path / "boathouse.db"))


@pytest.fixture()
def legacy_store(tmp_path) -> AthleteStore:
    # Schema from before the PIN reset column was added.
    return AthleteStore(str(tmp_path / "legacy.db"), columns="name TEXT NOT NULL")


@pytest.fixture()
def settings():
    from boathouse_maint.settings import Settings

    return Settings(
        _env_file=None,
        DB_HOST="db.test",
        DB_PORT=5433,
        DB_NAME="boathouse_test",
        DB_USER="maint",
        DB_PASSWORD="secret",
        DB_SSL=False,
        DB_SCHEMA=None,
        DB_CONNECT_TIMEOUT=10,
        DB_STATEMENT_TIMEOUT_MS=30000,
        DB_LOG_SQL=False,
    )
