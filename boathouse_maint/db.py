from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Callable, Iterator

import psycopg

from .errors import InvalidSettingError
from .settings import Settings

log = logging.getLogger(__name__)

ConnectFn = Callable[..., Any]


def safe_ident(name: str) -> str:
    s = str(name or "").strip()
    if not re.match(r"^[A-Za-z_][A-Za-z0-9_]*$", s):
        raise ValueError(f"Unsafe SQL identifier: {name!r}")
    return s


def connect_kwargs(settings: Settings) -> dict[str, Any]:
    """Build libpq keyword arguments for `psycopg.connect` from settings."""

    kwargs: dict[str, Any] = {
        "host": settings.DB_HOST,
        "port": int(settings.DB_PORT),
        "dbname": settings.DB_NAME,
        "user": settings.DB_USER,
        "password": settings.DB_PASSWORD,
        "sslmode": "require" if settings.DB_SSL else "prefer",
        "connect_timeout": max(0, int(settings.DB_CONNECT_TIMEOUT)),
    }

    options: list[str] = []
    if settings.DB_SCHEMA:
        try:
            schema = safe_ident(settings.DB_SCHEMA)
        except ValueError as e:
            raise InvalidSettingError("DB_SCHEMA", settings.DB_SCHEMA, str(e)) from e
        options.append(f"-c search_path={schema},public")
    if int(settings.DB_STATEMENT_TIMEOUT_MS) > 0:
        options.append(f"-c statement_timeout={int(settings.DB_STATEMENT_TIMEOUT_MS)}")
    if options:
        kwargs["options"] = " ".join(options)
    return kwargs


@contextmanager
def open_connection(settings: Settings, *, connect: ConnectFn | None = None) -> Iterator[Any]:
    """Open a scoped database connection.

    The connection commits when the block exits normally, rolls back when it
    raises, and is closed on every path. Connection errors propagate to the
    caller before anything is yielded.
    """

    connect_fn = connect or psycopg.connect
    conn = connect_fn(**connect_kwargs(settings))
    try:
        with conn:
            log.info("Database connection established (%s)", settings.describe_target())
            yield conn
    finally:
        log.info("Database connection closed")


def execute(cur: Any, sql: str, params: Any, *, log_sql: bool = False) -> None:
    if log_sql:
        log.debug("SQL: %s | params=%r", " ".join(sql.split()), params)
    cur.execute(sql, params)
