"""Database drivers: a MySQL connection wrapper and a recording stand-in."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pymysql
from pymysql.cursors import DictCursor

from schemigrate.config import DatabaseConfig


class _ClosingDriver:
    """Closes the driver when used as a context manager."""

    def close(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Driver(_ClosingDriver):
    """Runs SQL statements over an open MySQL connection."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def execute(self, sql: str) -> int:
        """Run a statement and return the number of affected rows."""
        with self._connection.cursor() as cursor:
            return cursor.execute(sql)

    def query(self, sql: str) -> list[tuple]:
        """Run a query and return its rows as tuples."""
        with self._connection.cursor() as cursor:
            cursor.execute(sql)
            return list(cursor.fetchall())

    def select(self, sql: str) -> list[dict[str, Any]]:
        """Run a query and return its rows as column-keyed dicts."""
        with self._connection.cursor(DictCursor) as cursor:
            cursor.execute(sql)
            return list(cursor.fetchall())

    def close(self) -> None:
        self._connection.close()


class MockDriver(_ClosingDriver):
    """Records every statement instead of running it.

    ``responses`` maps a statement to the rows that ``query`` and
    ``select`` return for it; any other statement yields no rows.
    """

    def __init__(self, responses: Mapping[str, Sequence[Any]] | None = None) -> None:
        self.sqls: list[str] = []
        self.closed = False
        self._responses = dict(responses or {})

    def execute(self, sql: str) -> int:
        self.sqls.append(sql)
        return 0

    def query(self, sql: str) -> list[Any]:
        self.sqls.append(sql)
        return list(self._responses.get(sql, ()))

    def select(self, sql: str) -> list[Any]:
        self.sqls.append(sql)
        return list(self._responses.get(sql, ()))

    def close(self) -> None:
        self.closed = True


def connect(config: DatabaseConfig) -> Driver:
    """Open a connection to the database described by ``config``."""
    password = config.password
    try:
        connection = pymysql.connect(
            host=config.host,
            port=config.port,
            user=config.username,
            password=password,
            database=config.dbname,
            autocommit=True,
        )
    except pymysql.MySQLError as exc:
        raise ConnectionError(f"connect mysql server failed, err:{exc}") from exc
    return Driver(connection)