"""Schema operations for MySQL and seeding of freshly created tables."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from schemigrate import config
from schemigrate.mysql.blueprint import Blueprint, Operation
from schemigrate.mysql.driver import Driver, MockDriver, connect

_SqlDriver = Union[Driver, MockDriver]
DriverFactory = Callable[[], _SqlDriver]


def _default_driver() -> _SqlDriver:
    return connect(config.settings.database)


def run_seed(driver: _SqlDriver, table: str, rows: Iterable[Mapping[str, Any]]) -> None:
    """Insert each row into ``table``, with columns in sorted order."""
    for row in rows:
        keys = sorted(row)
        columns = ", ".join(f"`{key}`" for key in keys)
        values = ", ".join(f"'{row[key]}'" for key in keys)
        driver.execute(f"INSERT INTO `{table}` ({columns}) VALUES ({values});")


@dataclass
class Seeder:
    """Inserts rows into a table created by :meth:`Schema.create`."""

    table: str
    driver_factory: DriverFactory = _default_driver

    def seed(self, *rows: Mapping[str, Any]) -> None:
        """Insert the given rows."""
        with self.driver_factory() as driver:
            run_seed(driver, self.table, rows)


class Schema:
    """Creates, alters and drops tables."""

    def __init__(self, driver_factory: DriverFactory | None = None) -> None:
        self._driver_factory = driver_factory or _default_driver

    def _apply(self, table: str, schema_func: Callable[[Blueprint], Any],
               operation: Operation) -> None:
        with self._driver_factory() as driver:
            blueprint = Blueprint()
            schema_func(blueprint)
            for sql in blueprint.get_sqls(table, operation):
                driver.execute(sql)

    def create(self, table: str, schema_func: Callable[[Blueprint], Any]) -> Seeder:
        """Create ``table`` as described by ``schema_func``; return a seeder for it."""
        self._apply(table, schema_func, Operation.CREATE)
        return Seeder(table, self._driver_factory)

    def table(self, table: str, schema_func: Callable[[Blueprint], Any]) -> None:
        """Alter ``table`` as described by ``schema_func``."""
        self._apply(table, schema_func, Operation.ALTER)

    def drop_if_exists(self, table: str) -> None:
        """Drop ``table`` if it exists."""
        with self._driver_factory() as driver:
            driver.execute(f"DROP TABLE IF EXISTS {table};")


schema = Schema()