"""MySQL bookkeeping of applied migrations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Union

from schemigrate import config
from schemigrate.contracts import MigrationRecord, Migrator
from schemigrate.mysql.driver import Driver, MockDriver, connect

_SqlDriver = Union[Driver, MockDriver]

_CREATE_TABLE_SQLS = (
    "CREATE TABLE `migrations` (`id` int(10) UNSIGNED NOT NULL, `migration` varchar(255) NOT NULL, `batch` int(11) NOT NULL);",
    "ALTER TABLE `migrations` ADD PRIMARY KEY (`id`);",
    "ALTER TABLE `migrations` MODIFY `id` int(10) UNSIGNED NOT NULL AUTO_INCREMENT;",
)


def _default_driver() -> _SqlDriver:
    return connect(config.settings.database)


def _first_value(row: Any) -> Any:
    if isinstance(row, dict):
        return next(iter(row.values()))
    return row[0]


class MySQLMigrator(Migrator):
    """Stores migration records in a ``migrations`` table."""

    def __init__(self, driver_factory: Callable[[], _SqlDriver] | None = None) -> None:
        self._driver_factory = driver_factory or _default_driver

    def check_table(self) -> bool:
        with self._driver_factory() as driver:
            return bool(driver.query("SHOW TABLES LIKE 'migrations'"))

    def create_table(self) -> None:
        with self._driver_factory() as driver:
            for sql in _CREATE_TABLE_SQLS:
                driver.execute(sql)

    def drop_table_if_exists(self) -> None:
        with self._driver_factory() as driver:
            driver.execute("DROP TABLE IF EXISTS migrations;")

    def drop_all_tables(self) -> None:
        with self._driver_factory() as driver:
            tables = [str(_first_value(row)) for row in driver.select("SHOW TABLES")]
            driver.execute(f"DROP TABLE IF EXISTS {','.join(tables)};")

    def get_migrations(self) -> list[MigrationRecord]:
        with self._driver_factory() as driver:
            rows = driver.select("SELECT id, migration, batch FROM `migrations`")
        return [
            MigrationRecord(id=int(row["id"]), migration=str(row["migration"]),
                            batch=int(row["batch"]))
            for row in rows
        ]

    def write_record(self, migration: str, batch: int) -> None:
        with self._driver_factory() as driver:
            driver.execute(
                f"INSERT INTO `migrations`(`migration`, `batch`) "
                f"VALUES ('{migration}','{int(batch)}')"
            )

    def delete_record(self, record_id: int) -> None:
        with self._driver_factory() as driver:
            driver.execute(f"DELETE FROM `migrations` WHERE id = {int(record_id)}")


def init_migrator() -> MySQLMigrator:
    """Return a migrator connecting with the global database settings."""
    return MySQLMigrator()