"""Runtime settings: database connection, registered migrations and backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar, Union

from schemigrate.contracts import Migration, Migrator

_M = TypeVar("_M", bound=Union[Migration, type])


@dataclass
class DatabaseConfig:
    """Connection parameters for the target database."""

    host: str = "localhost"
    port: int = 3306
    username: str = "root"
    password: str = ""
    dbname: str = ""


@dataclass
class Settings:
    """Everything the migration commands need to run."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    migrations: list[Migration] = field(default_factory=list)
    migrator: Migrator | None = None
    driver: str = ""

    def register(self, migration: _M) -> _M:
        """Add a migration; a Migration subclass is instantiated first.

        Returns its argument, so it can decorate a migration class.
        """
        if isinstance(migration, type) and issubclass(migration, Migration):
            self.migrations.append(migration())
        elif isinstance(migration, Migration):
            self.migrations.append(migration)
        else:
            raise TypeError(f"not a migration: {migration!r}")
        return migration

    def configure(self, database: DatabaseConfig, migrator: Migrator, driver: str) -> None:
        """Set the connection, bookkeeping backend and driver name."""
        self.database = database
        self.migrator = migrator
        self.driver = driver


settings = Settings()


def register(migration: _M) -> _M:
    """Register a migration with the global settings."""
    return settings.register(migration)


def configure(database: DatabaseConfig, migrator: Migrator, driver: str) -> None:
    """Configure the global settings."""
    settings.configure(database, migrator, driver)