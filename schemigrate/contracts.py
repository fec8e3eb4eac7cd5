"""Core abstractions shared by the migration runner and database backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class Migration(ABC):
    """A reversible schema change."""

    @abstractmethod
    def up(self) -> None:
        """Apply the change."""

    @abstractmethod
    def down(self) -> None:
        """Revert the change."""

    def name(self) -> str:
        """Identifier stored in the migrations table for this migration."""
        return type(self).__qualname__


@dataclass(frozen=True)
class MigrationRecord:
    """A row of the migrations bookkeeping table."""

    id: int
    migration: str
    batch: int


class Migrator(ABC):
    """Keeps track of which migrations have been applied."""

    @abstractmethod
    def check_table(self) -> bool:
        """Return whether the bookkeeping table exists."""

    @abstractmethod
    def create_table(self) -> None:
        """Create the bookkeeping table."""

    @abstractmethod
    def drop_table_if_exists(self) -> None:
        """Drop the bookkeeping table if it is present."""

    @abstractmethod
    def drop_all_tables(self) -> None:
        """Drop every table in the database."""

    @abstractmethod
    def get_migrations(self) -> list[MigrationRecord]:
        """Return every recorded migration."""

    @abstractmethod
    def write_record(self, migration: str, batch: int) -> None:
        """Record that a migration was applied in the given batch."""

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Remove the record with the given id."""