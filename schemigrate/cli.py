"""Command-line interface: apply, roll back and scaffold migrations."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

from schemigrate import config
from schemigrate.config import Settings
from schemigrate.contracts import MigrationRecord, Migrator
from schemigrate.templates import (
    default_migrations,
    render_alter_migration,
    render_blank_migration,
    render_create_migration,
    render_migrate_script,
)

MIGRATE_SCRIPT = Path("cmd") / "migrate" / "migrate.py"
MIGRATIONS_DIR = Path("migrations")
PYPROJECT = "pyproject.toml"

_DESCRIPTION = "The command makes your database migrations as easy as Laravel."


class CommandError(Exception):
    """A command could not be completed."""


def to_camel_case(text: str) -> str:
    """Join underscore-separated words, upper-casing the first letter of each."""
    return "".join(word[:1].upper() + word[1:] for word in text.split("_"))


def _render_migration(filename: str, driver: str) -> str:
    if filename.endswith("_table"):
        end = len(filename) - len("_table")
        if filename.startswith("create_"):
            start = len("create_")
            if start > end:
                raise ValueError(f"no table name in {filename!r}")
            table = filename[start:end]
            return render_create_migration(driver, to_camel_case(table), table)
        index = filename.find("to_")
        if index != -1:
            start = index + len("to_")
            if start > end:
                raise ValueError(f"no table name in {filename!r}")
            table = filename[start:end]
            return render_alter_migration(driver, to_camel_case(filename), table)
    return render_blank_migration(driver, to_camel_case(filename))


def new_migration(
    filename: str,
    driver: str | None = None,
    directory: str | Path = MIGRATIONS_DIR,
    now: datetime | None = None,
) -> Path:
    """Write a new, timestamped migration file and return its path.

    A name ``create_<table>_table`` yields a create-table migration, a name
    containing ``to_<table>_table`` an alter-table one, anything else a blank one.
    """
    driver = config.settings.driver if driver is None else driver
    content = _render_migration(filename, driver)
    now = now or datetime.now()
    path = Path(directory) / f"{now:%Y_%m_%d_%H%M%S}_{filename}.py"
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CommandError(f"can't create migration file. \n{exc}") from exc
    return path


def _migrator(settings: Settings) -> Migrator:
    if settings.migrator is None:
        raise CommandError("no migrator configured")
    return settings.migrator


def _newest_first(records: list[MigrationRecord]) -> list[MigrationRecord]:
    return sorted(records, key=lambda record: record.id, reverse=True)


def run_migrate(settings: Settings) -> None:
    """Apply every registered migration that has no record yet."""
    print("migrate called")
    migrator = _migrator(settings)
    if not migrator.check_table():
        migrator.create_table()

    records = migrator.get_migrations()
    batch = 0
    for migration in settings.migrations:
        name = migration.name()
        applied = False
        for record in records:
            batch = record.batch
            if record.migration == name:
                applied = True
                break
        if applied:
            continue
        migration.up()
        migrator.write_record(name, batch + 1)
        print(f"migrate {name} success.")


def run_rollback(settings: Settings) -> None:
    """Revert the migrations of the most recent batch."""
    print("rollback called")
    migrator = _migrator(settings)
    records = _newest_first(migrator.get_migrations())
    if not records:
        return

    batch = records[0].batch
    for record in records:
        if record.batch != batch:
            break
        for migration in settings.migrations:
            name = migration.name()
            if name == record.migration:
                batch = record.batch
                migration.down()
                migrator.delete_record(record.id)
                print(f"rollback {name} success.")

    if batch == 1:
        migrator.drop_table_if_exists()


def run_reset(settings: Settings) -> None:
    """Revert every applied migration and drop the bookkeeping table."""
    print("reset called")
    migrator = _migrator(settings)
    for record in _newest_first(migrator.get_migrations()):
        for migration in settings.migrations:
            name = migration.name()
            if name == record.migration:
                migration.down()
                migrator.delete_record(record.id)
                print(f"rollback {name} success.")
    migrator.drop_table_if_exists()


def run_refresh(settings: Settings) -> None:
    """Reset, then apply every migration again."""
    print("refresh called")
    run_reset(settings)
    run_migrate(settings)


def run_fresh(settings: Settings) -> None:
    """Drop every table, then apply every migration again."""
    print("fresh called")
    _migrator(settings).drop_all_tables()
    run_migrate(settings)


def _unquote(value: str) -> str | None:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return None


def get_module_name(path: str | Path = PYPROJECT) -> str:
    """Return the project name declared in a ``pyproject.toml`` file."""
    text = Path(path).read_text(encoding="utf-8")
    section = None
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("[") and line.endswith("]"):
            section = line.strip("[]").strip()
            continue
        if section != "project":
            continue
        key, sep, value = line.partition("=")
        if sep and key.strip() == "name":
            name = _unquote(value.split("#", 1)[0].strip())
            if name:
                return name
    raise ValueError(f"no project name in {path}")


def _create_migrate_script(db: str, module_name: str, root: Path) -> None:
    script = root / MIGRATE_SCRIPT
    try:
        script.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CommandError(f"can't make directory. \n{exc}") from exc
    try:
        script.write_text(render_migrate_script(db, module_name), encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise CommandError(f"can't create migrate file. \n{exc}") from exc


def _create_migrations(db: str, root: Path) -> None:
    directory = root / MIGRATIONS_DIR
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise CommandError(f"can't make directory. \n{exc}") from exc
    try:
        for filename, content in default_migrations(db).items():
            (directory / filename).write_text(content, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise CommandError(f"can't create migration file. \n{exc}") from exc


def handle_init(db: str, root: str | Path = ".") -> None:
    """Write the migrate entry script and the starter migrations under ``root``."""
    root = Path(root)
    try:
        module_name = get_module_name(root / PYPROJECT)
    except (OSError, ValueError) as exc:
        raise CommandError(f"can't get module name. \n{exc}") from exc
    try:
        _create_migrate_script(db, module_name, root)
    except CommandError as exc:
        raise CommandError(f"can't create the migrate cmd. \n{exc}") from exc
    try:
        _create_migrations(db, root)
    except CommandError as exc:
        raise CommandError(f"can't create the migration file. \n{exc}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="schemigrate", description=_DESCRIPTION)
    commands = parser.add_subparsers(dest="command", metavar="command")
    init = commands.add_parser("init", help="Init the migrate context in this project")
    init.add_argument("db")
    commands.add_parser("migrate", help="Execute database migration")
    commands.add_parser("rollback", help="Rollback the last database migration")
    commands.add_parser("reset", help="Rollback all database migrations")
    commands.add_parser("refresh", help="Reset and re-run all migrations")
    commands.add_parser("fresh", help="Drop all tables and re-run all migrations")
    new = commands.add_parser("new", help="New a migration file")
    new.add_argument("name")
    return parser


_RUNNERS = {
    "migrate": run_migrate,
    "rollback": run_rollback,
    "reset": run_reset,
    "refresh": run_refresh,
    "fresh": run_fresh,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; exits with status 1 when a migration command fails."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "init":
        print(f"Init migrate with {args.db}.")
        try:
            handle_init(args.db)
        except CommandError as exc:
            print("ERROR: ", exc)
            return 0
        print("Init migration ok.")
        return 0

    try:
        if args.command == "new":
            print("new called")
            new_migration(args.name)
            print(f"new {args.name} success.")
        else:
            _RUNNERS[args.command](config.settings)
    except Exception as exc:  # any failure ends the command with status 1
        print("Error: ", exc)
        raise SystemExit(1) from exc
    return 0