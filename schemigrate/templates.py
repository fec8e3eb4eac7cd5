"""Source templates for the migrate entry script and migration files."""

from __future__ import annotations

from string import Template

_HEADER = """\
from schemigrate.config import register
from schemigrate.contracts import Migration
from schemigrate.$driver.schema import schema
"""

_MIGRATE_SCRIPT = Template('''\
"""Migration commands for $module."""

import runpy
from pathlib import Path

from schemigrate.cli import main
from schemigrate.config import DatabaseConfig, configure
from schemigrate.$driver.migrator import init_migrator

password = ""

configure(
    DatabaseConfig(
        host="localhost",
        port=3306,
        username="root",
        password=password,
        dbname="test_your_db",
    ),
    init_migrator(),
    "$driver",
)

for _path in sorted(Path("migrations").glob("*.py")):
    runpy.run_path(str(_path))

if __name__ == "__main__":
    main()
''')

_CREATE_MIGRATION = Template(_HEADER + '''

@register
class ${name}Table(Migration):
    def up(self) -> None:
        def build(table):
            table.id("id", 10)
            table.timestamps()

        schema.create($table, build)

    def down(self) -> None:
        schema.drop_if_exists($table)
''')

_ALTER_MIGRATION = Template(_HEADER + '''

@register
class $name(Migration):
    def up(self) -> None:
        def build(table):
            pass

        schema.table($table, build)

    def down(self) -> None:
        def build(table):
            pass

        schema.table($table, build)
''')

_BLANK_MIGRATION = Template(_HEADER + '''

@register
class $name(Migration):
    def up(self) -> None:
        pass

    def down(self) -> None:
        pass
''')

_USERS_MIGRATION = Template(_HEADER + '''

@register
class UsersTable(Migration):
    def up(self) -> None:
        def users(table):
            table.id("id", 11)
            table.string("name", 50)
            table.string("email", 50).unique()
            table.datetime("email_verified_at").nullable()
            table.string("password", 255)
            table.string("remember_token", 100).nullable()
            table.timestamps()
            table.datetime("deleted_at").nullable()

        def password_reset_tokens(table):
            table.string("email", 255).primary()
            table.string("token", 255)
            table.timestamps()

        def sessions(table):
            table.string("id", 255).primary()
            table.integer("user_id", 11).nullable().index()
            table.string("ip_address", 45).nullable()
            table.text("user_agent").nullable()
            table.text("payload")
            table.integer("last_activity", 11).index()

        schema.create("users", users)
        schema.create("password_reset_tokens", password_reset_tokens)
        schema.create("sessions", sessions)

    def down(self) -> None:
        schema.drop_if_exists("sessions")
        schema.drop_if_exists("password_reset_tokens")
        schema.drop_if_exists("users")
''')

_CACHE_MIGRATION = Template(_HEADER + '''

@register
class CacheTable(Migration):
    def up(self) -> None:
        def cache(table):
            table.string("key", 255).primary()
            table.text("value")
            table.integer("expiration", 11).nullable()

        def cache_locks(table):
            table.string("key", 255).primary()
            table.string("owner", 255).nullable()
            table.integer("expiration", 11).nullable()

        schema.create("cache", cache)
        schema.create("cache_locks", cache_locks)

    def down(self) -> None:
        schema.drop_if_exists("cache")
        schema.drop_if_exists("cache_locks")
''')

_JOBS_MIGRATION = Template(_HEADER + '''

@register
class JobsTable(Migration):
    def up(self) -> None:
        def jobs(table):
            table.id("id", 11)
            table.string("queue", 255).index()
            table.text("payload")
            table.integer("attempts", 11).default(0)
            table.datetime("reserved_at").nullable()
            table.datetime("available_at")
            table.datetime("created_at")
            table.timestamps()

        def job_batches(table):
            table.id("id", 11)
            table.string("name", 255)
            table.integer("total_jobs", 11)
            table.integer("pending_jobs", 11)
            table.integer("failed_jobs", 11)
            table.text("failed_job_ids")
            table.text("options").nullable()
            table.datetime("cancelled_at").nullable()
            table.datetime("created_at")
            table.datetime("finished_at").nullable()
            table.timestamps()

        def failed_jobs(table):
            table.id("id", 11)
            table.string("uuid", 36).unique()
            table.string("connection", 255)
            table.string("queue", 255)
            table.text("payload")
            table.text("exception")
            table.datetime("failed_at")
            table.timestamps()

        schema.create("jobs", jobs)
        schema.create("job_batches", job_batches)
        schema.create("failed_jobs", failed_jobs)

    def down(self) -> None:
        schema.drop_if_exists("jobs")
        schema.drop_if_exists("job_batches")
        schema.drop_if_exists("failed_jobs")
''')

_PERMISSIONS_MIGRATION = Template(_HEADER + '''

@register
class PermissionTable(Migration):
    def up(self) -> None:
        def permissions(table):
            table.id("id", 11)
            table.string("name", 255)
            table.string("guard_name", 255)
            table.timestamps()
            table.unique("name,guard_name")

        def roles(table):
            table.id("id", 11)
            table.string("name", 255)
            table.string("guard_name", 255)
            table.timestamps()
            table.unique("name", "guard_name")

        def model_has_permissions(table):
            table.foreign("permission_id").reference("id").on("permissions").on_delete("cascade")
            table.string("model_type", 255)
            table.integer("model_id", 11)
            table.index("model_id", "model_type")
            table.primary("permission_id", "model_id", "model_type")

        def model_has_roles(table):
            table.foreign("role_id").reference("id").on("roles").on_delete("cascade")
            table.string("model_type", 255)
            table.integer("model_id", 11)
            table.index("model_id", "model_type")
            table.primary("role_id", "model_id", "model_type")

        def role_has_permissions(table):
            table.foreign("permission_id").reference("id").on("permissions").on_delete("cascade")
            table.foreign("role_id").reference("id").on("roles").on_delete("cascade")
            table.primary("permission_id", "role_id")

        schema.create("permissions", permissions)
        schema.create("roles", roles)
        schema.create("model_has_permissions", model_has_permissions)
        schema.create("model_has_roles", model_has_roles)
        schema.create("role_has_permissions", role_has_permissions)

    def down(self) -> None:
        schema.drop_if_exists("permissions")
        schema.drop_if_exists("roles")
        schema.drop_if_exists("model_has_permissions")
        schema.drop_if_exists("model_has_roles")
        schema.drop_if_exists("role_has_permissions")
''')

_DEFAULT_MIGRATIONS = (
    ("2025_06_11_000000_create_users_table.py", _USERS_MIGRATION),
    ("2025_06_11_000001_create_cache_table.py", _CACHE_MIGRATION),
    ("2025_06_11_000002_create_jobs_table.py", _JOBS_MIGRATION),
    ("2025_06_11_000003_create_personal_access_tokens_table.py", _PERMISSIONS_MIGRATION),
    ("2025_06_11_000004_create_permissions_table.py", _PERMISSIONS_MIGRATION),
)


def _identifier(value: str, what: str) -> str:
    if not value.isidentifier():
        raise ValueError(f"invalid {what}: {value!r}")
    return value


def render_migrate_script(driver: str, module_name: str) -> str:
    """Return the entry script that configures the backend and runs commands."""
    return _MIGRATE_SCRIPT.substitute(
        driver=_identifier(driver, "driver"), module=module_name
    )


def render_create_migration(driver: str, class_name: str, table: str) -> str:
    """Return a migration that creates ``table`` with an id and timestamps."""
    return _CREATE_MIGRATION.substitute(
        driver=_identifier(driver, "driver"),
        name=_identifier(class_name, "class name"),
        table=repr(table),
    )


def render_alter_migration(driver: str, class_name: str, table: str) -> str:
    """Return a migration with empty alterations of ``table``."""
    return _ALTER_MIGRATION.substitute(
        driver=_identifier(driver, "driver"),
        name=_identifier(class_name, "class name"),
        table=repr(table),
    )


def render_blank_migration(driver: str, class_name: str) -> str:
    """Return a migration whose up and down do nothing yet."""
    return _BLANK_MIGRATION.substitute(
        driver=_identifier(driver, "driver"),
        name=_identifier(class_name, "class name"),
    )


def default_migrations(driver: str) -> dict[str, str]:
    """Return the starter migrations, keyed by file name, in applying order."""
    driver = _identifier(driver, "driver")
    return {
        filename: template.substitute(driver=driver)
        for filename, template in _DEFAULT_MIGRATIONS
    }