# schemigrate

Database migrations for MySQL in the style of Laravel. Tables are described
with a fluent blueprint, each migration knows how to go `up` and `down`, and
applied migrations are tracked in a `migrations` table in batches so that the
last batch can be rolled back on its own.

## Installation

```
pip install schemigrate
```

The package talks to MySQL through `pymysql`.

## Getting started

Run `init` from the root of your project, naming the database driver. The
project needs a `pyproject.toml` with a `name` in its `[project]` table; that
name is written into the generated script.

```
schemigrate init mysql
```

This writes:

- `cmd/migrate/migrate.py`, a script that configures the connection
  (`localhost:3306`, user `root`, database `test_your_db`), loads every
  `migrations/*.py` file in name order and then runs the command given to it;
- `migrations/` with a starter set of migrations creating the users,
  password reset tokens and sessions tables, the cache tables, the job tables,
  and the permission and role tables. The files
  `..._create_personal_access_tokens_table.py` and
  `..._create_permissions_table.py` both hold the permissions migration.

Edit the connection settings in the generated script before going further.
If `init` fails, it prints `ERROR:` with the reason.

Once initialised, `schemigrate` forwards every other command to
`cmd/migrate/migrate.py`, run with the current Python interpreter, and prints
what it wrote to standard output. If the script does not exist yet,
`schemigrate` tells you to run `init` first.

## Commands

| Command                   | What it does                                                 |
|---------------------------|--------------------------------------------------------------|
| `schemigrate init <db>`   | Write the migrate script and the starter migrations          |
| `schemigrate new <name>`  | Create a timestamped migration file in `migrations/`         |
| `schemigrate migrate`     | Run every migration not yet recorded, as one new batch       |
| `schemigrate rollback`    | Roll back the most recent batch                              |
| `schemigrate reset`       | Roll back every migration and drop the `migrations` table    |
| `schemigrate refresh`     | `reset`, then `migrate`                                      |
| `schemigrate fresh`       | Drop every table in the database, then `migrate`             |

`rollback` also drops the `migrations` table when the batch it rolled back was
batch 1.

The name given to `new` picks the template; the file is called
`YYYY_MM_DD_HHMMSS_<name>.py`:

- `create_<table>_table` writes a migration that creates `<table>` with an
  `id` column and timestamps, and drops it again on the way down;
- a name ending in `_table` that contains `to_<table>_table` writes a
  migration with empty alterations of `<table>`;
- any other name writes an empty migration.

The class name is the file name in CamelCase, so the name must make a valid
Python identifier.

`schemigrate-cli` runs the same commands directly, without the forwarding
step, against the settings configured in the current process
(`schemigrate.config.settings`). A failing migration command prints `Error:`
and exits with status 1.

## Writing a migration

A migration subclasses `schemigrate.contracts.Migration`, implements `up` and
`down`, and registers itself. `register` accepts an instance or a class (which
it instantiates), so it also works as a class decorator:

```python
from schemigrate.config import register
from schemigrate.contracts import Migration
from schemigrate.mysql.schema import schema


@register
class PostsTable(Migration):
    def up(self):
        def build(table):
            table.id("id", 11)
            table.string("title", 200)
            table.text("body").nullable()
            table.integer("user_id", 11).index()
            table.foreign("user_id").reference("id").on("users").on_delete("cascade")
            table.timestamps()

        schema.create("posts", build)

    def down(self):
        schema.drop_if_exists("posts")
```

The name recorded in the `migrations` table is the class name
(`Migration.name()`).

`Schema.create` returns a `Seeder`, so rows can be inserted right after the
table is made. Columns are written in sorted order:

```python
schema.create("roles", build_roles).seed(
    {"name": "admin", "guard_name": "web"},
    {"name": "editor", "guard_name": "web"},
)
```

`Schema.table` alters an existing table with the same blueprint; there the
`drop_column`, `drop_index`, `drop_unique`, `drop_foreign` and `drop_primary`
calls become `DROP` clauses.

### Blueprint columns

`id`, `string`, `text`, `integer`, `float`, `double`, `decimal`, `date`,
`boolean`, `datetime`, `unsigned_integer`, `unsigned_big_integer` and
`timestamps` add columns. `nullable`, `unique`, `index` and `default` modify
the column added last; `unique`, `index` and `primary` also accept column
names to add table-level keys. `Blueprint.get_sqls(table, Operation.CREATE)`
or `Operation.ALTER` returns the statements without running them.

## Configuration

Connection details live in a `DatabaseConfig`; `configure` installs it
together with the migrator and the driver name:

```python
from schemigrate.config import DatabaseConfig, configure
from schemigrate.mysql.migrator import init_migrator

password = ""

configure(
    DatabaseConfig(host="localhost", port=3306, username="root",
                   password=password, dbname="app"),
    init_migrator(),
    "mysql",
)
```

## Testing without a database

`Schema` and `MySQLMigrator` take a `driver_factory`. Passing one that returns
a `schemigrate.mysql.driver.MockDriver` records every statement in its `sqls`
list instead of running it; its `responses` mapping gives the rows that
`query` and `select` return for a statement.

## What it does not do

- MySQL is the only backend. `init` accepts any driver name, but the
  generated files import `schemigrate.<driver>`, which exists only for `mysql`.
- Table names and seeded values are put into the SQL as they are, without
  escaping.
- There are no options for rolling back a given number of steps or listing
  migration status.