"""Table blueprints and the MySQL statements they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_DROP = "DROP"


class Operation(Enum):
    """Kind of statement a blueprint is rendered into."""

    CREATE = "create"
    ALTER = "alter"


@dataclass
class ForeignKey:
    """A foreign-key constraint on one column."""

    reference: str = ""
    table: str = ""
    on_update: str = ""
    on_delete: str = ""

    def sql(self, table: str, name: str) -> str:
        """Render the constraint for column ``name`` of ``table``."""
        s = (
            f"CONSTRAINT `fk_{table}_{name}` FOREIGN KEY (`{name}`) "
            f"REFERENCES `{self.table}`(`{self.reference}`)"
        )
        if self.on_update:
            s += f" ON UPDATE {self.on_update}"
        if self.on_delete:
            s += f" ON DELETE {self.on_delete}"
        return s


@dataclass
class Column:
    """One entry of a blueprint: a column, key, index or drop."""

    name: str = ""
    sql_type: str = ""
    length: int = 0
    precision: int = 0
    nullable: bool = False
    unique: bool = False
    index: bool = False
    primary: bool = False
    auto_increment: bool = False
    default: Any = None
    foreign: ForeignKey | None = None


class ForeignBlueprint:
    """Fluent builder for a foreign-key constraint."""

    def __init__(self, key: ForeignKey | None = None) -> None:
        self.key = key if key is not None else ForeignKey()

    def reference(self, name: str) -> ForeignBlueprint:
        self.key.reference = name
        return self

    def on(self, table: str) -> ForeignBlueprint:
        self.key.table = table
        return self

    def on_update(self, action: str) -> ForeignBlueprint:
        self.key.on_update = action.upper()
        return self

    def on_delete(self, action: str) -> ForeignBlueprint:
        self.key.on_delete = action.upper()
        return self


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Blueprint:
    """Collects column definitions for a CREATE or ALTER TABLE statement."""

    def __init__(self) -> None:
        self.columns: list[Column] = []

    def _add(self, column: Column) -> Blueprint:
        self.columns.append(column)
        return self

    def _last(self) -> Column:
        if not self.columns:
            raise ValueError("no column defined to modify")
        return self.columns[-1]

    def id(self, name: str, length: int = 0) -> None:
        self._add(Column(name=name, sql_type="INT", length=length or 11,
                         auto_increment=True, primary=True))

    def string(self, name: str, length: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="VARCHAR", length=length or 255))

    def text(self, name: str) -> Blueprint:
        return self._add(Column(name=name, sql_type="TEXT"))

    def integer(self, name: str, length: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="INT", length=length or 11))

    def float(self, name: str, length: int, precision: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="FLOAT", length=length,
                                precision=precision or 2))

    def double(self, name: str, length: int, precision: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="DOUBLE", length=length,
                                precision=precision or 2))

    def decimal(self, name: str, length: int, precision: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="DECIMAL", length=length,
                                precision=precision or 2))

    def date(self, name: str) -> Blueprint:
        return self._add(Column(name=name, sql_type="DATE"))

    def boolean(self, name: str) -> Blueprint:
        return self._add(Column(name=name, sql_type="TINYINT"))

    def datetime(self, name: str) -> Blueprint:
        return self._add(Column(name=name, sql_type="DATETIME"))

    def timestamps(self) -> None:
        self._add(Column(name="created_at", sql_type="DATETIME",
                         default="CURRENT_TIMESTAMP"))
        self._add(Column(name="updated_at", sql_type="DATETIME",
                         nullable=True, default="NULL"))

    def nullable(self) -> Blueprint:
        self._last().nullable = True
        return self

    def unique(self, *columns: str) -> Blueprint:
        if not columns:
            self._last().unique = True
        for name in columns:
            self._add(Column(name=name, unique=True))
        return self

    def index(self, *columns: str) -> Blueprint:
        if not columns:
            self._last().index = True
        for name in columns:
            self._add(Column(name=name, index=True))
        return self

    def default(self, value: Any) -> Blueprint:
        self._last().default = f"'{_format_value(value)}'"
        return self

    def unsigned_big_integer(self, name: str) -> Blueprint:
        return self._add(Column(name=name, sql_type="UNSIGNED BIGINT", length=20))

    def unsigned_integer(self, name: str, length: int = 0) -> Blueprint:
        return self._add(Column(name=name, sql_type="UNSIGNED INTEGER", length=length))

    def foreign(self, name: str) -> ForeignBlueprint:
        builder = ForeignBlueprint()
        self._add(Column(name=name, foreign=builder.key))
        return builder

    def primary(self, *names: str) -> Blueprint:
        return self._add(Column(name="`, `".join(names), primary=True))

    def drop_column(self, column: str) -> None:
        self._add(Column(name=column, sql_type=_DROP))

    def drop_unique(self, name: str) -> None:
        self._add(Column(name=name, sql_type=_DROP, unique=True))

    def drop_index(self, name: str) -> None:
        self._add(Column(name=name, sql_type=_DROP, index=True))

    def drop_foreign(self, name: str) -> None:
        self._add(Column(name=name, sql_type=_DROP, foreign=ForeignKey()))

    def drop_primary(self) -> None:
        self._add(Column(sql_type=_DROP, primary=True))

    def get_sqls(self, table: str, operation: Operation) -> list[str]:
        """Render the collected definitions into SQL statements."""
        return generate_sql(table, self.columns, operation)


def _definition(column: Column, prefix: str) -> str:
    s = f"{prefix}`{column.name}` {column.sql_type}" if column.sql_type else ""
    if column.length:
        if column.precision:
            s += f"({column.length}, {column.precision})"
        else:
            s += f"({column.length})"
    if s and not column.nullable:
        s += " NOT NULL"
    if column.auto_increment:
        s += " AUTO_INCREMENT"
    return s


def _append(s: str, clause: str) -> str:
    return f"{s}, {clause}" if s else clause


def _create_clause(table: str, column: Column) -> str | None:
    if column.sql_type == _DROP:
        return None
    if column.foreign is not None:
        return column.foreign.sql(table, column.name)
    s = _definition(column, "")
    if column.primary:
        s = _append(s, f"PRIMARY KEY (`{column.name}`)")
    if column.unique:
        s = _append(s, f"UNIQUE (`{column.name}`)")
    if column.index:
        s = _append(s, f"INDEX (`{column.name}`)")
    if column.default is not None:
        s += f" DEFAULT {column.default}"
    return s


def _alter_clause(table: str, column: Column) -> str:
    if column.sql_type == _DROP:
        if column.primary:
            return "DROP PRIMARY KEY"
        if column.index or column.unique:
            return f"DROP INDEX `{column.name}`"
        if column.foreign is not None:
            key = f"fk_{table}_{column.name}"
            return f"DROP FOREIGN KEY `{key}`, DROP INDEX `{key}`"
        return f"DROP `{column.name}`"
    if column.foreign is not None:
        return f"ADD {column.foreign.sql(table, column.name)}"
    s = _definition(column, "ADD ")
    if column.primary:
        s = _append(s, f"ADD PRIMARY KEY (`{column.name}`)")
    if column.default is not None:
        s += f" DEFAULT {column.default}"
    if column.unique:
        s = _append(s, f"ADD UNIQUE (`{column.name}`)")
    if column.index:
        s = _append(s, f"ADD INDEX (`{column.name}`)")
    return s


def generate_sql(table: str, columns: list[Column], operation: Operation) -> list[str]:
    """Render ``columns`` as the statements for ``operation`` on ``table``."""
    if operation is Operation.CREATE:
        clauses = (_create_clause(table, c) for c in columns)
        body = ", ".join(c for c in clauses if c is not None)
        return [f"CREATE TABLE `{table}` ({body});"]
    if operation is Operation.ALTER:
        body = ", ".join(_alter_clause(table, c) for c in columns)
        return [f"ALTER TABLE `{table}` {body};"]
    raise ValueError(f"unknown operation: {operation!r}")