import pytest

from schemigrate.contracts import Migration, MigrationRecord, Migrator


class CreateUsersTable(Migration):
    def __init__(self):
        self.calls = []

    def up(self):
        self.calls.append("up")

    def down(self):
        self.calls.append("down")


class MemoryMigrator(Migrator):
    def __init__(self):
        self.exists = False
        self.records = []
        self._next_id = 1

    def check_table(self):
        return self.exists

    def create_table(self):
        self.exists = True

    def drop_table_if_exists(self):
        self.exists = False
        self.records = []

    def drop_all_tables(self):
        self.drop_table_if_exists()

    def get_migrations(self):
        return list(self.records)

    def write_record(self, migration, batch):
        self.records.append(MigrationRecord(self._next_id, migration, batch))
        self._next_id += 1

    def delete_record(self, record_id):
        self.records = [r for r in self.records if r.id != record_id]


def test_migration_is_abstract():
    with pytest.raises(TypeError):
        Migration()


def test_migration_name_is_class_name():
    assert Migration.name(CreateUsersTable()) == "CreateUsersTable"


def test_migration_up_and_down_run():
    migration = CreateUsersTable()
    migration.up()
    migration.down()
    assert migration.calls == ["up", "down"]
    assert Migration.name(migration) == "CreateUsersTable"


def test_migration_record_equality_and_fields():
    record = MigrationRecord(id=3, migration="CreateUsersTable", batch=2)
    assert record == MigrationRecord(3, "CreateUsersTable", 2)
    assert (record.id, record.migration, record.batch) == (3, "CreateUsersTable", 2)


def test_migration_record_is_immutable():
    record = MigrationRecord(1, "A", 1)
    with pytest.raises(AttributeError):
        record.batch = 5
    assert record == MigrationRecord(1, "A", 1)


def test_incomplete_migrator_cannot_be_built():
    with pytest.raises(TypeError):
        Migrator()


def test_migrator_contract_round_trip():
    migrator = MemoryMigrator()
    assert migrator.check_table() is False
    migrator.create_table()
    assert migrator.check_table() is True
    migrator.write_record("CreateUsersTable", 1)
    migrator.write_record("CreateCacheTable", 1)
    assert migrator.get_migrations() == [
        MigrationRecord(1, "CreateUsersTable", 1),
        MigrationRecord(2, "CreateCacheTable", 1),
    ]
    migrator.delete_record(1)
    assert migrator.get_migrations() == [MigrationRecord(2, "CreateCacheTable", 1)]