import pytest

from schemigrate.mysql.driver import MockDriver
from schemigrate.mysql.schema import Schema, Seeder, run_seed


def make_schema():
    driver = MockDriver()
    return Schema(lambda: driver), driver


def test_create_users_table():
    schema, driver = make_schema()

    def build(table):
        table.id("id", 10)
        table.text("description").nullable()
        table.integer("amount", 10).default(0)
        table.string("name", 100)
        table.boolean("enable").default(0)
        table.date("birthday")
        table.datetime("last_login_at").nullable()
        table.timestamps()

    schema.create("users", build)
    assert driver.sqls == [
        "CREATE TABLE `users` (`id` INT(10) NOT NULL AUTO_INCREMENT, PRIMARY KEY (`id`), `description` TEXT, `amount` INT(10) NOT NULL DEFAULT '0', `name` VARCHAR(100) NOT NULL, `enable` TINYINT NOT NULL DEFAULT '0', `birthday` DATE NOT NULL, `last_login_at` DATETIME, `created_at` DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP, `updated_at` DATETIME DEFAULT NULL);",
    ]
    assert driver.closed is True


def test_create_products_table():
    schema, driver = make_schema()

    def build(table):
        table.string("id", 20)
        table.primary("id")
        table.integer("user_id", 10)
        table.foreign("user_id").reference("id").on("users").on_update("cascade").on_delete("cascade")
        table.integer("category_id", 10).index()
        table.boolean("enable").default(1)
        table.timestamps()

    schema.create("products", build)
    assert driver.sqls == [
        "CREATE TABLE `products` (`id` VARCHAR(20) NOT NULL, PRIMARY KEY (`id`), `user_id` INT(10) NOT NULL, CONSTRAINT `fk_products_user_id` FOREIGN KEY (`user_id`) REFERENCES `users`(`id`) ON UPDATE CASCADE ON DELETE CASCADE, `category_id` INT(10) NOT NULL, INDEX (`category_id`), `enable` TINYINT NOT NULL DEFAULT '1', `created_at` DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP, `updated_at` DATETIME DEFAULT NULL);",
    ]
    assert driver.closed is True


def test_alter_users_table():
    schema, driver = make_schema()

    def build(table):
        table.integer("name", 10)
        table.string("price", 100)
        table.drop_column("description")
        table.drop_column("enable")

    schema.table("users", build)
    assert driver.sqls == [
        "ALTER TABLE `users` ADD `name` INT(10) NOT NULL, ADD `price` VARCHAR(100) NOT NULL, DROP `description`, DROP `enable`;",
    ]
    assert driver.closed is True


def test_alter_products_table():
    schema, driver = make_schema()

    def build(table):
        table.integer("price", 10)
        table.drop_primary()
        table.drop_foreign("user_id")
        table.drop_index("category_id")
        table.index("user_id")

    schema.table("products", build)
    assert driver.sqls == [
        "ALTER TABLE `products` ADD `price` INT(10) NOT NULL, DROP PRIMARY KEY, DROP FOREIGN KEY `fk_products_user_id`, DROP INDEX `fk_products_user_id`, DROP INDEX `category_id`, ADD INDEX (`user_id`);",
    ]
    assert driver.closed is True


def test_alter_table_primary():
    schema, driver = make_schema()

    def build(table):
        table.id("auto_id", 10)
        table.primary("id")
        table.index("user_id")
        table.unique("user_id")

    schema.table("products", build)
    assert driver.sqls == [
        "ALTER TABLE `products` ADD `auto_id` INT(10) NOT NULL AUTO_INCREMENT, ADD PRIMARY KEY (`auto_id`), ADD PRIMARY KEY (`id`), ADD INDEX (`user_id`), ADD UNIQUE (`user_id`);",
    ]
    assert driver.closed is True


def test_drop_if_exists():
    schema, driver = make_schema()
    schema.drop_if_exists("users")
    assert driver.sqls == ["DROP TABLE IF EXISTS users;"]
    assert driver.closed is True


def test_create_users_table_and_seed():
    schema, driver = make_schema()

    def build(table):
        table.id("id", 10)
        table.string("username", 100)
        table.string("password", 100)
        table.timestamps()

    schema.create("users", build).seed(
        {"username": "admin", "password": "password"},
        {"username": "user01", "password": "password"},
    )
    assert driver.sqls == [
        "CREATE TABLE `users` (`id` INT(10) NOT NULL AUTO_INCREMENT, PRIMARY KEY (`id`), `username` VARCHAR(100) NOT NULL, `password` VARCHAR(100) NOT NULL, `created_at` DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP, `updated_at` DATETIME DEFAULT NULL);",
        "INSERT INTO `users` (`password`, `username`) VALUES ('password', 'admin');",
        "INSERT INTO `users` (`password`, `username`) VALUES ('password', 'user01');",
    ]
    assert driver.closed is True


def test_create_floatings_table():
    schema, driver = make_schema()

    def build(table):
        table.id("id", 10)
        table.float("price", 10, 2)
        table.double("amount", 10, 2)
        table.decimal("total", 10, 2)
        table.timestamps()

    schema.create("floatings", build)
    assert driver.sqls == [
        "CREATE TABLE `floatings` (`id` INT(10) NOT NULL AUTO_INCREMENT, PRIMARY KEY (`id`), `price` FLOAT(10, 2) NOT NULL, `amount` DOUBLE(10, 2) NOT NULL, `total` DECIMAL(10, 2) NOT NULL, `created_at` DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP, `updated_at` DATETIME DEFAULT NULL);",
    ]
    assert driver.closed is True


def test_alter_floatings_table():
    schema, driver = make_schema()

    def build(table):
        table.float("price", 8, 2)
        table.double("amount", 10, 2)
        table.decimal("total", 16, 4)

    schema.table("floatings", build)
    assert driver.sqls == [
        "ALTER TABLE `floatings` ADD `price` FLOAT(8, 2) NOT NULL, ADD `amount` DOUBLE(10, 2) NOT NULL, ADD `total` DECIMAL(16, 4) NOT NULL;",
    ]
    assert driver.closed is True


class FailingDriver:
    def __init__(self):
        self.closed = False

    def execute(self, sql):
        raise RuntimeError("boom")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def test_create_failure_raises_and_closes():
    driver = FailingDriver()
    schema = Schema(lambda: driver)
    with pytest.raises(RuntimeError, match="boom"):
        schema.create("users", lambda table: table.id("id", 10))
    assert driver.closed is True


def test_run_seed_sorts_columns():
    driver = MockDriver()
    run_seed(driver, "items", [{"b": "2", "a": "1"}])
    assert driver.sqls == ["INSERT INTO `items` (`a`, `b`) VALUES ('1', '2');"]


def test_seeder_without_rows_runs_nothing():
    driver = MockDriver()
    Seeder("items", lambda: driver).seed()
    assert driver.sqls == []
    assert driver.closed is True