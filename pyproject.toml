[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "schemigrate"
version = "0.1.0"
description = "Laravel-style database migrations for MySQL: schema blueprints, seeding, batches and rollbacks."
requires-python = ">=3.10"
dependencies = [
    "pymysql",
]
keywords = ["migrations", "mysql", "schema", "database", "seeder", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
schemigrate = "schemigrate.launcher:main"
schemigrate-cli = "schemigrate.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["schemigrate"]

[tool.hatch.build.targets.sdist]
include = [
    "schemigrate",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
