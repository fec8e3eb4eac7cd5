"""Laravel-style schema migrations for MySQL, with a command-line runner."""

__version__ = "0.1.0"