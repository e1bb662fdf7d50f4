"""Errors raised by database operations.

Every error derives from FlatFileDBError. The inbound port re-exports them,
so callers usually import them from ``flatfile_db`` or ``flatfile_db.ports``.
"""

from __future__ import annotations

from typing import Sequence


class FlatFileDBError(Exception):
    """Base class for all database errors."""

    pass


class DatabaseNotFoundError(FlatFileDBError):
    """Raised when a database's schema file is missing or empty."""

    pass


class SchemaFileMissingError(DatabaseNotFoundError):
    """Raised when the schema file cannot be opened."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Schema file missing or not readable: {path}")


class SchemaFileEmptyError(DatabaseNotFoundError):
    """Raised when the schema file contains no lines."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Schema file empty: {path}")


class TableNotFoundError(FlatFileDBError):
    """Raised when a table is not declared in the schema."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Table not found: {table}")


class MissingTableParamError(TableNotFoundError):
    """Raised when an operation is given a blank table name."""

    def __init__(self) -> None:
        super().__init__("")
        self.args = ("Missing table name",)


class ColumnNotFoundError(FlatFileDBError):
    """Raised when one or more named columns are not in a table.

    Attributes:
        table: The table that was queried.
        columns: Every column name that could not be resolved.
    """

    def __init__(self, table: str, columns: Sequence[str]) -> None:
        self.table = table
        self.columns = list(columns)
        super().__init__(
            f"Column name(s) do not exist on table {table}: {', '.join(self.columns)}"
        )


class ColumnListMismatchError(FlatFileDBError):
    """Raised when the number of values differs from the number of columns."""

    def __init__(self, expected: int, got: int) -> None:
        self.expected = expected
        self.got = got
        super().__init__(
            f"Column list not same length as input data; got {got} but expected {expected}"
        )


class DuplicateKeyError(FlatFileDBError):
    """Raised when an inserted key already exists in the table."""

    def __init__(self, table: str, key: str) -> None:
        self.table = table
        self.key = key
        super().__init__(f"Invalid key (not unique) on table {table}: {key}")


class AutoKeyOverflowError(FlatFileDBError):
    """Raised when the next automatic key would exceed the integer bound."""

    def __init__(self, table: str, max_key: int) -> None:
        self.table = table
        self.max_key = max_key
        super().__init__(
            f"Cannot auto assign next key on table {table}; {max_key} is out of bounds"
        )
