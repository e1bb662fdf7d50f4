"""Schema entities describing the tables of a database.

A schema is declared in a definition file (``<database>.dbd``) and is loaded
once when a database is opened. Queries resolve tables through it but never
modify it, so both entities are frozen and use tuples for their sequences.

Example:
    >>> table = Table(name="elementary", columns=("id", "name", "date"), primary_key="id")
    >>> schema = Schema(tables=(table,))
    >>> schema.table("elementary").column_index("name")
    1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Sequence

Record = list[str]
"""A row of text values, one per declared column, in column order."""

ColumnList = str | Sequence[str]
"""Comma-separated column names, or an explicit sequence of names."""


@dataclass(frozen=True)
class Table:
    """A table definition: name, ordered columns and primary key.

    The primary key is always one of ``columns``. Column order is the
    declaration order in the schema file and is the order in which record
    values are stored.
    """

    name: str
    columns: tuple[str, ...]
    primary_key: str

    COLUMN_NOT_FOUND: ClassVar[int] = -1

    def __post_init__(self) -> None:
        """Validate the table definition."""
        if not self.name:
            raise ValueError("Table name must not be empty")
        if not self.columns:
            raise ValueError(f"Table {self.name!r} must declare at least one column")
        if self.primary_key not in self.columns:
            raise ValueError(
                f"Primary key {self.primary_key!r} is not a column of table {self.name!r}"
            )

    @property
    def key_index(self) -> int:
        """Position of the primary key within a record."""
        return self.columns.index(self.primary_key)

    def column_index(self, name: str) -> int:
        """Return the position of a column, or COLUMN_NOT_FOUND."""
        try:
            return self.columns.index(name)
        except ValueError:
            return self.COLUMN_NOT_FOUND

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": list(self.columns),
            "primary_key": self.primary_key,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Table:
        return cls(
            name=data["name"],
            columns=tuple(data["columns"]),
            primary_key=data["primary_key"],
        )


@dataclass(frozen=True)
class Schema:
    """An ordered collection of tables, in declaration order.

    Table names are not checked for uniqueness. Lookup returns the first
    table whose name matches.
    """

    tables: tuple[Table, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self):
        return iter(self.tables)

    @property
    def table_names(self) -> list[str]:
        return [table.name for table in self.tables]

    def table(self, name: str) -> Table | None:
        """Return the first table named ``name``, or None."""
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form used when persisting the schema to a cache."""
        return {"tables": [table.to_dict() for table in self.tables]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Schema:
        """Rebuild a schema from its plain-data form.

        Raises:
            KeyError, TypeError, ValueError: If the data is malformed.
        """
        return cls(tables=tuple(Table.from_dict(item) for item in data["tables"]))
