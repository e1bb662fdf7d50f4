"""Schema definition file parser.

A schema file declares every table of one database, one directive per line:

    TAB elementary
    KEY id
    COL name
    COL date
    **
    TAB colors
    KEY id
    COL hex

``TAB`` names the current table, ``KEY`` adds the primary key column,
``COL`` adds a column and a line starting with ``**`` closes the current
table. Any other line is ignored, and surrounding whitespace is trimmed
from directive values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from flatfile_db.domain.entities import Schema, Table
from flatfile_db.domain.errors import SchemaFileEmptyError, SchemaFileMissingError
from flatfile_db.infrastructure.logging import get_logger

logger = get_logger(__name__)

TABLE_SEPARATOR = "**"
TAG_TABLE = "TAB"
TAG_KEY = "KEY"
TAG_COLUMN = "COL"


@dataclass
class _TableDraft:
    """A table definition still being read."""

    name: str = ""
    columns: list[str] = field(default_factory=list)
    primary_key: str = ""

    def is_degenerate(self) -> bool:
        return not self.name or not self.columns

    def build(self) -> Table:
        primary_key = self.primary_key
        if not primary_key:
            primary_key = self.columns[0]
            logger.warning(
                "table_missing_key_directive",
                table=self.name,
                primary_key=primary_key,
            )
        return Table(name=self.name, columns=tuple(self.columns), primary_key=primary_key)


class SchemaParser:
    """Parses schema definition text into a Schema."""

    def parse_file(self, path: str | Path) -> Schema:
        """Parse a schema definition file.

        Args:
            path: Path to the ``.dbd`` file.

        Returns:
            The parsed schema.

        Raises:
            SchemaFileMissingError: If the file cannot be opened.
            SchemaFileEmptyError: If the file has no lines.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8", errors="surrogateescape") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise SchemaFileMissingError(str(path)) from e

        if not lines:
            raise SchemaFileEmptyError(str(path))

        schema = self.parse_lines(lines)
        logger.info("schema_parsed", path=str(path), tables=schema.table_names)
        return schema

    def parse_lines(self, lines: Iterable[str]) -> Schema:
        """Parse schema definition lines.

        Tables without a name or without columns (for example the empty
        definition left by a trailing ``**``) are dropped.
        """
        drafts = [_TableDraft()]

        for line in lines:
            if line.startswith(TABLE_SEPARATOR):
                drafts.append(_TableDraft())
                continue

            tag = line[:4].strip()
            value = line[3:].strip()
            current = drafts[-1]

            if tag == TAG_TABLE:
                current.name = value
            elif tag == TAG_KEY:
                if current.primary_key:
                    logger.warning(
                        "table_duplicate_key_directive",
                        table=current.name,
                        previous=current.primary_key,
                        primary_key=value,
                    )
                current.primary_key = value
                current.columns.append(value)
            elif tag == TAG_COLUMN:
                current.columns.append(value)

        return Schema(
            tables=tuple(draft.build() for draft in drafts if not draft.is_degenerate())
        )
