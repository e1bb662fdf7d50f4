"""Delimited text file implementation of the TableStore protocol.

Each table lives in its own data file. A row is its fields joined by the
column delimiter byte and terminated by the row delimiter byte plus a line
feed:

    12<US>sherlock<US>1925-09-09<RS>\\n
    47<US>watson<US>1931-10-31<RS>\\n

Nothing is escaped, so values must not contain either delimiter byte. Any
other content, including commas, line feeds and multi-byte text, is stored
as is. Fields are decoded as UTF-8; undecodable bytes are carried through
unchanged (``surrogateescape``).

File Layout:
    <datapath>/[<database>.]<table><table_extension>

Thread Safety:
    None. Every write truncates and rewrites the whole file; concurrent
    writers from other processes can interleave and lose updates.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Sequence

from flatfile_db.domain.entities import Record
from flatfile_db.domain.value_objects import Delimiters, to_text
from flatfile_db.infrastructure.config import get_config
from flatfile_db.infrastructure.logging import get_logger

logger = get_logger(__name__)

ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"
LINE_FEED = b"\n"
ESCAPE = "\\"

# Stripped from the start of each row: space, tab, LF, CR, NUL, VT
ROW_LEADING_WHITESPACE = b" \t\n\r\x00\x0b"


def decode_records(data: bytes, delimiters: Delimiters) -> list[Record]:
    """Decode the raw contents of a table file.

    The segment after the last row delimiter is discarded. No check is made
    against the number of declared columns.

    Example:
        >>> decode_records(b"12\\x1fsherlock\\x1e\\n", Delimiters.standard())
        [['12', 'sherlock']]
    """
    if not data:
        return []

    rows = data.split(delimiters.row)
    rows.pop()

    return [
        [
            field.decode(ENCODING, ENCODING_ERRORS)
            for field in row.lstrip(ROW_LEADING_WHITESPACE).split(delimiters.column)
        ]
        for row in rows
    ]


def encode_value(value: Any, delimiters: Delimiters) -> bytes:
    """Encode one value, dropping a backslash escape before a delimiter."""
    text = to_text(value)
    for delimiter in (delimiters.column, delimiters.row):
        escaped = ESCAPE + delimiter.decode(ENCODING, ENCODING_ERRORS)
        if escaped in text:
            text = text.replace(escaped, escaped[1:])
    return text.encode(ENCODING, ENCODING_ERRORS)


def encode_records(records: Sequence[Sequence[Any]], delimiters: Delimiters) -> bytes:
    """Encode a record set into table file contents."""
    terminator = delimiters.row + LINE_FEED
    return b"".join(
        delimiters.column.join(encode_value(value, delimiters) for value in record) + terminator
        for record in records
    )


class DelimitedTableStore:
    """Reads and writes whole tables as delimited text files.

    Attributes:
        datapath: Directory holding the table files.
        database_name: Name of the database the tables belong to.
        delimiters: Column/row delimiter bytes.
    """

    def __init__(
        self,
        datapath: str | Path,
        database_name: str,
        delimiters: Delimiters | None = None,
        prepend_database_name: bool = False,
        table_extension: str | None = None,
        fsync: bool | None = None,
    ) -> None:
        """Initialize the table store.

        Args:
            datapath: Directory holding the table files.
            database_name: Name of the database.
            delimiters: Delimiter pair (default: unit/record separators).
            prepend_database_name: Name files ``<database>.<table><ext>``.
            table_extension: Data file extension (default from config).
            fsync: fsync after each rewrite (default from config).
        """
        storage = get_config().storage
        self._datapath = Path(datapath)
        self._database_name = database_name
        self._delimiters = delimiters or Delimiters.standard()
        self._prepend_database_name = prepend_database_name
        self._table_extension = table_extension or storage.table_extension
        self._fsync = storage.fsync if fsync is None else fsync

    @property
    def datapath(self) -> Path:
        return self._datapath

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def delimiters(self) -> Delimiters:
        return self._delimiters

    def table_path(self, table_name: str) -> Path:
        """Return the data file path for a table."""
        prefix = f"{self._database_name}." if self._prepend_database_name else ""
        return self._datapath / f"{prefix}{table_name}{self._table_extension}"

    def is_empty(self, table_name: str) -> bool:
        """Return True if the table file is absent or holds only whitespace."""
        data = self._read_bytes(self.table_path(table_name))
        return not data or data.isspace()

    def read_records(self, table_name: str) -> list[Record]:
        """Load every record of a table, in file order."""
        return decode_records(self._read_bytes(self.table_path(table_name)), self._delimiters)

    def write_records(self, table_name: str, records: Sequence[Sequence[Any]]) -> int:
        """Truncate the table file and write ``records`` to it.

        Returns:
            The number of bytes written.

        Raises:
            IOError: If the file cannot be written.
        """
        path = self.table_path(table_name)
        data = encode_records(records, self._delimiters)

        with open(path, "wb") as f:
            f.write(data)
            f.flush()
            if self._fsync:
                os.fsync(f.fileno())

        logger.debug(
            "table_written",
            table=table_name,
            path=str(path),
            records=len(records),
            bytes=len(data),
        )
        return len(data)

    def _read_bytes(self, path: Path) -> bytes:
        """Return the file contents, or b"" when it does not exist."""
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return b""
