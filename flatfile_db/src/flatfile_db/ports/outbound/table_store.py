"""Table Store port for reading and writing whole tables.

The query engine never patches a table file in place: every mutation loads
the full record set, changes it in memory and hands the complete set back
to be written. Implementations must replace the file contents entirely.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, Sequence

from flatfile_db.domain.entities import Record


class TableStore(Protocol):
    """Protocol for whole-table persistence."""

    @abstractmethod
    def table_path(self, table_name: str) -> Path:
        """Return the data file path for a table."""
        ...

    @abstractmethod
    def is_empty(self, table_name: str) -> bool:
        """Return True if the table file is absent or holds only whitespace."""
        ...

    @abstractmethod
    def read_records(self, table_name: str) -> list[Record]:
        """Load every record of a table, in file order.

        An absent or zero-length file yields an empty list.
        """
        ...

    @abstractmethod
    def write_records(self, table_name: str, records: Sequence[Sequence[object]]) -> int:
        """Replace the table file with ``records``.

        Returns:
            The number of bytes written.

        Raises:
            IOError: If the write fails.
        """
        ...
