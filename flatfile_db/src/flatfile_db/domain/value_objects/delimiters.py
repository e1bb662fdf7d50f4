"""Control-byte delimiters used by table data files.

Each row of a table file is its fields joined by the column delimiter and
terminated by the row delimiter followed by a line feed. The standard pair
is the ASCII unit separator (31) and record separator (30). Files written by
older releases used bytes 200 and 201 instead.
"""

from __future__ import annotations

from dataclasses import dataclass

COL_DELIMITER = 31  # Unit separator
ROW_DELIMITER = 30  # Record separator

LEGACY_COL_DELIMITER = 200
LEGACY_ROW_DELIMITER = 201


@dataclass(frozen=True, slots=True)
class Delimiters:
    """The column/row delimiter pair for a table file.

    Attributes:
        column: Single byte separating fields within a row.
        row: Single byte terminating a row (always followed by ``\\n``).

    Example:
        >>> Delimiters.standard().column
        b'\\x1f'
    """

    column: bytes
    row: bytes

    def __post_init__(self) -> None:
        """Validate the delimiter pair."""
        if len(self.column) != 1 or len(self.row) != 1:
            raise ValueError("Delimiters must be exactly one byte each")
        if self.column == self.row:
            raise ValueError("Column and row delimiters must differ")

    @classmethod
    def standard(cls) -> Delimiters:
        return cls(column=bytes([COL_DELIMITER]), row=bytes([ROW_DELIMITER]))

    @classmethod
    def legacy(cls) -> Delimiters:
        return cls(column=bytes([LEGACY_COL_DELIMITER]), row=bytes([LEGACY_ROW_DELIMITER]))
