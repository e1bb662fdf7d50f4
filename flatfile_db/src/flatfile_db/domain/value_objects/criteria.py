"""Criteria value object for filtering records.

A criteria string is either ``COLUMN=VALUE`` or a bare ``VALUE``, in which
case the table's primary key is the column compared. A value wrapped in
slashes (``/pattern/``) is a case-insensitive regular expression.

Example:
    >>> Criteria.parse("name=/s/", primary_key="id")
    Criteria(column='name', value='/s/', is_regex=True)
    >>> Criteria.parse("12", primary_key="id")
    Criteria(column='id', value='12', is_regex=False)
"""

from __future__ import annotations

from dataclasses import dataclass

REGEX_DELIMITER = "/"


@dataclass(frozen=True, slots=True)
class Criteria:
    """A parsed ``COLUMN=VALUE`` filter.

    Attributes:
        column: Name of the column to compare.
        value: Text to compare against (or the ``/pattern/`` itself).
        is_regex: True when ``value`` is a slash-delimited pattern.
    """

    column: str
    value: str
    is_regex: bool = False

    @property
    def pattern(self) -> str:
        """The regular expression body between the slashes."""
        if not self.is_regex:
            raise ValueError(f"Criteria value {self.value!r} is not a regular expression")
        return self.value[1:-1]

    @classmethod
    def parse(cls, raw: str, primary_key: str) -> Criteria:
        """Parse a criteria string.

        Splits on the first ``=`` only, so the value may itself contain
        ``=``. The literals ``true`` and ``false`` are normalized to ``"1"``
        and ``""`` before the regular expression check.

        Args:
            raw: The criteria string.
            primary_key: Column used when the string has no ``COLUMN=`` part.

        Returns:
            The parsed Criteria.
        """
        if "=" in raw:
            column, value = raw.split("=", 1)
            column = column.strip()
            value = value.strip()
        else:
            column = primary_key
            value = raw.strip()

        # Boolean columns are stored as "1" or ""
        if value == "true":
            value = "1"
        elif value == "false":
            value = ""

        is_regex = (
            len(value) >= 2
            and value.startswith(REGEX_DELIMITER)
            and value.endswith(REGEX_DELIMITER)
        )

        return cls(column=column, value=value, is_regex=is_regex)
