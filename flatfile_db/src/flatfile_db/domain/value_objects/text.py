"""Helpers for the text representation of stored values.

Every value stored in a table is text. Keys additionally support a derived
numeric reading, used when assigning the next automatic key and when two
numeric strings are compared for equality.
"""

from __future__ import annotations

import re
import sys
from decimal import Decimal, InvalidOperation
from typing import Any

_LEADING_INTEGER = re.compile(r"\s*([+-]?)([0-9]+)")
_NUMERIC = re.compile(r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")

# Digit runs longer than this are past any representable key
_MAX_INTEGER_DIGITS = len(str(sys.maxsize))


def to_text(value: Any) -> str:
    """Render a value the way it is stored in a table file.

    ``None`` and ``False`` become the empty string and ``True`` becomes
    ``"1"``; everything else goes through ``str``.

    Example:
        >>> to_text(12), to_text(True), to_text(None)
        ('12', '1', '')
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def integer_value(text: str) -> int:
    """Return the integer read from the leading digits of ``text``.

    Text without a leading integer reads as 0. A run of digits too long to
    be a key reads as ``sys.maxsize + 1`` (negated for a minus sign), so
    callers bounding keys by ``sys.maxsize`` see it as out of range.

    Example:
        >>> integer_value("42"), integer_value("7b"), integer_value("abc")
        (42, 7, 0)
    """
    match = _LEADING_INTEGER.match(text)
    if match is None:
        return 0

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_INTEGER_DIGITS:
        magnitude = sys.maxsize + 1
    else:
        magnitude = int(digits)
    return -magnitude if sign == "-" else magnitude


def numeric_value(text: str) -> Decimal | None:
    """Return the number ``text`` spells out in full, or None."""
    if not _NUMERIC.fullmatch(text):
        return None
    try:
        return Decimal(text.strip())
    except InvalidOperation:
        return None


def texts_equal(stored: str, wanted: str) -> bool:
    """Compare a stored value with a wanted value.

    Values are equal when their text is identical, or when both are
    numeric strings with the same numeric value (``"12"`` and ``"12.0"``).
    """
    if stored == wanted:
        return True
    left = numeric_value(stored)
    if left is None:
        return False
    right = numeric_value(wanted)
    return right is not None and left == right
