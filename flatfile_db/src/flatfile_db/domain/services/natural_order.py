"""Natural-order sorting of text values.

Natural order compares runs of digits by their integer value instead of
character by character, so ``"item2"`` sorts before ``"item10"``. All other
characters compare by code point, case-sensitively.

Example:
    >>> sorted(["img12", "img10", "IMG2", "img1"], key=natural_key)
    ['IMG2', 'img1', 'img10', 'img12']
"""

from __future__ import annotations

import re
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

_DIGIT_RUN = re.compile(r"([0-9]+)")

DigitRun = tuple[int, str]
NaturalKey = tuple[str | DigitRun, ...]


def natural_key(value: str) -> NaturalKey:
    """Split a value into alternating text and digit-run segments.

    The segment at every even position is text (possibly empty) and every
    odd position is a digit run, so keys of different values always compare
    like with like. A digit run is keyed by its length and digits once
    leading zeros are dropped, which orders runs of any length by value.

    Example:
        >>> natural_key("a10b02")
        ('a', (2, '10'), 'b', (1, '2'), '')
    """
    return tuple(
        _digit_run_key(segment) if position % 2 else segment
        for position, segment in enumerate(_DIGIT_RUN.split(value))
    )


def _digit_run_key(digits: str) -> DigitRun:
    significant = digits.lstrip("0")
    return (len(significant), significant)


def natural_compare(left: str, right: str) -> int:
    """Three-way natural-order comparison: -1, 0 or 1."""
    left_key = natural_key(left)
    right_key = natural_key(right)
    return (left_key > right_key) - (left_key < right_key)


def natural_sorted(
    items: Sequence[T],
    key: Callable[[T], str],
    descending: bool = False,
) -> list[T]:
    """Stable natural-order sort of ``items``.

    Descending order reverses the ascending result, so items with equal
    keys come out in reverse of their original order.
    """
    result = sorted(items, key=lambda item: natural_key(key(item)))
    if descending:
        result.reverse()
    return result
