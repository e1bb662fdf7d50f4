"""Value objects for the flat-file database domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    Criteria:
        - Criteria: Parsed ``COLUMN=VALUE`` filter

    Sorting:
        - SortSpec: Single-column sort specification
        - SortDirection: ASC or DESC

    Delimiters:
        - Delimiters: Column/row control bytes of a table file

    Text:
        - to_text, integer_value, numeric_value, texts_equal
"""

from flatfile_db.domain.value_objects.criteria import Criteria
from flatfile_db.domain.value_objects.delimiters import (
    COL_DELIMITER,
    LEGACY_COL_DELIMITER,
    LEGACY_ROW_DELIMITER,
    ROW_DELIMITER,
    Delimiters,
)
from flatfile_db.domain.value_objects.sort_spec import SortDirection, SortSpec
from flatfile_db.domain.value_objects.text import (
    integer_value,
    numeric_value,
    texts_equal,
    to_text,
)

__all__ = [
    # Criteria
    "Criteria",
    # Sorting
    "SortDirection",
    "SortSpec",
    # Delimiters
    "Delimiters",
    "COL_DELIMITER",
    "ROW_DELIMITER",
    "LEGACY_COL_DELIMITER",
    "LEGACY_ROW_DELIMITER",
    # Text
    "to_text",
    "integer_value",
    "numeric_value",
    "texts_equal",
]
