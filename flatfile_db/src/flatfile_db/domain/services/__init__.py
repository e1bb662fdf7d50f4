"""Domain services for business logic.

Services implement the parsing, matching and ordering rules that
don't naturally fit within a single entity or value object.
"""

from flatfile_db.domain.services.criteria_evaluator import CriteriaEvaluator
from flatfile_db.domain.services.natural_order import (
    natural_compare,
    natural_key,
    natural_sorted,
)
from flatfile_db.domain.services.projection import (
    ALL_COLUMNS,
    parse_column_list,
    project,
    record_to_row,
    resolve_columns,
    sort_records,
)
from flatfile_db.domain.services.schema_parser import SchemaParser

__all__ = [
    "ALL_COLUMNS",
    "CriteriaEvaluator",
    "SchemaParser",
    "natural_compare",
    "natural_key",
    "natural_sorted",
    "parse_column_list",
    "project",
    "record_to_row",
    "resolve_columns",
    "sort_records",
]
