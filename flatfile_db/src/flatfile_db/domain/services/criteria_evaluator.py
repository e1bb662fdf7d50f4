"""Criteria evaluation against record sets.

Matching is lenient about unknown columns: criteria naming a column the
table does not have match no records rather than raising. Column lists,
by contrast, are validated strictly by the projection step.
"""

from __future__ import annotations

import re
from typing import Sequence

from flatfile_db.domain.entities import Record, Table
from flatfile_db.domain.value_objects import Criteria, texts_equal
from flatfile_db.infrastructure.logging import get_logger

logger = get_logger(__name__)


class CriteriaEvaluator:
    """Matches records against a parsed Criteria.

    Example:
        >>> evaluator = CriteriaEvaluator()
        >>> table = Table("elementary", ("id", "name"), "id")
        >>> records = [["12", "sherlock"], ["47", "watson"]]
        >>> evaluator.matching_indices(Criteria("name", "/S/", True), table, records)
        [0, 1]
    """

    def parse(self, raw: str, table: Table) -> Criteria | None:
        """Parse a criteria string for ``table``; None when it is empty.

        Only the empty string means "no criteria". Whitespace alone trims
        to an empty key value and matches records whose key is empty.
        """
        if not raw:
            return None
        return Criteria.parse(raw, table.primary_key)

    def matching_indices(
        self,
        criteria: Criteria,
        table: Table,
        records: Sequence[Record],
    ) -> list[int]:
        """Return the positions of the matching records, in order."""
        index = table.column_index(criteria.column)
        if index == Table.COLUMN_NOT_FOUND:
            return []

        if criteria.is_regex:
            try:
                pattern = re.compile(criteria.pattern, re.IGNORECASE)
            except re.error as e:
                logger.warning(
                    "invalid_regex_criteria",
                    table=table.name,
                    column=criteria.column,
                    pattern=criteria.value,
                    error=str(e),
                )
                return []

            def matches(value: str) -> bool:
                return pattern.search(value) is not None
        else:
            def matches(value: str) -> bool:
                return texts_equal(value, criteria.value)

        return [
            row_id
            for row_id, record in enumerate(records)
            if matches(record[index] if index < len(record) else "")
        ]

    def matching_rows(
        self,
        criteria: Criteria,
        table: Table,
        records: Sequence[Record],
    ) -> list[Record]:
        """Return the matching records themselves, in order."""
        return [records[i] for i in self.matching_indices(criteria, table, records)]
