"""
Bulk exact-match correction.
"""

import logging
from typing import Optional

from .report import ErrorAggregator
from .rules import RuleSet
from .table import Table


class BulkEditor:
    """
    Replace every occurrence of one value in one column, then recount.

    Changes are made in place and cannot be undone.
    """

    def __init__(self, aggregator: Optional[ErrorAggregator] = None):
        self.aggregator = aggregator or ErrorAggregator()
        self.logger = logging.getLogger(self.__class__.__name__)

    def apply_bulk_fix(
        self,
        table: Table,
        ruleset: RuleSet,
        column_name: str,
        target_value: str,
        replacement_value: str,
    ) -> int:
        """
        Replace cells in `column_name` that exactly equal `target_value`.

        The column is resolved to the first header with that name. An
        unknown column leaves the table untouched.

        Returns:
            Total number of failing checks over the whole table afterwards.
        """
        idx = table.column_index(column_name)
        if idx is None:
            self.logger.info(f"Column {column_name!r} not found; nothing replaced")
        else:
            changed = table.replace_exact(idx, target_value, replacement_value)
            self.logger.info(
                f"Replaced {changed:,} cells in {column_name!r}: "
                f"{target_value!r} -> {replacement_value!r}"
            )

        return self.aggregator.count(table, ruleset)
