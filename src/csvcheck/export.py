"""
Valid/invalid split export.

Partitions rows into two CSV documents: rows with no failing checks,
and rows with at least one, annotated with an Error_Reason column.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .rules import RuleEngine, RuleSet
from .table import Table, write_table


@dataclass
class SplitExport:
    """
    Result of a split export.

    Attributes:
        valid: CSV text of passing rows under the original header.
        invalid: CSV text of failing rows under the original header plus
            Error_Reason.
        valid_rows: Number of data rows in `valid`.
        invalid_rows: Number of data rows in `invalid`.
    """
    valid: str
    invalid: str
    valid_rows: int = 0
    invalid_rows: int = 0

    def to_dict(self) -> Dict[str, str]:
        return {'valid': self.valid, 'invalid': self.invalid}


class ExportSplitter:
    """
    Split a Table into valid and invalid CSV text.

    Each failing check on a row adds one "{column}: Invalid" reason.
    Reasons are not deduplicated, so a column failing two checks is
    listed twice.
    """

    REASON_COLUMN = 'Error_Reason'
    REASON_SEPARATOR = '; '

    def __init__(self, engine: Optional[RuleEngine] = None):
        self.engine = engine or RuleEngine()
        self.logger = logging.getLogger(self.__class__.__name__)

    def row_reasons(self, headers: List[str], row, ruleset: RuleSet) -> List[str]:
        return [
            f"{column}: Invalid"
            for column, _, _ in self.engine.row_failures(headers, row, ruleset)
        ]

    def split(self, table: Table, ruleset: RuleSet) -> SplitExport:
        valid: List[List[str]] = []
        invalid: List[List[str]] = []

        for row in table.rows():
            reasons = self.row_reasons(table.headers, row, ruleset)
            if reasons:
                invalid.append(list(row) + [self.REASON_SEPARATOR.join(reasons)])
            else:
                valid.append(list(row))

        self.logger.info(f"Split {table.row_count:,} rows: {len(valid):,} valid, {len(invalid):,} invalid")

        return SplitExport(
            valid=write_table(table.headers, valid),
            invalid=write_table(table.headers + [self.REASON_COLUMN], invalid),
            valid_rows=len(valid),
            invalid_rows=len(invalid),
        )
