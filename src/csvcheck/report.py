"""
Error summary generation.

ErrorAggregator scans a whole Table against a RuleSet and folds every
failing check into an ErrorSummary: counts per column and error kind,
the first offending value seen for each, and a grand total.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from .rules import ErrorKind, RuleEngine, RuleSet
from .table import Table


@dataclass
class ErrorSummary:
    """
    Structured output from a summary pass.

    Attributes:
        stats: column -> ErrorKind -> number of failing checks.
        examples: column -> ErrorKind -> first offending raw value, in
            row, then header, then check order.
        total_errors: Number of failing checks (a cell failing two checks
            counts twice).
        row_count: Number of rows scanned.
        column_count: Number of columns in the scanned table.
    """
    stats: Dict[str, Dict[ErrorKind, int]] = field(default_factory=dict)
    examples: Dict[str, Dict[ErrorKind, str]] = field(default_factory=dict)
    total_errors: int = 0
    row_count: int = 0
    column_count: int = 0

    @property
    def passed(self) -> bool:
        """True if no check failed."""
        return self.total_errors == 0

    @property
    def failing_columns(self) -> List[str]:
        return list(self.stats)

    def count_for(self, column: str, kind: ErrorKind) -> int:
        return self.stats.get(column, {}).get(kind, 0)

    def example_for(self, column: str, kind: ErrorKind) -> Optional[str]:
        return self.examples.get(column, {}).get(kind)

    def record(self, column: str, kind: ErrorKind, value: str) -> None:
        """Fold one failing check into the summary."""
        col_stats = self.stats.setdefault(column, {})
        col_stats[kind] = col_stats.get(kind, 0) + 1
        self.examples.setdefault(column, {}).setdefault(kind, value)
        self.total_errors += 1

    def to_dict(self) -> Dict:
        """Serialize to a JSON-safe dictionary keyed by error labels."""
        return {
            'stats': {
                col: {kind.label: count for kind, count in kinds.items()}
                for col, kinds in self.stats.items()
            },
            'examples': {
                col: {kind.label: value for kind, value in kinds.items()}
                for col, kinds in self.examples.items()
            },
            'total_errors': self.total_errors,
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per (column, error kind) with its count and first example."""
        records = [
            {
                'column': col,
                'error_type': kind.label,
                'count': count,
                'example': self.examples[col][kind],
            }
            for col, kinds in self.stats.items()
            for kind, count in kinds.items()
        ]
        return pd.DataFrame(records, columns=['column', 'error_type', 'count', 'example'])

    def print_summary(self) -> None:
        """Print a concise summary to stdout."""
        status = 'PASSED' if self.passed else 'FAILED'
        print(f"\n{'=' * 60}")
        print(f"  Status:     {status}")
        print(f"  Errors:     {self.total_errors:,}")
        print(f"  Columns:    {len(self.stats)} with errors")
        print(f"  Data:       {self.row_count:,} rows x {self.column_count} columns")
        print(f"{'=' * 60}")

    def print_failures(self) -> None:
        """Print per-column error counts with their first example."""
        if self.passed:
            print("  No failures.")
            return

        print(f"\n  Failures ({self.total_errors:,}):")
        print(f"  {'-' * 56}")
        for col, kinds in self.stats.items():
            print(f"  {col}")
            for kind, count in kinds.items():
                example = self.examples[col][kind]
                print(f"        {kind.label}: {count:,} (e.g. {example!r})")
            print()


class ErrorAggregator:
    """
    Scan a Table against a RuleSet.

    Usage:
        summary = ErrorAggregator().summarize(table, ruleset)
        summary.print_summary()
    """

    def __init__(self, engine: Optional[RuleEngine] = None):
        self.engine = engine or RuleEngine()
        self.logger = logging.getLogger(self.__class__.__name__)

    def summarize(self, table: Table, ruleset: RuleSet) -> ErrorSummary:
        """Full pass building counts, first examples and the total."""
        summary = ErrorSummary(row_count=table.row_count, column_count=table.column_count)
        for row in table.rows():
            for column, value, kind in self.engine.row_failures(table.headers, row, ruleset):
                summary.record(column, kind, value)

        self.logger.info(
            f"Scanned {summary.row_count:,} rows: {summary.total_errors:,} errors "
            f"in {len(summary.stats)} columns"
        )
        return summary

    def count(self, table: Table, ruleset: RuleSet) -> int:
        """Full pass returning only the number of failing checks."""
        total = 0
        for row in table.rows():
            total += sum(1 for _ in self.engine.row_failures(table.headers, row, ruleset))
        self.logger.debug(f"Counted {total:,} errors over {table.row_count:,} rows")
        return total
