"""
Core processor.

CsvProcessor owns one Table and one RuleSet for its whole lifetime and
exposes the summary, bulk fix and split export operations over them.
"""

import logging
from typing import List

from .editor import BulkEditor
from .export import ExportSplitter, SplitExport
from .report import ErrorAggregator, ErrorSummary
from .rules import RuleEngine, RuleSet, parse_rules
from .table import Table, read_table


class CsvProcessor:
    """
    Validate CSV text against rule JSON.

    Usage:
        from csvcheck import CsvProcessor

        p = CsvProcessor(csv_text, rules_json)
        summary = p.get_error_summary()
        summary.print_summary()

        remaining = p.apply_bulk_fix("status", "", "N/A")
        export = p.generate_split_export()

    Construction raises RuleDefinitionError, TableHeaderError or
    TableRecordError on malformed input. Every later operation is a
    fresh full pass over the current table and does not raise.
    Instances are not safe for concurrent use.
    """

    def __init__(self, csv_text: str, rules_json: str, name: str = 'csv'):
        self.name = name
        self.logger = logging.getLogger(self.__class__.__name__)

        self._ruleset = parse_rules(rules_json)
        self._table = read_table(csv_text)

        engine = RuleEngine()
        self._aggregator = ErrorAggregator(engine)
        self._editor = BulkEditor(self._aggregator)
        self._splitter = ExportSplitter(engine)

        self.logger.info(
            f"[{self.name}] Loaded {self._table.row_count:,} rows x "
            f"{self._table.column_count} columns, {len(self._ruleset)} column rules"
        )

    @property
    def headers(self) -> List[str]:
        return list(self._table.headers)

    @property
    def row_count(self) -> int:
        return self._table.row_count

    @property
    def table(self) -> Table:
        return self._table

    @property
    def ruleset(self) -> RuleSet:
        return self._ruleset

    def get_error_summary(self) -> ErrorSummary:
        """Counts and first examples per column and error kind, plus the total."""
        return self._aggregator.summarize(self._table, self._ruleset)

    def count_total_errors(self) -> int:
        return self._aggregator.count(self._table, self._ruleset)

    def apply_bulk_fix(self, column_name: str, target_value: str, replacement_value: str) -> int:
        """Exact-match replace in one column; returns the new total error count."""
        return self._editor.apply_bulk_fix(
            self._table, self._ruleset, column_name, target_value, replacement_value,
        )

    def generate_split_export(self) -> SplitExport:
        """Partition rows into valid and invalid CSV text."""
        return self._splitter.split(self._table, self._ruleset)
