"""
csvcheck: rule-based validation for CSV data.

Validate tabular text against per-column rules, summarize failures,
bulk-fix values and export valid/invalid rows separately.
"""

from .editor import BulkEditor
from .errors import (
    CsvCheckError,
    RuleDefinitionError,
    TableError,
    TableHeaderError,
    TableRecordError,
)
from .export import ExportSplitter, SplitExport
from .processor import CsvProcessor
from .report import ErrorAggregator, ErrorSummary
from .rules import (
    Check,
    ColumnRule,
    Email,
    ErrorKind,
    NotEmpty,
    NumberRange,
    OneOf,
    Pattern,
    RuleEngine,
    RuleSet,
    parse_rules,
)
from .table import Table, read_table, write_table

__version__ = '0.1.0'

__all__ = [
    'BulkEditor',
    'Check',
    'ColumnRule',
    'CsvCheckError',
    'CsvProcessor',
    'Email',
    'ErrorAggregator',
    'ErrorKind',
    'ErrorSummary',
    'ExportSplitter',
    'NotEmpty',
    'NumberRange',
    'OneOf',
    'Pattern',
    'RuleDefinitionError',
    'RuleEngine',
    'RuleSet',
    'SplitExport',
    'Table',
    'TableError',
    'TableHeaderError',
    'TableRecordError',
    'parse_rules',
    'read_table',
    'write_table',
]
