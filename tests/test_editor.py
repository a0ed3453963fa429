"""
Tests for bulk exact-match correction.
"""

import logging

from csvcheck.editor import BulkEditor
from csvcheck.report import ErrorAggregator
from csvcheck.rules import parse_rules
from csvcheck.table import read_table


class TestBulkEditor:

    def test_fix_reduces_total(self, status_csv, status_rules):
        table = read_table(status_csv)
        rs = parse_rules(status_rules)
        before = ErrorAggregator().count(table, rs)
        assert before == 3

        after = BulkEditor().apply_bulk_fix(table, rs, 'status', '', 'N/A')
        assert after == before - 3
        assert [r[1] for r in table.rows()] == ['shipped', 'N/A', 'N/A', 'pending', 'N/A']

    def test_returns_full_recount(self, messy_table, customer_ruleset):
        # Dave's empty age fails two checks; 30 satisfies both
        total = BulkEditor().apply_bulk_fix(messy_table, customer_ruleset, 'age', '', '30')
        assert total == 8

    def test_replacement_can_add_errors(self, messy_table, customer_ruleset):
        total = BulkEditor().apply_bulk_fix(messy_table, customer_ruleset, 'role', 'admin', 'root')
        assert total == 11

    def test_unknown_column_is_noop(self, messy_table, customer_ruleset):
        before = list(messy_table.rows())
        total = BulkEditor().apply_bulk_fix(messy_table, customer_ruleset, 'status', '', 'x')
        assert total == 10
        assert list(messy_table.rows()) == before

    def test_exact_match_only(self):
        table = read_table("role\nAdmin\nadmin \nADMIN\nAdmin\n")
        rs = parse_rules('[{"column": "role", "rules": [{"type": "oneof", "options": ["admin"]}]}]')
        total = BulkEditor().apply_bulk_fix(table, rs, 'role', 'Admin', 'admin')
        assert total == 2
        assert [r[0] for r in table.rows()] == ['admin', 'admin ', 'ADMIN', 'admin']

    def test_duplicate_header_first_column_only(self):
        table = read_table("x,x\na,a\n")
        BulkEditor().apply_bulk_fix(table, parse_rules('[]'), 'x', 'a', 'b')
        assert list(table.rows()) == [('b', 'a')]

    def test_logs_replacements(self, status_csv, status_rules, caplog):
        table = read_table(status_csv)
        with caplog.at_level(logging.INFO, logger='BulkEditor'):
            BulkEditor().apply_bulk_fix(table, parse_rules(status_rules), 'status', '', 'N/A')
        assert "Replaced 3 cells in 'status'" in caplog.text
