"""Shared test fixtures and path setup."""
import json
import sys
from pathlib import Path

# Add src/ to sys.path so tests can import csvcheck without installing
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

import pytest

from csvcheck import CsvProcessor, parse_rules, read_table


# --- Rule fixtures ---

@pytest.fixture
def customer_rules():
    """Rule JSON for the customer table: one rule list per checked column."""
    return json.dumps([
        {"column": "name", "rules": [{"type": "notempty"}]},
        {"column": "age", "rules": [{"type": "notempty"}, {"type": "number", "min": 18, "max": 100}]},
        {"column": "email", "rules": [{"type": "email"}]},
        {"column": "role", "rules": [{"type": "oneof", "options": ["admin", "user", "guest"]}]},
    ])


@pytest.fixture
def customer_ruleset(customer_rules):
    return parse_rules(customer_rules)


# --- Table fixtures ---

@pytest.fixture
def clean_csv():
    """Customer CSV with no rule violations."""
    return (
        "name,age,email,role\n"
        "Alice,34,alice@example.com,admin\n"
        "Bob,18,bob@example.com,user\n"
        "Carol,100,carol@example.com,guest\n"
    )


@pytest.fixture
def messy_csv():
    """
    Customer CSV with 10 failing checks:

    row 1 Alice  -> none
    row 2 Bob    -> age Min Value, email Invalid Email
    row 3 (blank)-> name Required, age Not a Number, role Invalid Option
    row 4 Dave   -> age Required + age Not a Number
    row 5 Eve    -> age Max Value, email Invalid Email, role Invalid Option
    """
    return (
        "name,age,email,role\n"
        "Alice,34,alice@example.com,admin\n"
        "Bob,17,bob@example,user\n"
        ",abc,carol@example.com,superuser\n"
        "Dave,,dave@example.com,guest\n"
        "Eve,101,eve example.com,Admin\n"
    )


@pytest.fixture
def messy_table(messy_csv):
    return read_table(messy_csv)


@pytest.fixture
def clean_table(clean_csv):
    return read_table(clean_csv)


@pytest.fixture
def messy_processor(messy_csv, customer_rules):
    return CsvProcessor(messy_csv, customer_rules, name='customers')


@pytest.fixture
def status_csv():
    """Orders CSV where three status cells are empty."""
    return (
        "order_id,status\n"
        "1001,shipped\n"
        "1002,\n"
        "1003,\n"
        "1004,pending\n"
        "1005,\n"
    )


@pytest.fixture
def status_rules():
    return json.dumps([
        {"column": "order_id", "rules": [{"type": "regex", "pattern": r"^\d{4}$"}]},
        {"column": "status", "rules": [{"type": "notempty"}]},
    ])
