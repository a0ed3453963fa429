#!/usr/bin/env python3
"""
Example: Validate a customer export, fix it up, and split it.

Runs a small customer CSV through per-column rules, prints the error
summary, bulk-fixes the most common bad values, then writes the
valid and invalid rows to separate CSV files.

Usage:
    python examples/validate_customer_csv.py [output_dir]
"""

import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from csvcheck import CsvProcessor

CUSTOMERS_CSV = """\
name,age,email,role
Alice,34,alice@example.com,admin
Bob,17,bob@example,user
,abc,carol@example.com,superuser
Dave,,dave@example.com,guest
Eve,101,eve example.com,Admin
Frank,45,frank@example.com,Admin
"""

RULES = [
    {"column": "name", "rules": [{"type": "notempty"}]},
    {"column": "age", "rules": [{"type": "notempty"}, {"type": "number", "min": 18, "max": 100}]},
    {"column": "email", "rules": [{"type": "email"}]},
    {"column": "role", "rules": [{"type": "oneof", "options": ["admin", "user", "guest"]}]},
]


def main():
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path('./output')

    p = CsvProcessor(CUSTOMERS_CSV, json.dumps(RULES), name='customers')

    summary = p.get_error_summary()
    summary.print_summary()
    summary.print_failures()

    print("\nError breakdown:")
    print(summary.to_frame().to_string(index=False))

    # Role values are case-sensitive; normalize the common miscapitalization
    remaining = p.apply_bulk_fix('role', 'Admin', 'admin')
    print(f"\nAfter fixing 'Admin' -> 'admin': {remaining:,} errors remain")

    export = p.generate_split_export()
    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / 'customers_valid.csv').write_text(export.valid)
    (output_dir / 'customers_invalid.csv').write_text(export.invalid)

    print(f"\nWrote {export.valid_rows:,} valid and {export.invalid_rows:,} invalid rows to {output_dir}/")
    print()


if __name__ == '__main__':
    main()
