"""
In-memory table of string cells.

The Table keeps headers and cells separately: cells live in a pandas
DataFrame with positional column labels, so duplicate header names are
kept as-is instead of being mangled.
"""

import csv
import io
import logging
import sys
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import pandas as pd

from .errors import TableHeaderError, TableRecordError

# Cells have no size cap; the csv module's default is 131072 characters.
# The limit is a C long, so clamp for platforms where that is 32-bit.
csv.field_size_limit(min(sys.maxsize, 2 ** 31 - 1))


@dataclass(eq=False)
class Table:
    """
    Ordered rows of string fields under a header.

    Attributes:
        headers: Column names, in order. Duplicates are allowed.
        frame: Cell values, one DataFrame column per header position.

    Every row has exactly len(headers) fields. Rows are never added or
    removed after construction; only replace_exact() changes cells.
    """
    headers: List[str]
    frame: pd.DataFrame

    @classmethod
    def from_rows(cls, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> 'Table':
        headers = list(headers)
        frame = pd.DataFrame(
            [list(r) for r in rows],
            columns=pd.RangeIndex(len(headers)),
            dtype=object,
        )
        return cls(headers=headers, frame=frame)

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def rows(self) -> Iterator[Tuple[str, ...]]:
        """Iterate rows in table order."""
        return self.frame.itertuples(index=False, name=None)

    def column_index(self, name: str) -> Optional[int]:
        """Position of the first header equal to name, or None."""
        for idx, header in enumerate(self.headers):
            if header == name:
                return idx
        return None

    def replace_exact(self, index: int, target: str, replacement: str) -> int:
        """
        Replace every cell in column `index` equal to `target`.

        Matching is exact string equality. Returns the number of cells changed.
        """
        mask = (self.frame.iloc[:, index] == target).to_numpy(dtype=bool)
        changed = int(mask.sum())
        if changed:
            self.frame.iloc[mask, index] = replacement
        return changed

    def to_dataframe(self) -> pd.DataFrame:
        """A copy of the cells labelled with the header names."""
        return self.frame.set_axis(self.headers, axis=1).copy()

    def to_csv(self) -> str:
        return write_table(self.headers, self.rows())


def read_table(text: str) -> Table:
    """
    Read CSV text into a Table.

    The first non-blank line is the header. Blank lines are skipped.

    Raises:
        TableHeaderError: If there is no header row or it cannot be read.
        TableRecordError: If a record cannot be read or its field count
            differs from the header's.
    """
    reader = csv.reader(io.StringIO(text, newline=''))

    try:
        headers = next(row for row in reader if row)
    except StopIteration:
        raise TableHeaderError("Header Error: missing header row") from None
    except csv.Error as exc:
        raise TableHeaderError(f"Header Error: {exc}") from exc

    width = len(headers)
    rows: List[List[str]] = []
    try:
        for row in reader:
            if not row:
                continue
            if len(row) != width:
                raise TableRecordError(
                    f"CSV Parse Error: record on line {reader.line_num} has "
                    f"{len(row)} fields, but the header has {width} fields",
                    line=reader.line_num,
                )
            rows.append(row)
    except csv.Error as exc:
        raise TableRecordError(
            f"CSV Parse Error: line {reader.line_num}: {exc}",
            line=reader.line_num,
        ) from exc

    logging.getLogger('Table').debug(f"Read {len(rows):,} rows x {width} columns")
    return Table.from_rows(headers, rows)


def write_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """Render a header and rows as CSV text (minimal quoting, \\n line endings)."""
    df = pd.DataFrame([list(r) for r in rows], columns=list(headers), dtype=object)
    return df.to_csv(index=False, lineterminator='\n')
