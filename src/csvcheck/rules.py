"""
Validation rule definitions.

Each Check encapsulates a single per-cell test and classifies a failure
as an ErrorKind. Checks are grouped per column by ColumnRule and composed
into a RuleSet, which is usually built from rule JSON via parse_rules().
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import RuleDefinitionError


class ErrorKind(Enum):
    """Why a check failed. Values are the labels used in reports."""
    REQUIRED = 'Required'
    NOT_A_NUMBER = 'Not a Number'
    MIN_VALUE = 'Min Value'
    MAX_VALUE = 'Max Value'
    INVALID_EMAIL = 'Invalid Email'
    PATTERN_MISMATCH = 'Pattern Mismatch'
    INVALID_OPTION = 'Invalid Option'

    @property
    def label(self) -> str:
        return self.value


class Check(ABC):
    """Base class for all per-cell checks."""

    type_name: ClassVar[str]

    @abstractmethod
    def evaluate(self, value: str) -> Optional[ErrorKind]:
        """Test one raw cell value. Returns None when it passes."""
        ...

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the rule JSON shape."""
        ...


@dataclass(frozen=True)
class NotEmpty(Check):
    """Fail with REQUIRED when the value is blank after stripping whitespace."""

    type_name: ClassVar[str] = 'notempty'

    def evaluate(self, value: str) -> Optional[ErrorKind]:
        if not value.strip():
            return ErrorKind.REQUIRED
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name}


def parse_number(value: str) -> Optional[float]:
    """
    Parse a cell as a float, or return None.

    Stricter than float(): surrounding whitespace, underscore digit
    separators and non-ASCII digits are rejected.
    """
    if value != value.strip() or '_' in value or not value.isascii():
        return None
    try:
        return float(value)
    except ValueError:
        return None


@dataclass(frozen=True)
class NumberRange(Check):
    """
    Check that a value is numeric and within an inclusive range.

    Args:
        min_val: Minimum allowed value (inclusive). None to skip.
        max_val: Maximum allowed value (inclusive). None to skip.
    """

    type_name: ClassVar[str] = 'number'

    min_val: Optional[float] = None
    max_val: Optional[float] = None

    def evaluate(self, value: str) -> Optional[ErrorKind]:
        number = parse_number(value)
        if number is None:
            return ErrorKind.NOT_A_NUMBER
        if self.min_val is not None and number < self.min_val:
            return ErrorKind.MIN_VALUE
        if self.max_val is not None and number > self.max_val:
            return ErrorKind.MAX_VALUE
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'min': self.min_val, 'max': self.max_val}


@dataclass(frozen=True)
class Email(Check):
    """Check that a value looks like local@domain.tld."""

    type_name: ClassVar[str] = 'email'
    PATTERN: ClassVar[re.Pattern] = re.compile(r'[^@\s]+@[^@\s]+\.[^@\s]+')

    def evaluate(self, value: str) -> Optional[ErrorKind]:
        if self.PATTERN.fullmatch(value) is None:
            return ErrorKind.INVALID_EMAIL
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name}


@dataclass(frozen=True)
class Pattern(Check):
    """
    Check that a value matches a regular expression anywhere in the string.

    The expression is compiled once. If it does not compile, the check
    passes every value.

    Args:
        expression: Regular expression (matched with re.search).
    """

    type_name: ClassVar[str] = 'regex'

    expression: str
    _regex: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)
    compile_error: Optional[str] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        try:
            compiled = re.compile(self.expression)
            error = None
        except re.error as exc:
            compiled = None
            error = str(exc)
        object.__setattr__(self, '_regex', compiled)
        object.__setattr__(self, 'compile_error', error)

    @property
    def is_valid(self) -> bool:
        return self._regex is not None

    def evaluate(self, value: str) -> Optional[ErrorKind]:
        if self._regex is None:
            return None
        if self._regex.search(value) is None:
            return ErrorKind.PATTERN_MISMATCH
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'pattern': self.expression}


@dataclass(frozen=True)
class OneOf(Check):
    """Check that a value is exactly one of the allowed options (case-sensitive)."""

    type_name: ClassVar[str] = 'oneof'

    options: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'options', tuple(self.options))

    def evaluate(self, value: str) -> Optional[ErrorKind]:
        if value not in self.options:
            return ErrorKind.INVALID_OPTION
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type_name, 'options': list(self.options)}


@dataclass(frozen=True)
class ColumnRule:
    """The ordered checks that apply to one column."""
    column: str
    checks: Tuple[Check, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'checks', tuple(self.checks))

    def to_dict(self) -> Dict[str, Any]:
        return {'column': self.column, 'rules': [c.to_dict() for c in self.checks]}


class RuleSet:
    """
    The column -> checks mapping a table is validated against.

    Keeps every ColumnRule in definition order. Lookup by column name
    goes through a derived dict, so when a column is defined twice the
    later definition wins.

    Usage:
        rules = RuleSet()
        rules.add(ColumnRule('age', [NotEmpty(), NumberRange(min_val=18)]))
        rules.checks_for('age')
    """

    def __init__(self, rules: Optional[Sequence[ColumnRule]] = None):
        self.rules: List[ColumnRule] = []
        self._lookup: Dict[str, Tuple[Check, ...]] = {}
        self.logger = logging.getLogger(self.__class__.__name__)
        for rule in rules or []:
            self.add(rule)

    def add(self, rule: ColumnRule) -> 'RuleSet':
        for check in rule.checks:
            if isinstance(check, Pattern) and not check.is_valid:
                self.logger.warning(
                    f"Column {rule.column!r}: pattern {check.expression!r} does not compile "
                    f"({check.compile_error}); check will never fail"
                )
        self.rules.append(rule)
        self._lookup[rule.column] = rule.checks
        return self

    def checks_for(self, column: str) -> Tuple[Check, ...]:
        """Checks for a column; empty when the column is unchecked."""
        return self._lookup.get(column, ())

    @property
    def columns(self) -> List[str]:
        return list(self._lookup)

    def to_dict(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.rules]

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[ColumnRule]:
        return iter(self.rules)


# --- Rule JSON parsing --------------------------------------------------------

def _bound(raw: Dict[str, Any], key: str) -> Optional[float]:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"'{key}' is out of range for a number") from None


def _parse_check(raw: Any) -> Check:
    if not isinstance(raw, dict):
        raise ValueError(f"rule must be an object, got {raw!r}")
    if 'type' not in raw:
        raise ValueError("missing field `type`")

    rule_type = raw['type']
    if rule_type == NotEmpty.type_name:
        return NotEmpty()
    if rule_type == NumberRange.type_name:
        return NumberRange(min_val=_bound(raw, 'min'), max_val=_bound(raw, 'max'))
    if rule_type == Email.type_name:
        return Email()
    if rule_type == Pattern.type_name:
        pattern = raw.get('pattern')
        if not isinstance(pattern, str):
            raise ValueError("'regex' rule needs a string `pattern`")
        return Pattern(pattern)
    if rule_type == OneOf.type_name:
        options = raw.get('options')
        if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
            raise ValueError("'oneof' rule needs `options` as a list of strings")
        return OneOf(tuple(options))

    known = ', '.join(c.type_name for c in CHECK_TYPES)
    raise ValueError(f"unknown variant `{rule_type}`, expected one of {known}")


CHECK_TYPES = (NotEmpty, NumberRange, Email, Pattern, OneOf)


def parse_rules(text: str) -> RuleSet:
    """
    Parse rule JSON into a RuleSet.

    Expected shape:
        [{"column": "age", "rules": [{"type": "number", "min": 18}]}]

    Raises:
        RuleDefinitionError: If the text is not valid JSON or does not
            describe a list of column rules.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise RuleDefinitionError(f"Invalid Rules JSON: {exc}") from exc

    try:
        if not isinstance(data, list):
            raise ValueError(f"expected a list of column rules, got {type(data).__name__}")

        ruleset = RuleSet()
        for position, entry in enumerate(data):
            if not isinstance(entry, dict):
                raise ValueError(f"entry {position} must be an object")
            column = entry.get('column')
            if not isinstance(column, str):
                raise ValueError(f"entry {position}: missing field `column`")
            rules = entry.get('rules')
            if not isinstance(rules, list):
                raise ValueError(f"entry {position}: missing field `rules`")
            ruleset.add(ColumnRule(column, [_parse_check(r) for r in rules]))
    except ValueError as exc:
        raise RuleDefinitionError(f"Invalid Rules JSON: {exc}") from exc

    return ruleset


# --- Evaluation ---------------------------------------------------------------

class RuleEngine:
    """
    Evaluate cell values against checks.

    Every check in a column's list is evaluated independently, so one
    cell can fail several checks in a single pass.
    """

    def evaluate(self, value: str, check: Check) -> Optional[ErrorKind]:
        return check.evaluate(value)

    def failures(self, value: str, checks: Sequence[Check]) -> List[ErrorKind]:
        """All failures for one value, in check order."""
        found = []
        for check in checks:
            kind = self.evaluate(value, check)
            if kind is not None:
                found.append(kind)
        return found

    def row_failures(
        self,
        headers: Sequence[str],
        row: Sequence[str],
        ruleset: RuleSet,
    ) -> Iterator[Tuple[str, str, ErrorKind]]:
        """
        Yield (column, value, kind) for every failing check in a row.

        Columns are visited in header order and checks in rule order.
        """
        for column, value in zip(headers, row):
            checks = ruleset.checks_for(column)
            if not checks:
                continue
            for kind in self.failures(value, checks):
                yield column, value, kind
