"""
Exception taxonomy.

Every error here is raised while a processor is being constructed.
Once a processor exists, its operations return values and never raise.
"""


class CsvCheckError(Exception):
    """Base class for all csvcheck errors."""


class RuleDefinitionError(CsvCheckError):
    """The rule definition text could not be parsed into a RuleSet."""


class TableError(CsvCheckError):
    """The CSV text could not be read into a Table."""


class TableHeaderError(TableError):
    """The header row is missing or unreadable."""


class TableRecordError(TableError):
    """A data row is unreadable or has the wrong number of fields.

    Attributes:
        line: 1-based line number of the offending record, when known.
    """

    def __init__(self, message: str, line=None):
        super().__init__(message)
        self.line = line
