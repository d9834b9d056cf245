"""
Custom exceptions for table validation.

Structural problems (unknown columns, malformed tables, bad rule
configuration) raise one of these. Rows that fail a constraint never
raise; they are reported as diagnostics.
"""


class TableValidationException(Exception):
    """Base exception for table validation."""
    pass


class ColumnNotFoundException(TableValidationException, KeyError):
    """Exception raised when a column name is not present in the header."""

    def __init__(self, message: str, column: str = None):
        super().__init__(message)
        self.column = column

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class MalformedInputException(TableValidationException):
    """Exception raised when the table shape is not usable."""

    def __init__(self, message: str, row_number: int = None):
        super().__init__(message)
        self.row_number = row_number


class ConfigurationException(TableValidationException):
    """Exception raised for rule or validator configuration errors."""
    pass
