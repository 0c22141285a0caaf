"""Error types raised while converting a CSV export into OFX."""

from __future__ import annotations

from typing import Optional


class ConversionError(Exception):
    """Base class for every failure that aborts a conversion run."""


class InputIOError(ConversionError):
    """The input file is missing or cannot be read."""


class OutputIOError(ConversionError):
    """The destination file cannot be written."""


class ConfigError(ConversionError, ValueError):
    """A configuration file or override is malformed."""


class EmptyInputError(ConversionError, ValueError):
    """No transactions were found, so a statement range cannot be computed."""


class ParseError(ConversionError, ValueError):
    """A cell value failed its field coercion."""

    def __init__(self, row: Optional[int], field: str, value: object, reason: str = ""):
        self.row = row
        self.field = field
        self.value = value
        where = f"row {row}" if row is not None else "input"
        message = f"{where}: cannot parse {field} from {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MissingFieldError(ConversionError, ValueError):
    """A mapped column is absent from the header or from a data row."""

    def __init__(self, column: str, row: Optional[int] = None):
        self.column = column
        self.row = row
        if row is None:
            message = f"column {column!r} not found in CSV header"
        else:
            message = f"row {row}: missing value for column {column!r}"
        super().__init__(message)


__all__ = [
    "ConversionError",
    "InputIOError",
    "OutputIOError",
    "ConfigError",
    "EmptyInputError",
    "ParseError",
    "MissingFieldError",
]
