"""
Input error classifications for deposit quote requests and rate data.

These exceptions are always surfaced to the caller; the engine never
substitutes a default for a value it was asked to validate.
"""

from typing import Optional, Dict, Any


class InputError(Exception):
    """Base class for caller-supplied data that cannot be priced."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class InvalidInputError(InputError):
    """A request field is missing, non-positive or out of range."""

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field = field
        self.value = value


class UnknownFrequencyError(InvalidInputError):
    """Compounding frequency is not one of the supported values."""

    def __init__(self, message: str, value: Any = None, **kwargs):
        super().__init__(message, field="compounding_frequency", value=value, **kwargs)


class MalformedRateRowError(InvalidInputError):
    """A rate matrix row is missing a field or holds an unparseable value."""

    def __init__(self, message: str, field: Optional[str] = None,
                 row_index: Optional[int] = None, value: Any = None, **kwargs):
        super().__init__(message, field=field, value=value, **kwargs)
        self.row_index = row_index
