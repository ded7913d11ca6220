"""
Calculation failure classifications.

These exceptions represent conditions under which a quote cannot be produced
without misleading the caller, such as a missing rate or a broken rate source.
"""

from decimal import Decimal
from typing import Optional, Dict, Any


class CalculationFailureError(Exception):
    """Base class for failures that prevent a quote from being produced."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class RateResolutionError(CalculationFailureError):
    """No base rate matched the deposit and no fallback rate was supplied."""

    def __init__(self, message: str, principal: Optional[Decimal] = None,
                 tenure_months: Optional[int] = None,
                 product_id: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.principal = principal
        self.tenure_months = tenure_months
        self.product_id = product_id


class ComputationError(CalculationFailureError):
    """Unexpected arithmetic failure while computing a quote."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 calculation_input: Optional[Dict[str, Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.calculation_input = calculation_input


class RateSourceError(CalculationFailureError):
    """Fetching a rate matrix from its source failed."""

    def __init__(self, message: str, source_key: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source_key = source_key


class ConfigurationError(CalculationFailureError):
    """Merged configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
