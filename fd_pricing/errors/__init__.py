"""
Error classification for rate resolution and deposit calculations.

This module provides the exception hierarchy for invalid caller input and for
failures that prevent a quote from being produced.
"""

from .input_errors import (
    InputError,
    InvalidInputError,
    UnknownFrequencyError,
    MalformedRateRowError,
)
from .calculation_failures import (
    CalculationFailureError,
    RateResolutionError,
    ComputationError,
    RateSourceError,
    ConfigurationError,
)

__all__ = [
    # Input Errors
    "InputError",
    "InvalidInputError",
    "UnknownFrequencyError",
    "MalformedRateRowError",
    # Calculation Failures
    "CalculationFailureError",
    "RateResolutionError",
    "ComputationError",
    "RateSourceError",
    "ConfigurationError",
]
