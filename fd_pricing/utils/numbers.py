"""
Decimal conversion and rounding helpers.

All monetary and rate values in the engine are Decimals. These helpers are
the only place raw caller values (ints, strings, floats) are converted.
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any, Optional

from ..errors import InvalidInputError

MONEY_PLACES = 2
RATE_PRECISION = 20

# Context for intermediate rate arithmetic
RATE_CONTEXT = Context(prec=RATE_PRECISION, rounding=ROUND_HALF_UP)

# Context for money arithmetic; wide enough to keep cents on very large deposits
MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)

HUNDRED = Decimal(100)


def to_decimal(value: Any, field: Optional[str] = None) -> Decimal:
    """
    Convert a caller-supplied value to Decimal.

    Floats go through str() so 7.1 becomes Decimal("7.1") rather than its
    binary expansion.

    Args:
        value: int, str, float or Decimal
        field: Field name for error reporting

    Returns:
        Decimal value

    Raises:
        InvalidInputError: If value is None, boolean, non-numeric or not finite
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field or 'value'} must be a number", field=field, value=value)

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip()) if isinstance(value, (str, float)) else Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidInputError(
                f"{field or 'value'} is not a valid number: {value!r}", field=field, value=value
            )

    if not result.is_finite():
        raise InvalidInputError(f"{field or 'value'} must be finite", field=field, value=value)

    return result


def quantize_places(value: Decimal, places: int) -> Decimal:
    """Round to a fixed number of decimal places, half-up."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP, context=MONEY_CONTEXT)


def round_rate(value: Decimal, places: int = 2) -> Decimal:
    """Round a percentage rate, half-up."""
    return quantize_places(value, places)


def percent_to_fraction(rate: Decimal, context: Context = RATE_CONTEXT) -> Decimal:
    """Convert a percentage (7.5) to a fraction (0.075), by default in the rate context."""
    return context.divide(rate, HUNDRED)
