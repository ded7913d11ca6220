"""
Parsers for rate matrix rows returned by a product catalog.

This module converts catalog rows (camelCase JSON objects, optionally wrapped
in a {"data": [...]} envelope) into RateSlab values, preserving row order.
"""

import json
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence, Union

from ..errors import InvalidInputError, MalformedRateRowError
from ..utils.numbers import to_decimal
from .models import RateSlab

# Canonical field -> accepted keys, first present wins
FIELD_ALIASES = {
    "min_amount": ("minAmount", "min_amount"),
    "max_amount": ("maxAmount", "max_amount"),
    "min_term_months": ("minTermMonths", "min_term_months"),
    "max_term_months": ("maxTermMonths", "max_term_months"),
    "classification": ("customerClassification", "customer_classification", "classification"),
    "base_rate": ("interestRate", "interest_rate", "base_rate"),
    "additional_rate": ("additionalRate", "additional_rate"),
    "effective_from": ("effectiveFrom", "effectiveDate", "effective_from", "effective_date"),
    "effective_to": ("effectiveTo", "endDate", "effective_to", "end_date"),
}

REQUIRED_FIELDS = ("min_amount", "max_amount", "min_term_months", "max_term_months")


def _lookup(row: dict[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in row:
            return row[key]
    return None


def _parse_decimal(row: dict[str, Any], field: str, index: int) -> Optional[Decimal]:
    value = _lookup(row, field)
    if value is None:
        return None
    try:
        return to_decimal(value, field=field)
    except InvalidInputError:
        raise MalformedRateRowError(
            f"Row {index}: {field} is not a number: {value!r}",
            field=field, row_index=index, value=value
        )


def _parse_months(row: dict[str, Any], field: str, index: int) -> int:
    value = _parse_decimal(row, field, index)
    if value is None or value != value.to_integral_value():
        raise MalformedRateRowError(
            f"Row {index}: {field} must be a whole number of months",
            field=field, row_index=index, value=_lookup(row, field)
        )
    return int(value)


def _parse_date(row: dict[str, Any], field: str, index: int) -> Optional[date]:
    value = _lookup(row, field)
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise MalformedRateRowError(
            f"Row {index}: {field} is not an ISO date: {value!r}",
            field=field, row_index=index, value=value
        )


def parse_rate_row(row: dict[str, Any], index: int = 0) -> RateSlab:
    """
    Parse one catalog row into a RateSlab.

    Args:
        row: Catalog row mapping
        index: Position of the row in its matrix, for error reporting

    Returns:
        Parsed RateSlab

    Raises:
        MalformedRateRowError: If a required field is missing or unparseable,
            or the row violates slab invariants
    """
    if not isinstance(row, dict):
        raise MalformedRateRowError(f"Row {index} is not an object", row_index=index, value=row)

    for field in REQUIRED_FIELDS:
        if _lookup(row, field) is None:
            raise MalformedRateRowError(
                f"Row {index}: missing required field {field}", field=field, row_index=index
            )

    classification = _lookup(row, "classification")
    if classification is not None:
        classification = str(classification).strip() or None

    additional_rate = _parse_decimal(row, "additional_rate", index)

    try:
        return RateSlab(
            min_amount=_parse_decimal(row, "min_amount", index),
            max_amount=_parse_decimal(row, "max_amount", index),
            min_term_months=_parse_months(row, "min_term_months", index),
            max_term_months=_parse_months(row, "max_term_months", index),
            classification=classification,
            base_rate=_parse_decimal(row, "base_rate", index),
            additional_rate=additional_rate if additional_rate is not None else Decimal("0"),
            effective_from=_parse_date(row, "effective_from", index),
            effective_to=_parse_date(row, "effective_to", index),
        )
    except MalformedRateRowError:
        raise
    except InvalidInputError as e:
        raise MalformedRateRowError(
            f"Row {index}: {e}", field=e.field, row_index=index, value=e.value
        )


def extract_rate_rows(payload: Union[str, bytes, dict[str, Any], Sequence[Any]]) -> list[Any]:
    """
    Pull the row list out of a catalog payload.

    Accepts a list of rows, an API envelope {"data": [...]}, or a JSON
    string of either. JSON numbers are read as Decimal.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload, parse_float=Decimal)
        except (ValueError, TypeError) as e:
            raise MalformedRateRowError(f"Rate matrix payload is not valid JSON: {e}")

    if isinstance(payload, dict):
        payload = payload.get("data")

    if not isinstance(payload, (list, tuple)):
        raise MalformedRateRowError("Rate matrix payload has no row array", field="data")

    return list(payload)


def parse_rate_matrix(payload: Union[str, bytes, dict[str, Any], Sequence[Any]]) -> tuple[RateSlab, ...]:
    """Parse a catalog payload into an ordered, immutable rate matrix."""
    if isinstance(payload, (list, tuple)) and all(isinstance(row, RateSlab) for row in payload):
        return tuple(payload)

    rows = extract_rate_rows(payload)
    return tuple(parse_rate_row(row, index) for index, row in enumerate(rows))
