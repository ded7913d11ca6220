"""
Quote request validation and normalization.

Coerces caller values to Decimal/int/enums, fills configured defaults and
rejects anything that cannot be priced. Validation failures are always
raised to the caller.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional

from ..config.defaults import CompoundingParams, DefaultConfig, TaxParams
from ..errors import InvalidInputError
from ..interest.models import CompoundingFrequency, TenureUnit
from ..utils.numbers import to_decimal
from .models import QuoteRequest


def _to_positive_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise InvalidInputError(f"{field} must be a whole number", field=field, value=value)
    number = to_decimal(value, field=field)
    if number != number.to_integral_value():
        raise InvalidInputError(f"{field} must be a whole number", field=field, value=value)
    if number <= 0:
        raise InvalidInputError(f"{field} must be positive", field=field, value=value)
    return int(number)


class QuoteRequestValidator:
    """Validates quote requests and applies configured defaults."""

    def __init__(self, compounding: Optional[CompoundingParams] = None,
                 tax: Optional[TaxParams] = None):
        self.compounding = compounding or CompoundingParams()
        self.tax = tax or TaxParams()

    @classmethod
    def from_config(cls, config: DefaultConfig) -> "QuoteRequestValidator":
        return cls(compounding=config.compounding, tax=config.tax)

    def normalize(self, request: QuoteRequest) -> QuoteRequest:
        """
        Return a copy of the request with typed values and defaults applied.

        Raises:
            InvalidInputError: On non-positive principal or tenure, negative
                or out-of-range rates, or an unknown tenure unit
            UnknownFrequencyError: On an unsupported compounding frequency
        """
        principal = to_decimal(request.principal, field="principal")
        if principal <= 0:
            raise InvalidInputError("Principal must be positive", field="principal", value=request.principal)

        tenure = _to_positive_int(request.tenure, "tenure")

        tenure_unit = TenureUnit.parse(
            request.tenure_unit if request.tenure_unit is not None else self.compounding.default_tenure_unit
        )
        frequency = CompoundingFrequency.parse(
            request.compounding_frequency if request.compounding_frequency is not None
            else self.compounding.default_frequency
        )

        tds_rate = (to_decimal(request.tds_rate, field="tds_rate")
                    if request.tds_rate is not None else self.tax.default_tds_rate)
        if tds_rate < 0 or tds_rate > 100:
            raise InvalidInputError("TDS rate must be between 0 and 100", field="tds_rate", value=request.tds_rate)

        interest_rate: Optional[Decimal] = None
        if request.interest_rate is not None:
            interest_rate = to_decimal(request.interest_rate, field="interest_rate")
            if interest_rate < 0:
                raise InvalidInputError("Interest rate cannot be negative",
                                        field="interest_rate", value=request.interest_rate)

        classifications = tuple(
            str(label).strip() for label in request.classifications or () if str(label).strip()
        )

        return replace(
            request,
            principal=principal,
            tenure=tenure,
            tenure_unit=tenure_unit,
            compounding_frequency=frequency,
            tds_rate=tds_rate,
            interest_rate=interest_rate,
            classifications=classifications,
        )
