"""
Data models for compound interest calculations.

This module defines the compounding frequency and tenure unit enumerations
and the immutable values exchanged with the compounding engine.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from ..errors import InvalidInputError, UnknownFrequencyError


class CompoundingFrequency(str, Enum):
    """How often interest is capitalised into principal."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    HALF_YEARLY = "half_yearly"
    ANNUALLY = "annually"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]

    @classmethod
    def parse(cls, value: Any) -> "CompoundingFrequency":
        """
        Parse a frequency from an enum member, name or common spelling.

        Raises:
            UnknownFrequencyError: If the value names no supported frequency
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            frequency = _FREQUENCY_ALIASES.get(key)
            if frequency is not None:
                return frequency
        raise UnknownFrequencyError(f"Unknown compounding frequency: {value!r}", value=value)


_PERIODS_PER_YEAR = {
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.QUARTERLY: 4,
    CompoundingFrequency.HALF_YEARLY: 2,
    CompoundingFrequency.ANNUALLY: 1,
}

_FREQUENCY_ALIASES = {
    "monthly": CompoundingFrequency.MONTHLY,
    "quarterly": CompoundingFrequency.QUARTERLY,
    "half_yearly": CompoundingFrequency.HALF_YEARLY,
    "halfyearly": CompoundingFrequency.HALF_YEARLY,
    "semi_annually": CompoundingFrequency.HALF_YEARLY,
    "annually": CompoundingFrequency.ANNUALLY,
    "annual": CompoundingFrequency.ANNUALLY,
    "yearly": CompoundingFrequency.ANNUALLY,
}


class TenureUnit(str, Enum):
    """Unit in which a deposit tenure is expressed."""
    MONTHS = "months"
    YEARS = "years"

    def to_months(self, tenure: int) -> int:
        if self is TenureUnit.YEARS:
            return tenure * 12
        return tenure

    @classmethod
    def parse_or_none(cls, value: Any) -> Optional["TenureUnit"]:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for unit in cls:
                if key in (unit.value, unit.value.rstrip("s")):
                    return unit
        return None

    @classmethod
    def parse(cls, value: Any) -> "TenureUnit":
        """
        Parse a tenure unit ("months", "MONTHS", "year", ...).

        Raises:
            InvalidInputError: If the value is not months or years
        """
        unit = cls.parse_or_none(value)
        if unit is None:
            raise InvalidInputError(f"Unknown tenure unit: {value!r}", field="tenure_unit", value=value)
        return unit


@dataclass(frozen=True)
class CompoundingSpec:
    """Rate and schedule for one compounding calculation."""
    annual_rate: Decimal          # Percentage, base + additional
    tenure_months: int
    periods_per_year: int
    tds_rate: Decimal = Decimal("0")

    def validate(self) -> None:
        """
        Reject values the compounding formulas cannot accept.

        Raises:
            InvalidInputError: On negative rate, non-positive tenure or periods,
                or a TDS rate outside 0-100
        """
        if self.annual_rate < 0:
            raise InvalidInputError("Annual rate cannot be negative",
                                    field="annual_rate", value=self.annual_rate)
        if self.tenure_months <= 0:
            raise InvalidInputError("Tenure must be a positive number of months",
                                    field="tenure_months", value=self.tenure_months)
        if self.periods_per_year <= 0:
            raise InvalidInputError("Periods per year must be positive",
                                    field="periods_per_year", value=self.periods_per_year)
        if self.tds_rate < 0 or self.tds_rate > 100:
            raise InvalidInputError("TDS rate must be between 0 and 100",
                                    field="tds_rate", value=self.tds_rate)


@dataclass(frozen=True)
class MonthlyEntry:
    """Projected balance at the end of one month of the tenure."""
    month: int
    date: date
    opening_balance: Decimal
    interest_earned: Decimal
    closing_balance: Decimal
    cumulative_interest: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "date": self.date.isoformat(),
            "opening_balance": str(self.opening_balance),
            "interest_earned": str(self.interest_earned),
            "closing_balance": str(self.closing_balance),
            "cumulative_interest": str(self.cumulative_interest),
        }


@dataclass(frozen=True)
class CompoundingOutcome:
    """Aggregate figures for one compounding calculation."""
    maturity_before_tax: Decimal
    interest_earned: Decimal
    tds_amount: Decimal
    net_interest: Decimal
    maturity_after_tax: Decimal
    apy: Decimal
    monthly_breakdown: tuple[MonthlyEntry, ...] = ()
