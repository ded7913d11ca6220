"""
Quote request and result models.

Requests may be built directly or from a camelCase/snake_case payload;
results serialise to plain mappings for an outer layer to render.
"""

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from ..errors import InvalidInputError
from ..interest.models import CompoundingFrequency, MonthlyEntry, TenureUnit

# Canonical field -> accepted payload keys
REQUEST_ALIASES = {
    "principal": ("principal", "principalAmount", "principal_amount"),
    "tenure": ("tenure",),
    "tenure_unit": ("tenure_unit", "tenureUnit"),
    "compounding_frequency": ("compounding_frequency", "compoundingFrequency"),
    "tds_rate": ("tds_rate", "tdsRate"),
    "classifications": ("classifications", "customer_classifications", "customerClassifications"),
    "interest_rate": ("interest_rate", "interestRate"),
    "start_date": ("start_date", "startDate"),
    "product_id": ("product_id", "productId"),
}


@dataclass(frozen=True)
class QuoteRequest:
    """
    One deposit to be priced.

    Fields left as None are filled from configuration defaults when the
    request is normalized. Setting interest_rate selects manual pricing.
    """
    principal: Any
    tenure: Any
    tenure_unit: Any = None
    compounding_frequency: Any = None
    tds_rate: Any = None
    classifications: tuple[str, ...] = ()
    interest_rate: Any = None
    start_date: Optional[date] = None
    product_id: Optional[Any] = None

    @property
    def tenure_months(self) -> int:
        """Tenure in months; valid only on a normalized request."""
        return TenureUnit.parse(self.tenure_unit or TenureUnit.MONTHS).to_months(self.tenure)

    @property
    def is_manual_rate(self) -> bool:
        return self.interest_rate is not None

    def with_principal(self, principal: Any) -> "QuoteRequest":
        return replace(self, principal=principal)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "QuoteRequest":
        """Build a request from a wire payload; values are validated on normalize."""
        values = {}
        for field_name, keys in REQUEST_ALIASES.items():
            for key in keys:
                if key in payload:
                    values[field_name] = payload[key]
                    break

        if values.get("classifications") is None:
            values["classifications"] = ()
        else:
            values["classifications"] = tuple(values["classifications"])

        raw_start = values.get("start_date")
        if isinstance(raw_start, str):
            try:
                values["start_date"] = date.fromisoformat(raw_start)
            except ValueError:
                raise InvalidInputError(
                    f"Start date must be an ISO date (YYYY-MM-DD), got {raw_start!r}",
                    field="start_date",
                    value=raw_start,
                )

        values.setdefault("principal", None)
        values.setdefault("tenure", None)
        return cls(**values)


@dataclass(frozen=True)
class QuoteResult:
    """Complete pricing of one deposit."""
    principal: Decimal
    base_rate: Decimal
    additional_rate: Decimal
    final_rate: Decimal
    tenure: int
    tenure_unit: TenureUnit
    tenure_months: int
    compounding_frequency: CompoundingFrequency
    interest_earned: Decimal
    tds_rate: Decimal
    tds_amount: Decimal
    net_interest: Decimal
    maturity_before_tax: Decimal
    maturity_amount: Decimal              # After TDS
    apy: Decimal
    start_date: date
    maturity_date: date
    classifications: tuple[str, ...] = ()
    monthly_breakdown: tuple[MonthlyEntry, ...] = ()
    product_id: Optional[Any] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "principal": str(self.principal),
            "base_rate": str(self.base_rate),
            "additional_rate": str(self.additional_rate),
            "final_rate": str(self.final_rate),
            "tenure": self.tenure,
            "tenure_unit": self.tenure_unit.value,
            "tenure_months": self.tenure_months,
            "compounding_frequency": self.compounding_frequency.value,
            "interest_earned": str(self.interest_earned),
            "tds_rate": str(self.tds_rate),
            "tds_amount": str(self.tds_amount),
            "net_interest": str(self.net_interest),
            "maturity_before_tax": str(self.maturity_before_tax),
            "maturity_amount": str(self.maturity_amount),
            "apy": str(self.apy),
            "start_date": self.start_date.isoformat(),
            "maturity_date": self.maturity_date.isoformat(),
            "classifications": list(self.classifications),
            "product_id": self.product_id,
            "monthly_breakdown": [entry.to_dict() for entry in self.monthly_breakdown],
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Quotes for several scenarios, in input order, with the best one marked."""
    results: tuple[QuoteResult, ...]
    best_index: int

    @property
    def best(self) -> QuoteResult:
        return self.results[self.best_index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenarios": [result.to_dict() for result in self.results],
            "best_scenario_index": self.best_index,
            "best_scenario": self.best.to_dict(),
        }
