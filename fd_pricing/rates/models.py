"""
Rate matrix data models.

This module defines the immutable rows of a rate matrix and the query and
result values exchanged with the rate resolver.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..errors import InvalidInputError


@dataclass(frozen=True)
class RateSlab:
    """One row of a rate matrix."""
    min_amount: Decimal                        # Inclusive
    max_amount: Decimal                        # Inclusive
    min_term_months: int                       # Inclusive
    max_term_months: int                       # Inclusive
    classification: Optional[str] = None       # None for the unconditional base slab
    base_rate: Optional[Decimal] = None        # Percent, required for base slabs
    additional_rate: Decimal = Decimal("0")    # Percent bonus for classified slabs
    effective_from: Optional[date] = None      # Informational only
    effective_to: Optional[date] = None

    def __post_init__(self) -> None:
        if self.min_amount <= 0:
            raise InvalidInputError("Slab minimum amount must be positive",
                                    field="min_amount", value=self.min_amount)
        if self.max_amount <= self.min_amount:
            raise InvalidInputError("Slab maximum amount must exceed minimum amount",
                                    field="max_amount", value=self.max_amount)
        if self.max_term_months <= self.min_term_months:
            raise InvalidInputError("Slab maximum term must exceed minimum term",
                                    field="max_term_months", value=self.max_term_months)
        if self.classification is None and self.base_rate is None:
            raise InvalidInputError("Unconditional slab requires a base rate", field="base_rate")

    @property
    def is_unconditional(self) -> bool:
        return self.classification is None

    def covers_amount(self, principal: Decimal) -> bool:
        return self.min_amount <= principal <= self.max_amount

    def covers_tenure(self, tenure_months: int) -> bool:
        return self.min_term_months <= tenure_months <= self.max_term_months

    def matches(self, principal: Decimal, tenure_months: int) -> bool:
        """True if both principal and tenure fall inside this slab."""
        return self.covers_amount(principal) and self.covers_tenure(tenure_months)

    def is_effective_on(self, day: date) -> bool:
        """Whether the slab's validity window contains `day`; open ends always match."""
        if self.effective_from is not None and day < self.effective_from:
            return False
        if self.effective_to is not None and day > self.effective_to:
            return False
        return True


@dataclass(frozen=True)
class RateQuery:
    """Deposit parameters a rate is resolved for."""
    principal: Decimal
    tenure_months: int
    classifications: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.principal <= 0:
            raise InvalidInputError("Principal must be positive", field="principal", value=self.principal)
        if self.tenure_months <= 0:
            raise InvalidInputError("Tenure must be a positive number of months",
                                    field="tenure_months", value=self.tenure_months)
        # Accept any sequence from callers, store a tuple
        object.__setattr__(self, "classifications", tuple(self.classifications))


@dataclass(frozen=True)
class ResolvedRate:
    """Base rate and capped additional rate for one query."""
    base_rate: Decimal
    additional_rate: Decimal
    matched_classifications: tuple[str, ...] = field(default=())
    unmatched_classifications: tuple[str, ...] = field(default=())

    @property
    def final_rate(self) -> Decimal:
        return self.base_rate + self.additional_rate

    @property
    def has_base_rate(self) -> bool:
        return self.base_rate > 0
