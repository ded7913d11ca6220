"""
Rate matrix resolution.

Finds the base rate for a deposit and the capped sum of classification
bonuses by scanning an ordered rate matrix. The scan is linear and
first-match-wins; slab order is the caller's and is never changed.
"""

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..config.defaults import DefaultConfig, RateParams
from ..logging.config import get_rate_logger, log_rate_decision
from ..utils.numbers import round_rate
from .models import RateQuery, RateSlab, ResolvedRate

ZERO = Decimal("0")


def unique_classifications(classifications: Optional[Iterable[str]], limit: int) -> tuple[str, ...]:
    """
    Deduplicate classifications keeping first occurrences, then keep `limit`.

    ["GOLD", "GOLD", "SILVER", "PLATINUM"] with limit 2 -> ("GOLD", "SILVER")
    """
    if not classifications:
        return ()
    return tuple(dict.fromkeys(classifications))[:limit]


def cap_additional_rate(total: Decimal, cap: Decimal, places: int = 2) -> Decimal:
    """Clamp a summed bonus to the cap and round half-up."""
    if total > cap:
        total = cap
    return round_rate(total, places)


class RateMatrixResolver:
    """Resolves base and additional rates from an ordered rate matrix."""

    def __init__(self, params: Optional[RateParams] = None):
        self.params = params or RateParams()
        self.rate_logger = get_rate_logger(__name__)

    @classmethod
    def from_config(cls, config: DefaultConfig) -> "RateMatrixResolver":
        return cls(params=config.rates)

    def resolve_base_rate(self, matrix: Sequence[RateSlab], principal: Decimal,
                          tenure_months: int) -> Decimal:
        """
        Base rate of the first unconditional slab covering the deposit.

        Both ranges are inclusive at each end. Returns 0 when nothing
        matches; falling back to a product default is the caller's job.
        """
        for index, slab in enumerate(matrix):
            if slab.is_unconditional and slab.matches(principal, tenure_months):
                log_rate_decision(
                    self.rate_logger, "base_rate", True,
                    reason="unconditional slab covers amount and tenure",
                    context={"slab_index": index, "rate": str(slab.base_rate)},
                )
                return slab.base_rate

        log_rate_decision(
            self.rate_logger, "base_rate", False,
            reason="no unconditional slab covers amount and tenure",
            context={"principal": str(principal), "tenure_months": tenure_months,
                     "slab_count": len(matrix)},
        )
        return ZERO

    def resolve_additional_rate(self, matrix: Sequence[RateSlab],
                                classifications: Optional[Iterable[str]]) -> Decimal:
        """
        Capped, rounded sum of bonuses for the requested classifications.

        Only the first unique classifications up to the configured limit are
        considered, each contributing the bonus of the first slab carrying
        its label. Unknown labels contribute nothing.
        """
        total, _, _ = self._collect_bonuses(matrix, classifications)
        return self._cap(total)

    def resolve(self, matrix: Sequence[RateSlab], query: RateQuery) -> ResolvedRate:
        """Resolve both rates for a query."""
        base_rate = self.resolve_base_rate(matrix, query.principal, query.tenure_months)
        total, matched, unmatched = self._collect_bonuses(matrix, query.classifications)

        return ResolvedRate(
            base_rate=base_rate,
            additional_rate=self._cap(total),
            matched_classifications=matched,
            unmatched_classifications=unmatched,
        )

    def _collect_bonuses(self, matrix: Sequence[RateSlab],
                         classifications: Optional[Iterable[str]]
                         ) -> tuple[Decimal, tuple[str, ...], tuple[str, ...]]:
        total = ZERO
        matched: list[str] = []
        unmatched: list[str] = []

        for classification in unique_classifications(classifications, self.params.max_classifications):
            slab = next((s for s in matrix if s.classification == classification), None)
            if slab is None:
                unmatched.append(classification)
                log_rate_decision(
                    self.rate_logger, "classification", False,
                    reason="no slab carries this classification",
                    context={"classification": classification},
                )
                continue

            total += slab.additional_rate
            matched.append(classification)
            log_rate_decision(
                self.rate_logger, "classification", True,
                reason="classification bonus applied",
                context={"classification": classification, "rate": str(slab.additional_rate)},
            )

        return total, tuple(matched), tuple(unmatched)

    def _cap(self, total: Decimal) -> Decimal:
        cap = self.params.additional_rate_cap
        if total > cap:
            self.rate_logger.info("Additional rate exceeds cap, applying cap",
                                  total=str(total), cap=str(cap))
        return cap_additional_rate(total, cap, self.params.rate_places)
