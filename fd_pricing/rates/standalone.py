"""
Fixed classification bonus table for manually priced deposits.

When the caller supplies the base rate directly there is no rate matrix to
look bonuses up in; this table provides them instead, under the same
deduplication, classification limit, cap and rounding rules as the resolver.
"""

from decimal import Decimal
from typing import Iterable, Mapping, Optional

from ..config.defaults import DefaultConfig, RateParams, StandaloneParams
from ..logging.config import get_rate_logger, log_rate_decision
from .resolver import cap_additional_rate, unique_classifications


class StandaloneRateTable:
    """Classification bonuses that do not depend on a rate matrix."""

    def __init__(self, bonus_rates: Optional[Mapping[str, Decimal]] = None,
                 params: Optional[RateParams] = None):
        table = bonus_rates if bonus_rates is not None else StandaloneParams().bonus_rates
        self.bonus_rates = {label.upper(): rate for label, rate in table.items()}
        self.params = params or RateParams()
        self.rate_logger = get_rate_logger(__name__)

    @classmethod
    def from_config(cls, config: DefaultConfig) -> "StandaloneRateTable":
        return cls(bonus_rates=config.standalone.bonus_rates, params=config.rates)

    def bonus_for(self, classification: str) -> Optional[Decimal]:
        """Bonus for one label, case-insensitive; None if unknown."""
        return self.bonus_rates.get(classification.strip().upper())

    def additional_rate(self, classifications: Optional[Iterable[str]]) -> Decimal:
        """Capped, rounded sum of bonuses for the given classifications."""
        labels = [c.strip().upper() for c in classifications or ()]
        total = Decimal("0")

        for label in unique_classifications(labels, self.params.max_classifications):
            rate = self.bonus_rates.get(label)
            if rate is None:
                log_rate_decision(
                    self.rate_logger, "classification", False,
                    reason="unknown classification",
                    context={"classification": label, "source": "standalone"},
                )
                continue

            total += rate
            log_rate_decision(
                self.rate_logger, "classification", True,
                reason="classification bonus applied",
                context={"classification": label, "rate": str(rate), "source": "standalone"},
            )

        cap = self.params.additional_rate_cap
        if total > cap:
            self.rate_logger.info("Additional rate exceeds cap, applying cap",
                                  total=str(total), cap=str(cap))
        return cap_additional_rate(total, cap, self.params.rate_places)
