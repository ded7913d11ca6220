"""Default configuration parameters for the FD pricing engine."""

from dataclasses import dataclass, field
from decimal import Decimal


def _default_bonus_rates() -> dict[str, Decimal]:
    return {
        "SENIOR_CITIZEN": Decimal("1.00"),
        "EMPLOYEE": Decimal("1.50"),
        "SILVER": Decimal("0.50"),
        "GOLD": Decimal("1.00"),
        "PLATINUM": Decimal("1.50"),
        "PREMIUM": Decimal("0.75"),
    }


@dataclass(frozen=True)
class RateParams:
    """Rate resolution parameters."""
    additional_rate_cap: Decimal = Decimal("2.00")   # Ceiling on summed bonuses
    max_classifications: int = 2                     # Unique classifications considered
    rate_places: int = 2                             # Rounding of the capped bonus


@dataclass(frozen=True)
class CompoundingParams:
    """Compound interest parameters."""
    precision: int = 20                              # Significant digits for (1 + r/n)
    money_places: int = 2
    default_frequency: str = "quarterly"
    default_tenure_unit: str = "months"


@dataclass(frozen=True)
class TaxParams:
    """Tax withholding parameters."""
    default_tds_rate: Decimal = Decimal("0")


@dataclass(frozen=True)
class StandaloneParams:
    """Classification bonuses used when the caller supplies the base rate."""
    bonus_rates: dict[str, Decimal] = field(default_factory=_default_bonus_rates)


@dataclass(frozen=True)
class CacheParams:
    """Rate matrix cache parameters."""
    ttl_seconds: float = 3600.0
    max_entries: int = 1000


@dataclass(frozen=True)
class ComparisonParams:
    """Multi-scenario comparison parameters."""
    parallel: bool = False
    max_workers: int = 4


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    rates: RateParams
    compounding: CompoundingParams
    tax: TaxParams
    standalone: StandaloneParams
    cache: CacheParams
    comparison: ComparisonParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        rates=RateParams(),
        compounding=CompoundingParams(),
        tax=TaxParams(),
        standalone=StandaloneParams(),
        cache=CacheParams(),
        comparison=ComparisonParams(),
    )
