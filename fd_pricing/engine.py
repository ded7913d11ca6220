"""
Main quote orchestrator.

Sequences rate resolution and compound interest calculation for a single
deposit, for a catalog product, and for best-of-N scenario comparison.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .errors import (
    CalculationFailureError,
    ComputationError,
    InputError,
    InvalidInputError,
    RateResolutionError,
    RateSourceError,
)
from .interest.compounding import CompoundInterestEngine
from .interest.models import CompoundingSpec
from .quote.models import ComparisonResult, QuoteRequest, QuoteResult
from .quote.validators import QuoteRequestValidator
from .rates.cache import RateMatrixCache
from .rates.models import RateQuery
from .rates.parsers import parse_rate_matrix
from .rates.resolver import RateMatrixResolver
from .rates.standalone import StandaloneRateTable
from .utils.dates import maturity_date, resolve_start_date
from .utils.numbers import to_decimal

logger = structlog.get_logger(__name__)


class QuoteOrchestrator:
    """
    Coordinator for fixed deposit pricing.

    Manages the quote pipeline:
    Request → Validation → Rate Resolution → Cap → Compounding → Result
    """

    def __init__(
        self,
        config: Optional[DefaultConfig] = None,
        resolver: Optional[RateMatrixResolver] = None,
        engine: Optional[CompoundInterestEngine] = None,
        standalone_table: Optional[StandaloneRateTable] = None,
        matrix_cache: Optional[RateMatrixCache] = None,
        config_loader: Optional[ConfigLoader] = None,
    ) -> None:
        """Initialize the orchestrator from configuration."""
        self.config = config or get_default_config()
        self.logger = logger

        self.validator = QuoteRequestValidator.from_config(self.config)
        self.resolver = resolver or RateMatrixResolver.from_config(self.config)
        self.engine = engine or CompoundInterestEngine(
            precision=self.config.compounding.precision,
            money_places=self.config.compounding.money_places,
        )
        self.standalone_table = standalone_table or StandaloneRateTable.from_config(self.config)
        self.matrix_cache = matrix_cache
        self.config_loader = config_loader

    @classmethod
    def create(cls, config_dir: Optional[Path] = None, with_cache: bool = True) -> "QuoteOrchestrator":
        """Build an orchestrator from YAML configuration, with a matrix cache."""
        loader = ConfigLoader.create(config_dir)
        config = loader.load_config()
        cache = RateMatrixCache.from_config(config) if with_cache else None
        return cls(config=config, matrix_cache=cache, config_loader=loader)

    def quote(
        self,
        request: QuoteRequest,
        matrix: Optional[Sequence[Any]] = None,
        default_rate: Optional[Any] = None,
    ) -> QuoteResult:
        """
        Price a single deposit.

        A request carrying interest_rate is priced manually: that rate is the
        base and bonuses come from the standalone table. Otherwise the base
        and bonuses are resolved from `matrix`, with `default_rate` used when
        no unconditional slab matches.

        Args:
            request: Deposit to price
            matrix: Rate matrix as RateSlab values or catalog rows
            default_rate: Product-level fallback base rate

        Returns:
            QuoteResult with rates, maturity, tax, APY and monthly breakdown

        Raises:
            InvalidInputError: If the request cannot be priced
            RateResolutionError: If no base rate matches and there is no fallback
            ComputationError: On an unexpected arithmetic failure
        """
        return self._price(request, matrix, default_rate, self.resolver, self.standalone_table)

    def _price(
        self,
        request: QuoteRequest,
        matrix: Optional[Sequence[Any]],
        default_rate: Optional[Any],
        resolver: RateMatrixResolver,
        standalone_table: StandaloneRateTable,
    ) -> QuoteResult:
        normalized = self.validator.normalize(request)
        base_rate, additional_rate = self._resolve_rates(
            normalized, matrix, default_rate, resolver, standalone_table
        )

        try:
            result = self._assemble(normalized, base_rate, additional_rate)
        except (InputError, CalculationFailureError):
            raise
        except Exception as e:
            raise ComputationError(
                f"Quote calculation failed: {e}",
                operation="quote",
                calculation_input={
                    "principal": str(normalized.principal),
                    "tenure_months": normalized.tenure_months,
                    "annual_rate": str(base_rate + additional_rate),
                },
            )

        self.logger.info(
            "Quote calculated",
            product_id=normalized.product_id,
            principal=str(result.principal),
            final_rate=str(result.final_rate),
            maturity_amount=str(result.maturity_amount),
            apy=str(result.apy),
        )
        return result

    def quote_product(
        self,
        product_id: Any,
        request: QuoteRequest,
        fetch_matrix: Callable[[Any], Any],
        default_rate: Optional[Any] = None,
    ) -> QuoteResult:
        """
        Price a deposit against a catalog product's rate matrix.

        The matrix is read through the configured cache when there is one,
        otherwise fetched directly. With a config loader, the product's
        compounding and tax defaults fill the request, its rate and bonus
        table settings price it, and its configured default_rate is the
        fallback.

        Raises:
            RateSourceError: If the matrix cannot be fetched
            ConfigurationError: If the product's configuration is invalid
        """
        matrix = self._load_matrix(product_id, fetch_matrix)
        request = replace(request, product_id=product_id)

        if self.config_loader is None:
            return self.quote(request, matrix, default_rate)

        product_config = self.config_loader.load_config(product_id)
        request = QuoteRequestValidator.from_config(product_config).normalize(request)
        if default_rate is None:
            default_rate = self.config_loader.product_default_rate(product_id)

        return self._price(
            request,
            matrix,
            default_rate,
            RateMatrixResolver.from_config(product_config),
            StandaloneRateTable.from_config(product_config),
        )

    def compare(
        self,
        scenarios: Sequence[QuoteRequest],
        common_principal: Optional[Any] = None,
        matrix: Optional[Sequence[Any]] = None,
        default_rate: Optional[Any] = None,
    ) -> ComparisonResult:
        """
        Price several scenarios and pick the one with the highest maturity.

        The first scenario with the strictly greatest maturity amount wins;
        later ties do not replace it. Results keep input order whether or not
        they were computed in parallel.

        Args:
            scenarios: Requests to compare
            common_principal: Principal applied to every scenario, if given
            matrix: Rate matrix shared by matrix-priced scenarios
            default_rate: Fallback base rate shared by matrix-priced scenarios
        """
        if not scenarios:
            raise InvalidInputError("At least one scenario is required", field="scenarios", value=scenarios)

        requests = [
            scenario.with_principal(common_principal) if common_principal is not None else scenario
            for scenario in scenarios
        ]
        if matrix is not None:
            matrix = parse_rate_matrix(matrix)

        self.logger.info("Comparing deposit scenarios", count=len(requests))

        def run(request: QuoteRequest) -> QuoteResult:
            return self.quote(request, matrix, default_rate)

        params = self.config.comparison
        if params.parallel and len(requests) > 1:
            with ThreadPoolExecutor(max_workers=params.max_workers) as executor:
                results = list(executor.map(run, requests))
        else:
            results = [run(request) for request in requests]

        best_index = 0
        for index, result in enumerate(results):
            if result.maturity_amount > results[best_index].maturity_amount:
                best_index = index

        self.logger.info(
            "Scenario comparison complete",
            best_index=best_index,
            best_maturity=str(results[best_index].maturity_amount),
        )
        return ComparisonResult(results=tuple(results), best_index=best_index)

    def _resolve_rates(
        self,
        request: QuoteRequest,
        matrix: Optional[Sequence[Any]],
        default_rate: Optional[Any],
        resolver: RateMatrixResolver,
        standalone_table: StandaloneRateTable,
    ) -> tuple[Decimal, Decimal]:
        """Base and capped additional rate for a normalized request."""
        if request.is_manual_rate:
            additional_rate = standalone_table.additional_rate(request.classifications)
            self.logger.debug(
                "Using manual base rate",
                base_rate=str(request.interest_rate),
                additional_rate=str(additional_rate),
            )
            return request.interest_rate, additional_rate

        fallback = to_decimal(default_rate, field="default_rate") if default_rate is not None else None
        if fallback is not None and fallback < 0:
            raise InvalidInputError("Default rate cannot be negative", field="default_rate", value=default_rate)

        if matrix is None and fallback is None:
            raise RateResolutionError(
                "No rate matrix, manual rate or default rate supplied",
                principal=request.principal,
                tenure_months=request.tenure_months,
                product_id=request.product_id,
            )

        slabs = parse_rate_matrix(matrix) if matrix is not None else ()
        resolved = resolver.resolve(
            slabs,
            RateQuery(
                principal=request.principal,
                tenure_months=request.tenure_months,
                classifications=request.classifications,
            ),
        )

        base_rate = resolved.base_rate
        if not resolved.has_base_rate:
            if fallback is None:
                raise RateResolutionError(
                    f"No base rate found for principal {request.principal} and "
                    f"tenure {request.tenure_months} months, and no default rate supplied",
                    principal=request.principal,
                    tenure_months=request.tenure_months,
                    product_id=request.product_id,
                )
            self.logger.warning(
                "No matching base rate, falling back to default rate",
                product_id=request.product_id,
                default_rate=str(fallback),
            )
            base_rate = fallback

        return base_rate, resolved.additional_rate

    def _assemble(self, request: QuoteRequest, base_rate: Decimal,
                  additional_rate: Decimal) -> QuoteResult:
        start = resolve_start_date(request.start_date)
        tenure_months = request.tenure_months
        frequency = request.compounding_frequency
        final_rate = base_rate + additional_rate

        outcome = self.engine.calculate(
            CompoundingSpec(
                annual_rate=final_rate,
                tenure_months=tenure_months,
                periods_per_year=frequency.periods_per_year,
                tds_rate=request.tds_rate,
            ),
            request.principal,
            start,
        )

        return QuoteResult(
            principal=request.principal,
            base_rate=base_rate,
            additional_rate=additional_rate,
            final_rate=final_rate,
            tenure=request.tenure,
            tenure_unit=request.tenure_unit,
            tenure_months=tenure_months,
            compounding_frequency=frequency,
            interest_earned=outcome.interest_earned,
            tds_rate=request.tds_rate,
            tds_amount=outcome.tds_amount,
            net_interest=outcome.net_interest,
            maturity_before_tax=outcome.maturity_before_tax,
            maturity_amount=outcome.maturity_after_tax,
            apy=outcome.apy,
            start_date=start,
            maturity_date=maturity_date(start, tenure_months),
            classifications=request.classifications,
            monthly_breakdown=outcome.monthly_breakdown,
            product_id=request.product_id,
        )

    def _load_matrix(self, product_id: Any, fetch_matrix: Callable[[Any], Any]) -> tuple:
        if self.matrix_cache is not None:
            return self.matrix_cache.get_or_fetch(product_id, lambda: fetch_matrix(product_id))

        try:
            fetched = fetch_matrix(product_id)
        except Exception as e:
            self.logger.error("Rate matrix fetch failed", product_id=product_id, error=str(e))
            raise RateSourceError(f"Failed to fetch rate matrix for {product_id!r}: {e}", source_key=product_id)

        if fetched is None:
            raise RateSourceError(f"Rate source returned no matrix for {product_id!r}", source_key=product_id)
        return parse_rate_matrix(fetched)
