"""Integration tests for the full quote pipeline against shipped configuration."""

import pytest
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List
from unittest.mock import Mock

from fd_pricing.config.loader import ConfigLoader
from fd_pricing.engine import QuoteOrchestrator
from fd_pricing.interest.models import CompoundingFrequency
from fd_pricing.quote.models import QuoteRequest


@pytest.mark.integration
class TestProductQuoteFlow:
    """Integration tests for catalog product quotes."""

    def test_senior_product_defaults(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test that product compounding and tax defaults apply."""
        orchestrator = QuoteOrchestrator.create()
        request = QuoteRequest(principal=100000, tenure=12, classifications=("SENIOR_CITIZEN",),
                               start_date=date(2025, 4, 1))

        result = orchestrator.quote_product("FD-SNR-001", request, lambda _: {"data": catalog_rows})

        assert result.compounding_frequency is CompoundingFrequency.MONTHLY
        assert result.tds_rate == Decimal("10.0")
        assert result.final_rate == Decimal("7.50")
        assert result.maturity_amount == orchestrator.engine.maturity_after_tax(
            Decimal("100000"), Decimal("7.50"), 12, 12, Decimal("10")
        )

    def test_annual_product(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test a product compounding annually with 10% TDS."""
        orchestrator = QuoteOrchestrator.create()
        request = QuoteRequest(principal=100000, tenure=12, start_date=date(2025, 4, 1))

        result = orchestrator.quote_product("FD-TAX-001", request, lambda _: catalog_rows)

        assert result.maturity_before_tax == Decimal("106500.00")
        assert result.tds_amount == Decimal("650.00")
        assert result.maturity_amount == Decimal("105850.00")
        assert result.maturity_date == date(2026, 4, 1)

    def test_explicit_fields_win_over_product_defaults(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test that caller-set frequency and TDS are kept."""
        orchestrator = QuoteOrchestrator.create()
        request = QuoteRequest(principal=100000, tenure=12, compounding_frequency="annually",
                               tds_rate=0, start_date=date(2025, 4, 1))

        result = orchestrator.quote_product("FD-SNR-001", request, lambda _: catalog_rows)

        assert result.compounding_frequency is CompoundingFrequency.ANNUALLY
        assert result.maturity_amount == Decimal("106500.00")

    def test_product_default_rate_fallback(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test the configured default rate when the matrix has no slab."""
        orchestrator = QuoteOrchestrator.create()
        request = QuoteRequest(principal=5000, tenure=12, start_date=date(2025, 4, 1))

        result = orchestrator.quote_product("FD-STD-001", request, lambda _: catalog_rows)

        assert result.base_rate == Decimal("6.5")
        assert result.tds_rate == Decimal("10.0")

    def test_cached_and_uncached_quotes_match(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test that caching never changes a quote."""
        cached = QuoteOrchestrator.create(with_cache=True)
        uncached = QuoteOrchestrator.create(with_cache=False)
        fetch = Mock(return_value=catalog_rows)
        request = QuoteRequest(principal=250000, tenure=36, classifications=("GOLD", "SILVER"),
                               start_date=date(2025, 4, 1))

        results = [
            orchestrator.quote_product("FD-STD-001", request, fetch)
            for orchestrator in (cached, cached, uncached)
        ]

        assert results[0] == results[1] == results[2]
        assert fetch.call_count == 2

    def test_product_bonus_table(self) -> None:
        """Test a product-specific standalone bonus table."""
        config = ConfigLoader.create().load_config("FD-FLX-001")
        orchestrator = QuoteOrchestrator(config=config)
        request = QuoteRequest(principal=100000, tenure=12, interest_rate="6",
                               classifications=("PREMIUM",), start_date=date(2025, 4, 1))

        result = orchestrator.quote(request)

        assert result.additional_rate == Decimal("1.00")
        assert result.final_rate == Decimal("7.00")

    def test_product_bonus_table_through_quote_product(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test that a catalog product quote uses that product's bonus table."""
        orchestrator = QuoteOrchestrator.create(with_cache=False)
        request = QuoteRequest(principal=100000, tenure=12, interest_rate="6",
                               classifications=("PREMIUM",), start_date=date(2025, 4, 1))

        result = orchestrator.quote_product("FD-FLX-001", request, lambda _: catalog_rows)

        assert result.additional_rate == Decimal("1.00")
        assert result.product_id == "FD-FLX-001"


@pytest.mark.integration
class TestComparisonFlow:
    """Integration tests for scenario comparison."""

    def test_compare_frequencies(self, catalog_rows: List[Dict[str, Any]]) -> None:
        """Test that monthly compounding beats quarterly and annual for the same rate."""
        orchestrator = QuoteOrchestrator.create()
        scenarios = [
            QuoteRequest(principal=1, tenure=24, compounding_frequency=frequency,
                         start_date=date(2025, 4, 1))
            for frequency in ("annually", "quarterly", "monthly")
        ]

        comparison = orchestrator.compare(scenarios, common_principal=300000, matrix=catalog_rows)

        assert comparison.best_index == 2
        assert all(r.base_rate == Decimal("7.5") for r in comparison.results)
        assert comparison.results[0].maturity_amount < comparison.results[1].maturity_amount
