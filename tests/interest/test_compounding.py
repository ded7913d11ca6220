"""
Tests for the compound interest engine.

Reference figures: 100,000 at 7% compounded quarterly for 12 months is
100000 * 1.0175^4 = 107185.903128..., so 107185.90 before tax.
"""

import pytest
from datetime import date
from decimal import Decimal

from fd_pricing.errors import InvalidInputError
from fd_pricing.interest.compounding import (
    CompoundInterestEngine,
    compound_base,
    compound_factor,
)
from fd_pricing.interest.models import CompoundingFrequency, CompoundingSpec

PRINCIPAL = Decimal("100000")
RATE = Decimal("7")
QUARTERLY = CompoundingFrequency.QUARTERLY.periods_per_year


@pytest.fixture
def engine():
    return CompoundInterestEngine()


class TestCompoundBase:
    """Tests for the per-period growth base."""

    def test_quarterly_base(self):
        assert compound_base(Decimal("7"), 4) == Decimal("1.0175")

    def test_monthly_base_keeps_twenty_significant_digits(self):
        assert compound_base(Decimal("7"), 12) == Decimal("1.0058333333333333333")

    def test_zero_rate_base_is_one(self):
        assert compound_base(Decimal("0"), 4) == Decimal("1")

    def test_integral_power_is_exact_for_short_reprs(self):
        assert compound_factor(Decimal("1.0175"), 1.0) == Decimal("1.0175")
        assert compound_factor(Decimal("1.07"), 1.0) == Decimal("1.07")


class TestMaturity:
    """Tests for maturity, interest and TDS calculations."""

    def test_maturity_before_tax_quarterly(self, engine):
        assert engine.maturity_before_tax(PRINCIPAL, RATE, 12, QUARTERLY) == Decimal("107185.90")

    def test_interest_earned_quarterly(self, engine):
        assert engine.interest_earned(PRINCIPAL, RATE, 12, QUARTERLY) == Decimal("7185.90")

    def test_maturity_after_tax_quarterly(self, engine):
        result = engine.maturity_after_tax(PRINCIPAL, RATE, 12, QUARTERLY, Decimal("10"))
        assert result == Decimal("106467.31")

    def test_annual_compounding_for_one_year_is_simple_interest(self, engine):
        assert engine.maturity_before_tax(PRINCIPAL, RATE, 12, 1) == Decimal("107000.00")

    def test_zero_rate_returns_principal(self, engine):
        assert engine.maturity_before_tax(PRINCIPAL, Decimal("0"), 24, 12) == Decimal("100000.00")
        assert engine.interest_earned(PRINCIPAL, Decimal("0"), 24, 12) == Decimal("0.00")

    def test_tds_applies_to_interest_only(self, engine):
        assert engine.tds_amount(Decimal("7185.90"), Decimal("10")) == Decimal("718.59")

    def test_tds_rounds_half_up(self, engine):
        assert engine.tds_amount(Decimal("0.25"), Decimal("10")) == Decimal("0.03")

    def test_zero_tds_leaves_maturity_unchanged(self, engine):
        before = engine.maturity_before_tax(PRINCIPAL, RATE, 36, 12)
        after = engine.maturity_after_tax(PRINCIPAL, RATE, 36, 12, Decimal("0"))
        assert before == after

    def test_results_have_two_decimal_places(self, engine):
        result = engine.maturity_before_tax(Decimal("12345.67"), Decimal("6.85"), 17, 12)
        assert result.as_tuple().exponent == -2

    def test_consistency_across_frequencies_and_tenures(self, engine):
        """Maturity, interest and tax figures agree for a spread of deposits."""
        for frequency in CompoundingFrequency:
            for tenure in (1, 6, 13, 60):
                periods = frequency.periods_per_year
                before = engine.maturity_before_tax(PRINCIPAL, Decimal("6.75"), tenure, periods)
                interest = engine.interest_earned(PRINCIPAL, Decimal("6.75"), tenure, periods)
                after = engine.maturity_after_tax(PRINCIPAL, Decimal("6.75"), tenure, periods, Decimal("20"))

                assert interest == before - PRINCIPAL
                assert before > PRINCIPAL
                assert after <= before
                assert after >= PRINCIPAL

    def test_more_frequent_compounding_earns_more(self, engine):
        monthly = engine.maturity_before_tax(PRINCIPAL, RATE, 24, 12)
        quarterly = engine.maturity_before_tax(PRINCIPAL, RATE, 24, 4)
        annually = engine.maturity_before_tax(PRINCIPAL, RATE, 24, 1)
        assert monthly > quarterly > annually


class TestAnnualPercentageYield:
    """Tests for the effective annual yield."""

    def test_quarterly_apy(self, engine):
        assert engine.annual_percentage_yield(RATE, 4) == Decimal("7.19")

    def test_monthly_apy(self, engine):
        assert engine.annual_percentage_yield(RATE, 12) == Decimal("7.23")

    def test_annual_apy_equals_nominal_rate(self, engine):
        assert engine.annual_percentage_yield(RATE, 1) == Decimal("7.00")

    def test_apy_is_never_below_nominal_rate(self, engine):
        for frequency in CompoundingFrequency:
            apy = engine.annual_percentage_yield(Decimal("8.25"), frequency.periods_per_year)
            assert apy >= Decimal("8.25")

    def test_negative_rate_rejected(self, engine):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            engine.annual_percentage_yield(Decimal("-1"), 4)


class TestMonthlyBreakdown:
    """Tests for the month-by-month projection."""

    def test_one_entry_per_month(self, engine):
        breakdown = engine.monthly_breakdown(PRINCIPAL, RATE, 12, QUARTERLY, date(2025, 1, 1))
        assert [entry.month for entry in breakdown] == list(range(1, 13))

    def test_last_closing_balance_equals_maturity(self, engine):
        breakdown = engine.monthly_breakdown(PRINCIPAL, RATE, 12, QUARTERLY, date(2025, 1, 1))
        assert breakdown[-1].closing_balance == Decimal("107185.90")
        assert breakdown[-1].cumulative_interest == Decimal("7185.90")

    def test_quarter_end_balance(self, engine):
        breakdown = engine.monthly_breakdown(PRINCIPAL, RATE, 12, QUARTERLY, date(2025, 1, 1))
        assert breakdown[2].closing_balance == Decimal("101750.00")

    def test_monthly_interest_sums_to_total_interest(self, engine):
        for periods in (12, 4, 2, 1):
            breakdown = engine.monthly_breakdown(PRINCIPAL, Decimal("7.4"), 27, periods, date(2025, 1, 1))
            total = sum((entry.interest_earned for entry in breakdown), Decimal("0"))
            assert total == engine.interest_earned(PRINCIPAL, Decimal("7.4"), 27, periods)

    def test_balances_chain_month_to_month(self, engine):
        breakdown = engine.monthly_breakdown(PRINCIPAL, RATE, 6, 12, date(2025, 1, 1))

        assert breakdown[0].opening_balance == Decimal("100000.00")
        for previous, current in zip(breakdown, breakdown[1:]):
            assert current.opening_balance == previous.closing_balance
        for entry in breakdown:
            assert entry.closing_balance == entry.opening_balance + entry.interest_earned

    def test_dates_clamp_to_month_end(self, engine, start_date):
        breakdown = engine.monthly_breakdown(PRINCIPAL, RATE, 3, 12, start_date)
        assert [entry.date for entry in breakdown] == [
            date(2025, 2, 28), date(2025, 3, 31), date(2025, 4, 30)
        ]

    def test_iterator_is_lazy_and_repeatable(self, engine):
        iterator = engine.iter_monthly_breakdown(PRINCIPAL, RATE, 4, 12, date(2025, 1, 1))
        first = next(iterator)
        assert first.month == 1

        again = list(engine.iter_monthly_breakdown(PRINCIPAL, RATE, 4, 12, date(2025, 1, 1)))
        assert again[0] == first
        assert len(again) == 4

    def test_entry_serializes_to_strings(self, engine):
        entry = engine.monthly_breakdown(PRINCIPAL, RATE, 3, 4, date(2025, 1, 1))[2]
        assert entry.to_dict() == {
            "month": 3,
            "date": "2025-04-01",
            "opening_balance": str(entry.opening_balance),
            "interest_earned": str(entry.interest_earned),
            "closing_balance": "101750.00",
            "cumulative_interest": "1750.00",
        }


class TestCalculate:
    """Tests for the combined calculation."""

    def test_outcome_figures(self, engine):
        spec = CompoundingSpec(annual_rate=RATE, tenure_months=12,
                               periods_per_year=QUARTERLY, tds_rate=Decimal("10"))
        outcome = engine.calculate(spec, PRINCIPAL, date(2025, 1, 1))

        assert outcome.maturity_before_tax == Decimal("107185.90")
        assert outcome.interest_earned == Decimal("7185.90")
        assert outcome.tds_amount == Decimal("718.59")
        assert outcome.net_interest == Decimal("6467.31")
        assert outcome.maturity_after_tax == Decimal("106467.31")
        assert outcome.apy == Decimal("7.19")
        assert len(outcome.monthly_breakdown) == 12

    def test_outcome_matches_individual_operations(self, engine):
        spec = CompoundingSpec(annual_rate=Decimal("6.6"), tenure_months=18,
                               periods_per_year=2, tds_rate=Decimal("15"))
        outcome = engine.calculate(spec, Decimal("250000"), date(2025, 1, 1))

        assert outcome.maturity_before_tax == engine.maturity_before_tax(
            Decimal("250000"), Decimal("6.6"), 18, 2)
        assert outcome.maturity_after_tax == engine.maturity_after_tax(
            Decimal("250000"), Decimal("6.6"), 18, 2, Decimal("15"))

    def test_very_large_principal_keeps_cents(self, engine):
        principal = Decimal("100000000000000000000000000")
        spec = CompoundingSpec(annual_rate=RATE, tenure_months=12,
                               periods_per_year=1, tds_rate=Decimal("10"))
        outcome = engine.calculate(spec, principal, date(2025, 1, 1))

        assert str(outcome.maturity_before_tax) == "107000000000000000000000000.00"
        assert str(outcome.interest_earned) == "7000000000000000000000000.00"
        assert str(outcome.tds_amount) == "700000000000000000000000.00"
        assert str(outcome.maturity_after_tax) == "106300000000000000000000000.00"
        assert str(outcome.monthly_breakdown[0].opening_balance) == "100000000000000000000000000.00"
        assert outcome.monthly_breakdown[-1].closing_balance == outcome.maturity_before_tax


class TestInvalidInputs:
    """Tests for rejected inputs."""

    @pytest.mark.parametrize("principal", [Decimal("0"), Decimal("-100")])
    def test_non_positive_principal(self, engine, principal):
        with pytest.raises(InvalidInputError, match="Principal must be positive"):
            engine.maturity_before_tax(principal, RATE, 12, 4)

    def test_negative_rate(self, engine):
        with pytest.raises(InvalidInputError, match="cannot be negative"):
            engine.maturity_before_tax(PRINCIPAL, Decimal("-0.5"), 12, 4)

    def test_zero_tenure(self, engine):
        with pytest.raises(InvalidInputError, match="positive number of months"):
            engine.maturity_before_tax(PRINCIPAL, RATE, 0, 4)

    def test_zero_periods(self, engine):
        with pytest.raises(InvalidInputError, match="Periods per year must be positive"):
            engine.maturity_before_tax(PRINCIPAL, RATE, 12, 0)

    @pytest.mark.parametrize("tds_rate", [Decimal("-1"), Decimal("100.01")])
    def test_tds_out_of_range(self, engine, tds_rate):
        with pytest.raises(InvalidInputError, match="between 0 and 100") as exc_info:
            engine.maturity_after_tax(PRINCIPAL, RATE, 12, 4, tds_rate)
        assert exc_info.value.field == "tds_rate"

    def test_breakdown_rejects_invalid_principal_before_iterating(self, engine):
        iterator = engine.iter_monthly_breakdown(Decimal("0"), RATE, 12, 4)
        with pytest.raises(InvalidInputError):
            next(iterator)
