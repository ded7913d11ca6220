"""
Compound interest calculations for fixed deposits.

M = P * (1 + r/n)^(n*t)

The base (1 + r/n) is computed in high-precision decimal arithmetic. The
exponent n*t is generally fractional, so the power itself is taken in binary
floating point inside compound_factor(); every other step stays in Decimal.
"""

import math
from datetime import date
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Iterator, Optional

from ..errors import InvalidInputError
from ..logging.config import get_calculation_logger
from ..utils.dates import add_months, resolve_start_date
from ..utils.numbers import (
    HUNDRED,
    MONEY_CONTEXT,
    MONEY_PLACES,
    RATE_CONTEXT,
    percent_to_fraction,
    quantize_places,
    round_rate,
)
from .models import CompoundingOutcome, CompoundingSpec, MonthlyEntry

logger = get_calculation_logger(__name__)


def compound_base(annual_rate: Decimal, periods_per_year: int,
                  context: Context = RATE_CONTEXT) -> Decimal:
    """
    Per-period growth base (1 + r/n) for a percentage annual rate.

    Args:
        annual_rate: Annual rate in percent (7.5 for 7.5%)
        periods_per_year: Compounding periods per year
        context: Decimal context for the division steps

    Returns:
        1 + (annual_rate / 100) / periods_per_year
    """
    rate_fraction = percent_to_fraction(annual_rate, context)
    rate_per_period = context.divide(rate_fraction, Decimal(periods_per_year))
    return context.add(Decimal(1), rate_per_period)


def compound_factor(base: Decimal, exponent: float) -> Decimal:
    """
    Raise a growth base to a possibly fractional power.

    This is the only floating-point step in the engine. The result is
    converted back through its shortest repr so the caller continues in
    Decimal.
    """
    return Decimal(str(math.pow(float(base), exponent)))


class CompoundInterestEngine:
    """
    Stateless compound interest calculator.

    All operations are pure over their arguments and safe to call from
    multiple threads.
    """

    def __init__(self, precision: int = 20, money_places: int = MONEY_PLACES):
        self.context = Context(prec=precision, rounding=ROUND_HALF_UP)
        self.money_places = money_places
        self.logger = logger

    def maturity_before_tax(self, principal: Decimal, annual_rate: Decimal,
                            tenure_months: int, periods_per_year: int) -> Decimal:
        """
        Maturity amount before any tax is withheld.

        Args:
            principal: Deposit amount
            annual_rate: Annual rate in percent
            tenure_months: Tenure in months (t = tenure_months / 12 years)
            periods_per_year: Compounding periods per year

        Returns:
            P * (1 + r/n)^(n*t), rounded to money places half-up
        """
        self._validate(principal, annual_rate, tenure_months, periods_per_year)
        return self._money(self._value_at(principal, annual_rate, tenure_months, periods_per_year))

    def interest_earned(self, principal: Decimal, annual_rate: Decimal,
                        tenure_months: int, periods_per_year: int) -> Decimal:
        """Total interest before tax: maturity before tax minus principal."""
        maturity = self.maturity_before_tax(principal, annual_rate, tenure_months, periods_per_year)
        return self._money(MONEY_CONTEXT.subtract(maturity, principal))

    def tds_amount(self, interest: Decimal, tds_rate: Decimal) -> Decimal:
        """Tax withheld at source on an interest amount."""
        if tds_rate < 0 or tds_rate > 100:
            raise InvalidInputError("TDS rate must be between 0 and 100", field="tds_rate", value=tds_rate)
        fraction = percent_to_fraction(tds_rate, self.context)
        return self._money(MONEY_CONTEXT.multiply(interest, fraction))

    def maturity_after_tax(self, principal: Decimal, annual_rate: Decimal,
                           tenure_months: int, periods_per_year: int,
                           tds_rate: Decimal) -> Decimal:
        """
        Maturity amount after TDS is withheld from the interest.

        TDS applies to interest only, never to principal.
        """
        self._validate(principal, annual_rate, tenure_months, periods_per_year, tds_rate)
        maturity = self.maturity_before_tax(principal, annual_rate, tenure_months, periods_per_year)
        tds = self.tds_amount(MONEY_CONTEXT.subtract(maturity, principal), tds_rate)
        return self._money(MONEY_CONTEXT.subtract(maturity, tds))

    def annual_percentage_yield(self, annual_rate: Decimal, periods_per_year: int) -> Decimal:
        """
        Effective annual yield in percent: ((1 + r/n)^n - 1) * 100.
        """
        if annual_rate < 0:
            raise InvalidInputError("Annual rate cannot be negative", field="annual_rate", value=annual_rate)
        if periods_per_year <= 0:
            raise InvalidInputError("Periods per year must be positive",
                                    field="periods_per_year", value=periods_per_year)

        base = compound_base(annual_rate, periods_per_year, self.context)
        factor = compound_factor(base, float(periods_per_year))
        return round_rate((factor - 1) * HUNDRED)

    def iter_monthly_breakdown(self, principal: Decimal, annual_rate: Decimal,
                               tenure_months: int, periods_per_year: int,
                               start_date: Optional[date] = None) -> Iterator[MonthlyEntry]:
        """
        Lazily project the balance at the end of each month.

        Each closing balance is recomputed from the original principal at
        t = month / 12, so the last entry always equals maturity_before_tax.
        Monthly interest is the difference between consecutive cumulative
        interest figures.
        """
        self._validate(principal, annual_rate, tenure_months, periods_per_year)
        start = resolve_start_date(start_date)

        opening_balance = principal
        cumulative_interest = Decimal("0")

        for month in range(1, tenure_months + 1):
            closing_balance = self._money(
                self._value_at(principal, annual_rate, month, periods_per_year)
            )
            new_cumulative = MONEY_CONTEXT.subtract(closing_balance, principal)

            yield MonthlyEntry(
                month=month,
                date=add_months(start, month),
                opening_balance=self._money(opening_balance),
                interest_earned=self._money(MONEY_CONTEXT.subtract(new_cumulative, cumulative_interest)),
                closing_balance=closing_balance,
                cumulative_interest=self._money(new_cumulative),
            )

            opening_balance = closing_balance
            cumulative_interest = new_cumulative

    def monthly_breakdown(self, principal: Decimal, annual_rate: Decimal,
                          tenure_months: int, periods_per_year: int,
                          start_date: Optional[date] = None) -> list[MonthlyEntry]:
        """Month-by-month balance projection over the full tenure."""
        breakdown = list(self.iter_monthly_breakdown(
            principal, annual_rate, tenure_months, periods_per_year, start_date
        ))
        self.logger.debug("Generated monthly breakdown", entries=len(breakdown))
        return breakdown

    def calculate(self, spec: CompoundingSpec, principal: Decimal,
                  start_date: Optional[date] = None) -> CompoundingOutcome:
        """Run every compounding operation for one spec."""
        spec.validate()
        maturity = self.maturity_before_tax(
            principal, spec.annual_rate, spec.tenure_months, spec.periods_per_year
        )
        interest = self._money(MONEY_CONTEXT.subtract(maturity, principal))
        tds = self.tds_amount(MONEY_CONTEXT.subtract(maturity, principal), spec.tds_rate)

        return CompoundingOutcome(
            maturity_before_tax=maturity,
            interest_earned=interest,
            tds_amount=tds,
            net_interest=self._money(MONEY_CONTEXT.subtract(interest, tds)),
            maturity_after_tax=self._money(MONEY_CONTEXT.subtract(maturity, tds)),
            apy=self.annual_percentage_yield(spec.annual_rate, spec.periods_per_year),
            monthly_breakdown=tuple(self.monthly_breakdown(
                principal, spec.annual_rate, spec.tenure_months, spec.periods_per_year, start_date
            )),
        )

    def _value_at(self, principal: Decimal, annual_rate: Decimal,
                  months: int, periods_per_year: int) -> Decimal:
        """Unrounded value of the deposit after `months` months."""
        base = compound_base(annual_rate, periods_per_year, self.context)
        exponent = periods_per_year * months / 12
        return MONEY_CONTEXT.multiply(principal, compound_factor(base, exponent))

    def _money(self, value: Decimal) -> Decimal:
        return quantize_places(value, self.money_places)

    def _validate(self, principal: Decimal, annual_rate: Decimal, tenure_months: int,
                  periods_per_year: int, tds_rate: Decimal = Decimal("0")) -> None:
        if principal is None or principal <= 0:
            raise InvalidInputError("Principal must be positive", field="principal", value=principal)
        CompoundingSpec(
            annual_rate=annual_rate,
            tenure_months=tenure_months,
            periods_per_year=periods_per_year,
            tds_rate=tds_rate,
        ).validate()
