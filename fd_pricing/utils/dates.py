"""
Calendar helpers for deposit start and maturity dates.
"""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta


def add_months(start: date, months: int) -> date:
    """
    Add calendar months to a date.

    Days past the end of the target month are clamped, so 31 Jan + 1 month
    is 28/29 Feb.

    Args:
        start: Starting date
        months: Number of months to add

    Returns:
        Shifted date
    """
    return start + relativedelta(months=months)


def resolve_start_date(start_date: Optional[date] = None) -> date:
    """Return the given start date, or today when none is supplied."""
    if start_date is not None:
        return start_date
    return date.today()


def maturity_date(start: date, tenure_months: int) -> date:
    """Date on which a deposit opened on `start` matures."""
    return add_months(start, tenure_months)
