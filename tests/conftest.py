"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List

from fd_pricing.rates.models import RateSlab


CATEGORY_BONUSES = [
    ("SENIOR_CITIZEN", "1.00"),
    ("EMPLOYEE", "1.50"),
    ("SILVER", "0.50"),
    ("GOLD", "1.00"),
    ("PLATINUM", "1.50"),
]


@pytest.fixture
def catalog_rows() -> List[Dict[str, Any]]:
    """Standard FD rate matrix as returned by the product catalog."""
    rows = [
        {
            "minAmount": 10000, "maxAmount": 100000,
            "minTermMonths": 6, "maxTermMonths": 12,
            "customerClassification": None,
            "interestRate": "6.5", "additionalRate": None,
            "effectiveDate": "2025-01-01",
        },
        {
            "minAmount": 100000, "maxAmount": 1000000,
            "minTermMonths": 6, "maxTermMonths": 12,
            "customerClassification": None,
            "interestRate": "7.0", "additionalRate": "0.25",
            "effectiveDate": "2025-01-01",
        },
        {
            "minAmount": 10000, "maxAmount": 10000000,
            "minTermMonths": 12, "maxTermMonths": 60,
            "customerClassification": None,
            "interestRate": "7.5", "additionalRate": None,
            "effectiveDate": "2025-01-01",
        },
    ]
    for classification, bonus in CATEGORY_BONUSES:
        rows.append({
            "minAmount": 1000, "maxAmount": 100000000,
            "minTermMonths": 1, "maxTermMonths": 1200,
            "customerClassification": classification,
            "interestRate": "6.5", "additionalRate": bonus,
            "effectiveDate": "2025-01-01",
        })
    return rows


@pytest.fixture
def standard_matrix() -> tuple:
    """Standard FD rate matrix as RateSlab values, in catalog order."""
    slabs = [
        RateSlab(min_amount=Decimal("10000"), max_amount=Decimal("100000"),
                 min_term_months=6, max_term_months=12, base_rate=Decimal("6.5")),
        RateSlab(min_amount=Decimal("100000"), max_amount=Decimal("1000000"),
                 min_term_months=6, max_term_months=12, base_rate=Decimal("7.0"),
                 additional_rate=Decimal("0.25")),
        RateSlab(min_amount=Decimal("10000"), max_amount=Decimal("10000000"),
                 min_term_months=12, max_term_months=60, base_rate=Decimal("7.5")),
    ]
    for classification, bonus in CATEGORY_BONUSES:
        slabs.append(RateSlab(
            min_amount=Decimal("1000"), max_amount=Decimal("100000000"),
            min_term_months=1, max_term_months=1200,
            classification=classification,
            base_rate=Decimal("6.5"), additional_rate=Decimal(bonus),
        ))
    return tuple(slabs)


@pytest.fixture
def start_date() -> date:
    """Deposit start date at a month end, to exercise day clamping."""
    return date(2025, 1, 31)
