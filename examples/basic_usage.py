#!/usr/bin/env python3
"""
Basic Usage Example - FD Pricing Engine

This script demonstrates the basic usage of the fixed deposit pricing engine
with a sample product catalog. It shows how to:
- Price a deposit at a caller-supplied rate
- Price a catalog product through the rate matrix cache
- Compare several deposit scenarios
- Inspect the monthly balance projection

Run: python examples/basic_usage.py
"""

import json
from datetime import date
from typing import Any, Dict, List

from fd_pricing.engine import QuoteOrchestrator
from fd_pricing.logging import configure_logging
from fd_pricing.quote.models import QuoteRequest


def create_catalog_rows() -> List[Dict[str, Any]]:
    """Create a sample rate matrix in product catalog format."""
    rows = [
        {"minAmount": 10000, "maxAmount": 100000, "minTermMonths": 6, "maxTermMonths": 12,
         "customerClassification": None, "interestRate": "6.5", "additionalRate": None},
        {"minAmount": 100000, "maxAmount": 1000000, "minTermMonths": 6, "maxTermMonths": 12,
         "customerClassification": None, "interestRate": "7.0", "additionalRate": "0.25"},
        {"minAmount": 10000, "maxAmount": 10000000, "minTermMonths": 12, "maxTermMonths": 60,
         "customerClassification": None, "interestRate": "7.5", "additionalRate": None},
    ]
    for classification, bonus in [("SENIOR_CITIZEN", "1.00"), ("EMPLOYEE", "1.50"),
                                  ("SILVER", "0.50"), ("GOLD", "1.00"), ("PLATINUM", "1.50")]:
        rows.append({
            "minAmount": 1000, "maxAmount": 100000000, "minTermMonths": 1, "maxTermMonths": 1200,
            "customerClassification": classification, "interestRate": "6.5", "additionalRate": bonus,
        })
    return rows


def fetch_rate_matrix(product_id: str) -> Dict[str, Any]:
    """Simulate a product catalog lookup returning an API envelope."""
    print(f"   📡 Fetching rate matrix for {product_id}")
    return {"data": create_catalog_rows()}


def main() -> None:
    """Run the basic usage walkthrough."""
    configure_logging(level="WARNING")

    print("🏦 FD Pricing Engine - Basic Usage Example")
    print("=" * 50)

    orchestrator = QuoteOrchestrator.create()

    print("\n1️⃣  Manual rate quote")
    manual = orchestrator.quote(QuoteRequest(
        principal=100000,
        tenure=12,
        interest_rate="7",
        tds_rate=10,
        start_date=date(2025, 1, 31),
    ))
    print(f"   Final rate:          {manual.final_rate}%")
    print(f"   Maturity before tax: {manual.maturity_before_tax}")
    print(f"   TDS withheld:        {manual.tds_amount}")
    print(f"   Maturity amount:     {manual.maturity_amount}")
    print(f"   APY:                 {manual.apy}%")
    print(f"   Matures on:          {manual.maturity_date}")

    print("\n2️⃣  Catalog product quote (senior citizen, cached matrix)")
    request = QuoteRequest(principal=250000, tenure=24, classifications=("SENIOR_CITIZEN", "GOLD"))
    for attempt in range(2):
        result = orchestrator.quote_product("FD-SNR-001", request, fetch_rate_matrix)
        print(f"   Attempt {attempt + 1}: base {result.base_rate}% + bonus {result.additional_rate}% "
              f"-> maturity {result.maturity_amount} ({result.compounding_frequency.value})")
    print(f"   Cache stats: {orchestrator.matrix_cache.stats()}")

    print("\n3️⃣  Scenario comparison")
    scenarios = [
        QuoteRequest(principal=1, tenure=12, interest_rate="7", compounding_frequency=frequency)
        for frequency in ("annually", "half_yearly", "quarterly", "monthly")
    ]
    comparison = orchestrator.compare(scenarios, common_principal=500000)
    for index, result in enumerate(comparison.results):
        marker = "⭐" if index == comparison.best_index else "  "
        print(f"   {marker} {result.compounding_frequency.value:<12} {result.maturity_amount}")

    print("\n4️⃣  Monthly projection (first 3 months)")
    for entry in manual.monthly_breakdown[:3]:
        print(f"   {json.dumps(entry.to_dict())}")

    print("\n✅ Example complete")


if __name__ == "__main__":
    main()
