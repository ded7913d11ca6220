"""
Utility functions module.

Common helpers for decimal conversion, rounding and calendar arithmetic
shared across the rate and interest modules.

Numeric Semantics:
- Money is always a Decimal quantized to 2 places with ROUND_HALF_UP
- Floats are converted through str() so their shortest repr is kept
- Calendar months are added with end-of-month clamping
"""
