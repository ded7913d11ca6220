"""
FD Pricing - Fixed Deposit Rate Resolution and Quote Engine

Resolves the applicable interest rate for a fixed deposit from a rate matrix,
applies classification bonuses under a cap, and computes compound interest,
maturity value, tax withholding, effective annual yield and a monthly
balance projection.
"""

__version__ = "0.1.0"
__author__ = "FD Pricing Team"
