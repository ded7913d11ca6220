"""
Compound interest module.

Compounding frequencies, tenure units and the calculation engine that turns
a principal and an annual rate into maturity, tax and yield figures.
"""
