"""
Quote request and result module.

Request normalization and the values returned by single and comparison quotes.
"""
