"""Rate matrix models, parsing, caching and resolution"""

from .cache import RateMatrixCache
from .models import RateQuery, RateSlab, ResolvedRate
from .parsers import extract_rate_rows, parse_rate_matrix, parse_rate_row
from .resolver import RateMatrixResolver, cap_additional_rate, unique_classifications
from .standalone import StandaloneRateTable

__all__ = [
    "RateSlab",
    "RateQuery",
    "ResolvedRate",
    "RateMatrixResolver",
    "StandaloneRateTable",
    "RateMatrixCache",
    "parse_rate_row",
    "parse_rate_matrix",
    "extract_rate_rows",
    "cap_additional_rate",
    "unique_classifications",
]
