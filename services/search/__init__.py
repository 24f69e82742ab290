"""Search aggregation service package."""

from services.search.aggregator import AggregationError, Aggregator
from services.search.types import ResultSet

__all__ = [
    "AggregationError",
    "Aggregator",
    "ResultSet",
]
