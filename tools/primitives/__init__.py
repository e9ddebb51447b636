"""
Primitive tools for low-level Elasticsearch operations.
"""

from .aggregate import aggregate_elastic_data
from .stats import get_index_mapping, check_index_exists, count_documents

__all__ = [
    # Aggregation operations
    "aggregate_elastic_data",
    # Index inspection
    "get_index_mapping",
    "check_index_exists",
    "count_documents",
]
