"""
Utility functions for the Elasticsearch aggregation demos.
"""

from .connection import get_elasticsearch_client, test_connection
from .errors import AggregationError, ElasticsearchOperationError
from .validation import (
    validate_index_pattern,
    validate_aggregation_name,
    validate_size,
    clamp_value,
)
from .query_builder import (
    build_match_all_query,
    build_term_query,
    build_range_query,
    build_bool_query,
)
from .response_parser import get_aggregation

__all__ = [
    # Connection
    "get_elasticsearch_client",
    "test_connection",
    # Errors
    "AggregationError",
    "ElasticsearchOperationError",
    # Validation
    "validate_index_pattern",
    "validate_aggregation_name",
    "validate_size",
    "clamp_value",
    # Query building
    "build_match_all_query",
    "build_term_query",
    "build_range_query",
    "build_bool_query",
    # Response parsing
    "get_aggregation",
]
