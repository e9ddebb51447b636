"""
Error types raised by the aggregation primitives.
"""


class ElasticsearchOperationError(Exception):
    """An Elasticsearch request failed at the transport or API level."""


class AggregationError(ElasticsearchOperationError):
    """An aggregation search could not be executed."""
