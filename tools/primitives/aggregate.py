"""
Primitive aggregation operations for Elasticsearch.
"""

import logging
from typing import Dict, Any, Optional

from elasticsearch import ApiError, TransportError

from agg_types.requests import AggregationQuery
from agg_types.results import AggregationResponse
from utils.aggregation_builder import build_aggregations
from utils.connection import get_elasticsearch_client
from utils.errors import AggregationError
from utils.validation import validate_index_pattern, validate_size


logger = logging.getLogger(__name__)


def _as_dict(response: Any) -> Dict[str, Any]:
    # ObjectApiResponse wraps the decoded body
    if isinstance(response, dict):
        return response
    return response.body


def aggregate_elastic_data(
    index_pattern: str,
    aggregations: Dict[str, Any],
    query: Optional[Dict[str, Any]] = None,
    size: int = 0,
) -> AggregationResponse:
    """
    Execute Elasticsearch aggregations.

    This primitive provides direct access to Elasticsearch aggregation
    capabilities without any domain logic. It performs exactly one
    blocking search request and does not retry.

    Args:
        index_pattern: Index pattern to search
        aggregations: Aggregation DSL definition (name -> aggregation body)
        query: Query scoping the aggregated documents (match_all if omitted)
        size: Number of documents to return (0 for aggs only)

    Returns:
        AggregationResponse with aggregation results

    Raises:
        ValueError: If parameters are invalid
        AggregationError: If Elasticsearch rejects the request or is unreachable
    """
    validate_index_pattern(index_pattern)

    agg_query = AggregationQuery(
        index_pattern=index_pattern,
        aggregations=build_aggregations(aggregations),
        size=validate_size(size),
    )
    if query is not None:
        agg_query.query = query

    body = agg_query.to_dict()
    logger.debug("Aggregation request on %s: %s", index_pattern, body)

    es = get_elasticsearch_client()

    try:
        response = es.search(
            index=index_pattern,
            query=body["query"],
            aggs=body["aggs"],
            size=body["size"],
        )
    except (ApiError, TransportError) as e:
        raise AggregationError(f"Elasticsearch aggregation failed: {e}") from e

    return AggregationResponse.from_dict(_as_dict(response))
