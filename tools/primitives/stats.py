"""
Primitive index inspection operations for Elasticsearch.
"""

from typing import Dict, Any, Optional

from elasticsearch import ApiError, TransportError

from utils.connection import get_elasticsearch_client
from utils.errors import ElasticsearchOperationError
from utils.validation import validate_index_pattern


def get_index_mapping(
    index_pattern: str,
) -> Dict[str, Any]:
    """
    Get field mappings for indices.

    Args:
        index_pattern: Index pattern to get mappings for

    Returns:
        Dictionary of index mappings

    Raises:
        ElasticsearchOperationError: If mapping retrieval fails
    """
    validate_index_pattern(index_pattern)

    es = get_elasticsearch_client()

    try:
        response = es.indices.get_mapping(index=index_pattern)
    except (ApiError, TransportError) as e:
        raise ElasticsearchOperationError(f"Failed to get index mappings: {e}") from e

    return response if isinstance(response, dict) else response.body


def check_index_exists(
    index_pattern: str,
) -> bool:
    """
    Check if any indices match the pattern.

    Args:
        index_pattern: Index pattern to check

    Returns:
        True if at least one index matches
    """
    validate_index_pattern(index_pattern)

    es = get_elasticsearch_client()

    try:
        return bool(es.indices.exists(index=index_pattern))
    except (ApiError, TransportError) as e:
        raise ElasticsearchOperationError(f"Failed to check index: {e}") from e


def count_documents(
    index_pattern: str,
    query: Optional[Dict[str, Any]] = None,
) -> int:
    """
    Count documents matching a query.

    Args:
        index_pattern: Index pattern to count in
        query: Optional query (all documents if omitted)

    Returns:
        Number of matching documents
    """
    validate_index_pattern(index_pattern)

    es = get_elasticsearch_client()

    try:
        if query is None:
            response = es.count(index=index_pattern)
        else:
            response = es.count(index=index_pattern, query=query)
    except (ApiError, TransportError) as e:
        raise ElasticsearchOperationError(f"Failed to count documents: {e}") from e

    return int(response["count"])
