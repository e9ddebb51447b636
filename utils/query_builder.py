"""
Query building utilities for Elasticsearch.
"""

from typing import Dict, Any, List, Optional, Union


def build_match_all_query() -> Dict[str, Any]:
    return {"match_all": {}}


def build_term_query(
    field: str,
    value: Union[str, int, float, bool],
) -> Dict[str, Any]:
    """
    Build a term query for exact matching.

    Args:
        field: Field name
        value: Value to match

    Returns:
        Term query dict
    """
    return {"term": {field: value}}


def build_range_query(
    field: str,
    gt: Optional[Any] = None,
    gte: Optional[Any] = None,
    lt: Optional[Any] = None,
    lte: Optional[Any] = None,
    format: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a range query.

    Args:
        field: Field name
        gt: Exclusive lower bound
        gte: Inclusive lower bound
        lt: Exclusive upper bound
        lte: Inclusive upper bound
        format: Date format for string bounds

    Returns:
        Range query dict

    Raises:
        ValueError: If no bound is given
    """
    bounds = {"gt": gt, "gte": gte, "lt": lt, "lte": lte}
    range_query: Dict[str, Any] = {k: v for k, v in bounds.items() if v is not None}
    if not range_query:
        raise ValueError(f"Range query on {field} needs at least one bound")
    if format:
        range_query["format"] = format

    return {"range": {field: range_query}}


def build_bool_query(
    must: Optional[List[Dict[str, Any]]] = None,
    must_not: Optional[List[Dict[str, Any]]] = None,
    should: Optional[List[Dict[str, Any]]] = None,
    filter: Optional[List[Dict[str, Any]]] = None,
    minimum_should_match: Optional[Union[int, str]] = None,
) -> Dict[str, Any]:
    """
    Build a bool query combining multiple conditions.

    A bool query without clauses is valid and matches every document.

    Args:
        must: Queries that must match
        must_not: Queries that must not match
        should: Optional queries (OR logic)
        filter: Filter context queries (no scoring)
        minimum_should_match: Minimum number of should clauses

    Returns:
        Bool query dict
    """
    bool_query: Dict[str, Any] = {}

    if must:
        bool_query["must"] = must
    if must_not:
        bool_query["must_not"] = must_not
    if should:
        bool_query["should"] = should
    if filter:
        bool_query["filter"] = filter
    if minimum_should_match is not None:
        bool_query["minimum_should_match"] = minimum_should_match

    return {"bool": bool_query}
