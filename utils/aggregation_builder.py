"""
Aggregation DSL building utilities for Elasticsearch.

Every builder returns a plain aggregation body such as
``{"terms": {"field": "parentId"}}``. Bodies are named when they are placed
into the ``aggs`` section of a request or of a parent bucket aggregation.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from agg_types.requests import RangeSpec, SortOrder
from utils.validation import (
    validate_aggregation_name,
    validate_field,
    validate_interval,
    validate_percents,
    validate_rank_values,
)


Aggregation = Dict[str, Any]

# Bucket aggregations that may carry sub-aggregations
BUCKET_TYPES = {
    "global",
    "filter",
    "filters",
    "missing",
    "nested",
    "reverse_nested",
    "terms",
    "significant_terms",
    "range",
    "date_range",
    "histogram",
    "date_histogram",
}


def aggregation_type(aggregation: Aggregation) -> str:
    """Return the type key of an aggregation body (e.g. "terms")."""
    types = [key for key in aggregation if key not in ("aggs", "aggregations", "meta")]
    if len(types) != 1:
        raise ValueError(f"Aggregation body must have exactly one type, got {types}")
    return types[0]


def with_sub_aggregations(
    aggregation: Aggregation,
    sub_aggregations: Mapping[str, Aggregation],
) -> Aggregation:
    """
    Attach named sub-aggregations to a bucket aggregation.

    Args:
        aggregation: Parent aggregation body
        sub_aggregations: Mapping of name to aggregation body

    Returns:
        A new aggregation body; the input is not modified

    Raises:
        ValueError: If the parent is a metric aggregation, a name is invalid
            or a global aggregation is nested
    """
    parent_type = aggregation_type(aggregation)
    if parent_type not in BUCKET_TYPES:
        raise ValueError(f"Metric aggregation [{parent_type}] cannot hold sub-aggregations")

    merged = dict(aggregation.get("aggs", {}))
    for name, sub in sub_aggregations.items():
        validate_aggregation_name(name)
        if aggregation_type(sub) == "global":
            raise ValueError(f"Global aggregation [{name}] can only be a top-level aggregation")
        merged[name] = sub

    result = dict(aggregation)
    result["aggs"] = merged
    return result


def build_aggregations(aggregations: Mapping[str, Aggregation]) -> Dict[str, Aggregation]:
    """Validate names of top-level aggregations and return the ``aggs`` section."""
    for name in aggregations:
        validate_aggregation_name(name)
    return dict(aggregations)


# ========== BUCKET ORDERS ==========

def order_by_count(ascending: bool = False) -> Dict[str, str]:
    return {"_count": SortOrder.from_ascending(ascending).value}


def order_by_key(ascending: bool = True) -> Dict[str, str]:
    return {"_key": SortOrder.from_ascending(ascending).value}


def order_by_aggregation(path: str, ascending: bool = True) -> Dict[str, str]:
    """
    Order buckets by a sub-aggregation.

    Args:
        path: Name of a single-value metric sub-aggregation, or
            "agg.metric" for a multi-value one (e.g. "stats.avg")
        ascending: Sort direction
    """
    if not path:
        raise ValueError("Order path cannot be empty")
    return {path: SortOrder.from_ascending(ascending).value}


# ========== BUCKET AGGREGATIONS ==========

def global_aggregation() -> Aggregation:
    return {"global": {}}


def filter_aggregation(query: Dict[str, Any]) -> Aggregation:
    return {"filter": query}


def filters_aggregation(
    filters: Mapping[str, Dict[str, Any]],
    other_bucket_key: Optional[str] = None,
) -> Aggregation:
    """
    Build a keyed filters aggregation.

    Args:
        filters: Mapping of bucket key to filter query
        other_bucket_key: Bucket for documents matching no filter

    Raises:
        ValueError: If no filter is given
    """
    if not filters:
        raise ValueError("Filters aggregation needs at least one filter")

    body: Dict[str, Any] = {"filters": dict(filters)}
    if other_bucket_key:
        body["other_bucket_key"] = other_bucket_key
    return {"filters": body}


def missing_aggregation(field: str) -> Aggregation:
    validate_field(field)
    return {"missing": {"field": field}}


def nested_aggregation(path: str) -> Aggregation:
    validate_field(path)
    return {"nested": {"path": path}}


def reverse_nested_aggregation(path: Optional[str] = None) -> Aggregation:
    """Join back from nested documents to ``path`` (root documents when None)."""
    body: Dict[str, Any] = {}
    if path:
        body["path"] = path
    return {"reverse_nested": body}


def terms_aggregation(
    field: str,
    size: Optional[int] = None,
    order: Optional[Union[Dict[str, str], List[Dict[str, str]]]] = None,
    min_doc_count: Optional[int] = None,
) -> Aggregation:
    """
    Build a terms aggregation.

    Args:
        field: Field whose unique values become buckets
        size: Number of buckets to return (Elasticsearch defaults to 10)
        order: Bucket order(s), see ``order_by_*``
        min_doc_count: Minimum document count for a bucket

    Returns:
        Terms aggregation body
    """
    validate_field(field)
    body: Dict[str, Any] = {"field": field}
    if size is not None:
        body["size"] = size
    if order:
        body["order"] = order
    if min_doc_count is not None:
        body["min_doc_count"] = min_doc_count
    return {"terms": body}


def significant_terms_aggregation(field: str, size: Optional[int] = None) -> Aggregation:
    validate_field(field)
    body: Dict[str, Any] = {"field": field}
    if size is not None:
        body["size"] = size
    return {"significant_terms": body}


def date_range_aggregation(
    field: str,
    ranges: Sequence[RangeSpec],
    format: Optional[str] = None,
    keyed: bool = False,
) -> Aggregation:
    """
    Build a date_range aggregation.

    Each range includes its ``from`` value and excludes its ``to`` value.
    Bounds may use date math expressions (e.g. "now-10M/M").

    Args:
        field: Date field
        ranges: Ranges to bucket by
        format: Date format used for the bounds and the bucket keys
        keyed: Return buckets as an object keyed by range key

    Raises:
        ValueError: If no range is given or a range has no bound
    """
    validate_field(field)
    if not ranges:
        raise ValueError("Date range aggregation needs at least one range")

    range_bodies = []
    for spec in ranges:
        if spec.from_ is None and spec.to is None:
            raise ValueError("Each range needs a 'from' or a 'to' bound")
        range_bodies.append(spec.to_dict())

    body: Dict[str, Any] = {"field": field, "ranges": range_bodies}
    if format:
        body["format"] = format
    if keyed:
        body["keyed"] = True
    return {"date_range": body}


def histogram_aggregation(
    field: str,
    interval: float,
    min_doc_count: Optional[int] = None,
) -> Aggregation:
    validate_field(field)
    body: Dict[str, Any] = {"field": field, "interval": validate_interval(interval)}
    if min_doc_count is not None:
        body["min_doc_count"] = min_doc_count
    return {"histogram": body}


# ========== METRIC AGGREGATIONS ==========

def _field_metric(kind: str, field: str) -> Aggregation:
    validate_field(field)
    return {kind: {"field": field}}


def min_aggregation(field: str) -> Aggregation:
    return _field_metric("min", field)


def max_aggregation(field: str) -> Aggregation:
    return _field_metric("max", field)


def sum_aggregation(field: str) -> Aggregation:
    return _field_metric("sum", field)


def avg_aggregation(field: str) -> Aggregation:
    return _field_metric("avg", field)


def stats_aggregation(field: str) -> Aggregation:
    return _field_metric("stats", field)


def extended_stats_aggregation(field: str, sigma: Optional[float] = None) -> Aggregation:
    aggregation = _field_metric("extended_stats", field)
    if sigma is not None:
        aggregation["extended_stats"]["sigma"] = sigma
    return aggregation


def value_count_aggregation(field: str) -> Aggregation:
    return _field_metric("value_count", field)


def percentiles_aggregation(
    field: str,
    percents: Optional[Iterable[float]] = None,
) -> Aggregation:
    """
    Build a percentiles aggregation.

    Args:
        field: Numeric field
        percents: Percentiles to compute; Elasticsearch defaults to
            1, 5, 25, 50, 75, 95 and 99

    Raises:
        ValueError: If a percent is outside [0, 100]
    """
    aggregation = _field_metric("percentiles", field)
    if percents is not None:
        aggregation["percentiles"]["percents"] = validate_percents(percents)
    return aggregation


def percentile_ranks_aggregation(field: str, values: Iterable[float]) -> Aggregation:
    aggregation = _field_metric("percentile_ranks", field)
    aggregation["percentile_ranks"]["values"] = validate_rank_values(values)
    return aggregation


def top_hits_aggregation(
    size: Optional[int] = None,
    from_: Optional[int] = None,
    sort: Optional[List[Dict[str, Any]]] = None,
    source: Optional[Union[bool, List[str]]] = None,
    explain: Optional[bool] = None,
) -> Aggregation:
    """
    Build a top_hits aggregation, usually placed under a bucket aggregation.

    Args:
        size: Hits per bucket (Elasticsearch defaults to 3)
        from_: Offset of the first hit
        sort: Sort criteria for the hits
        source: ``_source`` filtering
        explain: Include score explanation

    Raises:
        ValueError: If size or from_ is negative
    """
    body: Dict[str, Any] = {}
    if size is not None:
        if size < 0:
            raise ValueError(f"Top hits size cannot be negative, got {size}")
        body["size"] = size
    if from_ is not None:
        if from_ < 0:
            raise ValueError(f"Top hits offset cannot be negative, got {from_}")
        body["from"] = from_
    if sort:
        body["sort"] = sort
    if source is not None:
        body["_source"] = source
    if explain is not None:
        body["explain"] = explain
    return {"top_hits": body}
