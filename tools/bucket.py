"""
Bucket aggregation demos.

Bucket aggregations do not compute metrics. They create buckets of
documents, each associated with a criterion that decides whether a
document of the current context falls into it, and report how many
documents landed in each bucket. Unlike metric aggregations they can hold
sub-aggregations, which run once per bucket produced by their parent.

Each demo builds one request against the demo index, runs it, logs the
typed result and returns it.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from agg_types.requests import RangeSpec
from agg_types.results import MultiBucketResult, SingleBucketResult
from config.environments import get_demo_index
from config.indices import get_date_format, get_field_mapping
from tools.primitives.aggregate import aggregate_elastic_data
from utils.aggregation_builder import (
    avg_aggregation,
    date_range_aggregation,
    filter_aggregation,
    filters_aggregation,
    global_aggregation,
    histogram_aggregation,
    missing_aggregation,
    nested_aggregation,
    order_by_aggregation,
    order_by_count,
    order_by_key,
    reverse_nested_aggregation,
    significant_terms_aggregation,
    terms_aggregation,
    with_sub_aggregations,
)
from utils.query_builder import build_bool_query, build_term_query
from utils.response_parser import parse_multi_bucket, parse_single_bucket


logger = logging.getLogger(__name__)

AGG_NAME = "agg"

DEFAULT_DATE_RANGES = (
    RangeSpec.unbounded_to("20160522161616"),
    RangeSpec(from_="20160522161616", to="20210522161616"),
    RangeSpec.unbounded_from("20210522161616"),
)


def _index(index: Optional[str]) -> str:
    return index or get_demo_index()


def global_aggregation_demo(index: Optional[str] = None) -> SingleBucketResult:
    """
    Global aggregation.

    Defines a single bucket of all documents in the search context (the
    index), unaffected by the search query. It can only be a top-level
    aggregation.
    """
    index = _index(index)
    class_code = get_field_mapping("class_code", index)

    aggregation = with_sub_aggregations(
        global_aggregation(),
        {class_code: terms_aggregation(class_code)},
    )

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_single_bucket(response.aggregations, AGG_NAME)
    logger.info(">>> %s", result.doc_count)
    return result


def filter_aggregation_demo(index: Optional[str] = None, parent_id: int = 5) -> SingleBucketResult:
    """
    Filter aggregation.

    A single bucket of the documents in the current context that match
    one filter query.
    """
    index = _index(index)
    query = build_bool_query(must=[build_term_query(get_field_mapping("parent_id", index), parent_id)])

    response = aggregate_elastic_data(index, {AGG_NAME: filter_aggregation(query)})
    result = parse_single_bucket(response.aggregations, AGG_NAME)
    logger.info(">>> %s", result.doc_count)
    return result


def filters_aggregation_demo(index: Optional[str] = None) -> MultiBucketResult:
    """
    Filters aggregation.

    One bucket per named filter. Each bucket holds every document matching
    its filter, so a document can appear in several buckets.
    """
    index = _index(index)
    parent_id = get_field_mapping("parent_id", index)

    aggregation = filters_aggregation({
        "men": build_term_query(parent_id, 5),
        "women": build_term_query(parent_id, 1),
    })

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info(">>> key: %s, doc_count: %s", bucket.key_string, bucket.doc_count)
    return result


def missing_aggregation_demo(index: Optional[str] = None) -> SingleBucketResult:
    """
    Missing aggregation.

    A single bucket of the documents that have no value for a field (the
    field is absent or null). Usually combined with other field-based
    bucket aggregations to count what they could not place.
    """
    index = _index(index)
    aggregation = missing_aggregation(get_field_mapping("parent_id", index))

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_single_bucket(response.aggregations, AGG_NAME)
    logger.info(">>> %s", result.doc_count)
    return result


def nested_aggregation_demo(index: Optional[str] = None, path: Optional[str] = None) -> SingleBucketResult:
    """
    Nested aggregation.

    Gathers the nested documents under ``path`` into one bucket so they
    can be aggregated further.
    """
    index = _index(index)
    path = path or get_field_mapping("parent_id", index)

    response = aggregate_elastic_data(index, {AGG_NAME: nested_aggregation(path)})
    result = parse_single_bucket(response.aggregations, AGG_NAME)
    logger.info(">>> %s", result.doc_count)
    return result


def reverse_nested_aggregation_demo(index: Optional[str] = None) -> List[SingleBucketResult]:
    """
    Reverse nested aggregation.

    Joins back from nested documents to their root documents. It must be
    defined inside a nested aggregation. Here every reseller type bucket
    counts the products that have a reseller of that type.

    Returns:
        One reverse_nested result per reseller type bucket
    """
    index = _index(index)

    by_type = with_sub_aggregations(
        terms_aggregation(get_field_mapping("reseller_type", index)),
        {"reseller_to_product": reverse_nested_aggregation()},
    )
    aggregation = with_sub_aggregations(
        nested_aggregation(get_field_mapping("resellers", index)),
        {"type": by_type},
    )

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    nested = parse_single_bucket(response.aggregations, AGG_NAME)
    types = parse_multi_bucket(nested.aggregations, "type")

    results = []
    for bucket in types.buckets:
        reseller_to_product = parse_single_bucket(bucket.aggregations, "reseller_to_product")
        logger.info(">>> %s", reseller_to_product.doc_count)
        results.append(reseller_to_product)
    return results


def terms_aggregation_demo(index: Optional[str] = None, size: Optional[int] = None) -> MultiBucketResult:
    """
    Terms aggregation.

    One bucket per unique value of a field with the number of documents
    holding it, ordered by document count. Counts are approximate when not
    every bucket is returned.
    """
    index = _index(index)
    aggregation = terms_aggregation(get_field_mapping("parent_id", index), size=size)

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info(">>> key: %s, docCount: %s", bucket.key, bucket.doc_count)
    return result


def order_aggregation_demo(
    index: Optional[str] = None,
    order: str = "metric",
    ascending: bool = False,
) -> MultiBucketResult:
    """
    Terms aggregation with an explicit bucket order.

    Args:
        index: Index to search
        order: "count" (doc count), "key" (term) or "metric" (the
            avg_parentId sub-aggregation)
        ascending: Sort direction

    Raises:
        ValueError: If the order is unknown
    """
    index = _index(index)
    parent_id = get_field_mapping("parent_id", index)

    if order == "count":
        aggregation = terms_aggregation(parent_id, order=order_by_count(ascending))
    elif order == "key":
        aggregation = terms_aggregation(parent_id, order=order_by_key(ascending))
    elif order == "metric":
        aggregation = with_sub_aggregations(
            terms_aggregation(parent_id, order=order_by_aggregation("avg_parentId", ascending)),
            {"avg_parentId": avg_aggregation(parent_id)},
        )
    else:
        raise ValueError(f"Unknown bucket order: {order}. Use 'count', 'key' or 'metric'")

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info(">>> key: %s, docCount: %s", bucket.key, bucket.doc_count)
    return result


def significant_terms_aggregation_demo(index: Optional[str] = None, parent_id: int = 5) -> MultiBucketResult:
    """
    Significant terms aggregation.

    Returns terms that are unusually frequent in the query's result set
    compared to the whole index.
    """
    index = _index(index)
    field = get_field_mapping("parent_id", index)
    query = build_bool_query(must=[build_term_query(field, parent_id)])

    response = aggregate_elastic_data(
        index,
        {AGG_NAME: significant_terms_aggregation(field)},
        query=query,
    )
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info(">>> key: %s, docCount: %s", bucket.key, bucket.doc_count)
    return result


def date_range_aggregation_demo(
    index: Optional[str] = None,
    ranges: Sequence[RangeSpec] = DEFAULT_DATE_RANGES,
) -> MultiBucketResult:
    """
    Date range aggregation.

    Buckets documents by ranges of a date field. Bounds accept date math;
    ``from`` is included and ``to`` excluded.
    """
    index = _index(index)
    aggregation = date_range_aggregation(
        get_field_mapping("create_time", index),
        ranges,
        format=get_date_format("create_time", index),
    )

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info(
            "key [%s], from [%s], to [%s], doc_count [%s]",
            bucket.key_string,
            bucket.from_as_string,
            bucket.to_as_string,
            bucket.doc_count,
        )
    return result


def histogram_aggregation_demo(index: Optional[str] = None, interval: float = 1) -> MultiBucketResult:
    """
    Histogram aggregation.

    Buckets a numeric field dynamically into fixed-width intervals.
    """
    index = _index(index)
    aggregation = histogram_aggregation(get_field_mapping("parent_id", index), interval)

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_multi_bucket(response.aggregations, AGG_NAME)
    for bucket in result.buckets:
        logger.info("key [%s], doc_count [%s]", bucket.key_string, bucket.doc_count)
    return result


BUCKET_AGGREGATIONS: Dict[str, Callable[..., object]] = {
    "global": global_aggregation_demo,
    "filter": filter_aggregation_demo,
    "filters": filters_aggregation_demo,
    "missing": missing_aggregation_demo,
    "nested": nested_aggregation_demo,
    "reverse_nested": reverse_nested_aggregation_demo,
    "terms": terms_aggregation_demo,
    "order": order_aggregation_demo,
    "significant_terms": significant_terms_aggregation_demo,
    "date_range": date_range_aggregation_demo,
    "histogram": histogram_aggregation_demo,
}
