"""
Metric aggregation demos.

Metric aggregations compute numbers from values extracted from the
aggregated documents. Single-value metrics (avg, min, ...) produce one
number, multi-value metrics (stats, percentiles, ...) produce several.
The difference matters when a bucket aggregation orders its buckets by a
metric sub-aggregation.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional

from agg_types.results import (
    ExtendedStatsResult,
    PercentileRanksResult,
    PercentilesResult,
    SingleValueMetric,
    StatsResult,
    TopHitsResult,
)
from config.environments import get_demo_index
from config.indices import get_field_mapping
from tools.primitives.aggregate import aggregate_elastic_data
from utils.aggregation_builder import (
    avg_aggregation,
    extended_stats_aggregation,
    max_aggregation,
    min_aggregation,
    percentile_ranks_aggregation,
    percentiles_aggregation,
    stats_aggregation,
    sum_aggregation,
    terms_aggregation,
    top_hits_aggregation,
    value_count_aggregation,
    with_sub_aggregations,
)
from utils.query_builder import build_bool_query, build_range_query
from utils.response_parser import (
    parse_extended_stats,
    parse_multi_bucket,
    parse_percentile_ranks,
    parse_percentiles,
    parse_single_value_metric,
    parse_stats,
    parse_top_hits,
)


logger = logging.getLogger(__name__)

AGG_NAME = "agg"

DEFAULT_RANK_VALUES = (1, 2, 3)


def _index(index: Optional[str]) -> str:
    return index or get_demo_index()


def _class_level_query(index: str, min_level: int) -> Dict:
    return build_bool_query(must=[build_range_query(get_field_mapping("class_level", index), gte=min_level)])


def _single_value(builder: Callable[[str], Dict], index: Optional[str], min_level: int) -> SingleValueMetric:
    index = _index(index)
    aggregation = builder(get_field_mapping("class_level", index))

    response = aggregate_elastic_data(
        index,
        {AGG_NAME: aggregation},
        query=_class_level_query(index, min_level),
    )
    result = parse_single_value_metric(response.aggregations, AGG_NAME)
    logger.info(">>> %s", result.value)
    return result


def min_demo(index: Optional[str] = None, min_level: int = 2) -> SingleValueMetric:
    """Minimum class level of documents with a class level of at least ``min_level``."""
    return _single_value(min_aggregation, index, min_level)


def max_demo(index: Optional[str] = None, min_level: int = 2) -> SingleValueMetric:
    """Maximum class level."""
    return _single_value(max_aggregation, index, min_level)


def sum_demo(index: Optional[str] = None, min_level: int = 2) -> SingleValueMetric:
    return _single_value(sum_aggregation, index, min_level)


def avg_demo(index: Optional[str] = None, min_level: int = 2) -> SingleValueMetric:
    return _single_value(avg_aggregation, index, min_level)


def stats_demo(index: Optional[str] = None, min_level: int = 2) -> StatsResult:
    """
    Stats aggregation.

    Computes min, max, sum, count and avg of a numeric field in one pass.
    """
    index = _index(index)

    response = aggregate_elastic_data(
        index,
        {AGG_NAME: stats_aggregation(get_field_mapping("class_level", index))},
        query=_class_level_query(index, min_level),
    )
    result = parse_stats(response.aggregations, AGG_NAME)
    logger.info("Min >>> %s", result.min)
    logger.info("Max >>> %s", result.max)
    logger.info("Avg >>> %s", result.avg)
    logger.info("Sum >>> %s", result.sum)
    logger.info("Count >>> %s", result.count)
    return result


def extended_stats_demo(index: Optional[str] = None, min_level: int = 20) -> ExtendedStatsResult:
    """
    Extended stats aggregation.

    Stats plus sum_of_squares, variance, std_deviation and
    std_deviation_bounds.
    """
    index = _index(index)

    response = aggregate_elastic_data(
        index,
        {AGG_NAME: extended_stats_aggregation(get_field_mapping("class_level", index))},
        query=_class_level_query(index, min_level),
    )
    result = parse_extended_stats(response.aggregations, AGG_NAME)
    logger.info("Min >>> %s", result.min)
    logger.info("Max >>> %s", result.max)
    logger.info("Avg >>> %s", result.avg)
    logger.info("Sum >>> %s", result.sum)
    logger.info("Count >>> %s", result.count)
    logger.info("stdDeviation >>> %s", result.std_deviation)
    logger.info("sumOfSquares >>> %s", result.sum_of_squares)
    logger.info("variance >>> %s", result.variance)
    return result


def value_count_demo(index: Optional[str] = None, min_level: int = 20) -> SingleValueMetric:
    """
    Value count aggregation.

    Counts the values of a field in the aggregated documents.
    """
    index = _index(index)

    response = aggregate_elastic_data(
        index,
        {AGG_NAME: value_count_aggregation(get_field_mapping("class_level", index))},
        query=_class_level_query(index, min_level),
    )
    result = parse_single_value_metric(response.aggregations, AGG_NAME)
    logger.info("Count >>> %s", result.value)
    return result


def percentiles_demo(
    index: Optional[str] = None,
    percents: Optional[Iterable[float]] = None,
) -> PercentilesResult:
    """
    Percentiles aggregation.

    Args:
        index: Index to search
        percents: Custom percentiles, e.g. (1, 6, 10, 20, 30, 75, 95, 99);
            Elasticsearch's defaults when omitted
    """
    index = _index(index)
    aggregation = percentiles_aggregation(get_field_mapping("id", index), percents)

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_percentiles(response.aggregations, AGG_NAME)
    for item in result:
        logger.info("percent >>> %s", item.percent)
        logger.info("value >>> %s", item.value)
    return result


def percentile_ranks_demo(
    index: Optional[str] = None,
    values: Iterable[float] = DEFAULT_RANK_VALUES,
) -> PercentileRanksResult:
    """
    Percentile ranks aggregation.

    For each given value, the percentage of documents whose class level is
    at or below it.
    """
    index = _index(index)
    aggregation = percentile_ranks_aggregation(get_field_mapping("class_level", index), values)

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation})
    result = parse_percentile_ranks(response.aggregations, AGG_NAME)
    for item in result:
        logger.info("percent >>> %s", item.percent)
        logger.info("value >>> %s", item.value)
    return result


def top_hits_demo(
    index: Optional[str] = None,
    size: int = 1,
    from_: int = 10,
) -> List[TopHitsResult]:
    """
    Top hits aggregation.

    Tracks the most relevant documents of each bucket. Accepts the usual
    search options (from, size, sort, _source, explain).

    Returns:
        One top_hits result per parentId bucket
    """
    index = _index(index)

    aggregation = with_sub_aggregations(
        terms_aggregation(get_field_mapping("parent_id", index)),
        {"top": top_hits_aggregation(size=size, from_=from_)},
    )

    response = aggregate_elastic_data(index, {AGG_NAME: aggregation}, query=build_bool_query())
    terms = parse_multi_bucket(response.aggregations, AGG_NAME)

    results = []
    for bucket in terms.buckets:
        logger.info(">>> bucket_key: %s, doc_count: %s", bucket.key, bucket.doc_count)
        top_hits = parse_top_hits(bucket.aggregations, "top")
        for hit in top_hits.hits:
            logger.info(">>> id [%s], _source [%s]", hit.id, hit.source_as_string())
        results.append(top_hits)
    return results


METRIC_AGGREGATIONS: Dict[str, Callable[..., object]] = {
    "min": min_demo,
    "max": max_demo,
    "sum": sum_demo,
    "avg": avg_demo,
    "stats": stats_demo,
    "extended_stats": extended_stats_demo,
    "value_count": value_count_demo,
    "percentiles": percentiles_demo,
    "percentile_ranks": percentile_ranks_demo,
    "top_hits": top_hits_demo,
}
