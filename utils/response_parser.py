"""
Response parsing utilities for Elasticsearch.
"""

from typing import Any, Dict

from agg_types.results import (
    ExtendedStatsResult,
    MultiBucketResult,
    PercentileRanksResult,
    PercentilesResult,
    SingleBucketResult,
    SingleValueMetric,
    StatsResult,
    TopHitsResult,
)


def get_aggregation(aggregations: Dict[str, Any], name: str) -> Dict[str, Any]:
    """
    Look up a named aggregation result.

    Args:
        aggregations: Aggregations section of a response or a bucket
        name: Aggregation name

    Returns:
        Raw aggregation result

    Raises:
        KeyError: If the aggregation is missing from the response
    """
    try:
        return aggregations[name]
    except KeyError:
        raise KeyError(
            f"Aggregation [{name}] not found in response, available: {sorted(aggregations)}"
        ) from None


def parse_single_bucket(aggregations: Dict[str, Any], name: str) -> SingleBucketResult:
    """
    Parse a global, filter, missing, nested or reverse_nested result.

    Args:
        aggregations: Aggregations section of a response or a bucket
        name: Aggregation name

    Returns:
        SingleBucketResult with doc count and raw sub-aggregations
    """
    return SingleBucketResult.from_dict(name, get_aggregation(aggregations, name))


def parse_multi_bucket(aggregations: Dict[str, Any], name: str) -> MultiBucketResult:
    """
    Parse a filters, terms, significant_terms, range or histogram result.

    Args:
        aggregations: Aggregations section of a response or a bucket
        name: Aggregation name

    Returns:
        MultiBucketResult with buckets in response order
    """
    return MultiBucketResult.from_dict(name, get_aggregation(aggregations, name))


def parse_single_value_metric(aggregations: Dict[str, Any], name: str) -> SingleValueMetric:
    return SingleValueMetric.from_dict(name, get_aggregation(aggregations, name))


def parse_stats(aggregations: Dict[str, Any], name: str) -> StatsResult:
    return StatsResult.from_dict(name, get_aggregation(aggregations, name))


def parse_extended_stats(aggregations: Dict[str, Any], name: str) -> ExtendedStatsResult:
    return ExtendedStatsResult.from_dict(name, get_aggregation(aggregations, name))


def parse_percentiles(aggregations: Dict[str, Any], name: str) -> PercentilesResult:
    return PercentilesResult.from_dict(name, get_aggregation(aggregations, name))


def parse_percentile_ranks(aggregations: Dict[str, Any], name: str) -> PercentileRanksResult:
    return PercentileRanksResult.from_dict(name, get_aggregation(aggregations, name))


def parse_top_hits(aggregations: Dict[str, Any], name: str) -> TopHitsResult:
    return TopHitsResult.from_dict(name, get_aggregation(aggregations, name))
