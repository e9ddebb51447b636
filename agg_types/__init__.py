"""
Type definitions for the Elasticsearch aggregation demos.
"""

from .requests import (
    AggregationQuery,
    RangeSpec,
    SortOrder,
)

from .results import (
    AggregationResponse,
    Bucket,
    ExtendedStatsResult,
    Hit,
    MultiBucketResult,
    Percentile,
    PercentileRanksResult,
    PercentilesResult,
    SingleBucketResult,
    SingleValueMetric,
    StatsResult,
    TopHitsResult,
)

__all__ = [
    # Requests
    "AggregationQuery",
    "RangeSpec",
    "SortOrder",
    # Results
    "AggregationResponse",
    "Bucket",
    "ExtendedStatsResult",
    "Hit",
    "MultiBucketResult",
    "Percentile",
    "PercentileRanksResult",
    "PercentilesResult",
    "SingleBucketResult",
    "SingleValueMetric",
    "StatsResult",
    "TopHitsResult",
]
