"""
Typed aggregation results.

Elasticsearch returns aggregations as nested JSON. These dataclasses give
each aggregation family (buckets, single-value metrics, stats,
percentiles, top hits) a typed view.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


# Keys Elasticsearch puts on a bucket next to its sub-aggregations
_BUCKET_KEYS = {
    "key",
    "key_as_string",
    "doc_count",
    "from",
    "to",
    "from_as_string",
    "to_as_string",
    "score",
    "bg_count",
    "doc_count_error_upper_bound",
}

_SINGLE_BUCKET_KEYS = {"doc_count", "meta"}


def _sub_aggregations(data: Dict[str, Any], reserved: set) -> Dict[str, Any]:
    return {
        name: value
        for name, value in data.items()
        if name not in reserved and isinstance(value, dict)
    }


@dataclass
class SingleBucketResult:
    """Result of global, filter, missing, nested and reverse_nested."""
    name: str
    doc_count: int
    aggregations: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "SingleBucketResult":
        return cls(
            name=name,
            doc_count=data.get("doc_count", 0),
            aggregations=_sub_aggregations(data, _SINGLE_BUCKET_KEYS),
        )


@dataclass
class Bucket:
    """A bucket of a multi-bucket aggregation."""
    key: Any
    doc_count: int
    key_as_string: Optional[str] = None
    aggregations: Dict[str, Any] = field(default_factory=dict)
    # range buckets
    from_: Optional[float] = None
    to: Optional[float] = None
    from_as_string: Optional[str] = None
    to_as_string: Optional[str] = None
    # significant_terms buckets
    score: Optional[float] = None
    bg_count: Optional[int] = None

    @property
    def key_string(self) -> str:
        """Key as Elasticsearch formats it, falling back to ``str(key)``."""
        if self.key_as_string is not None:
            return self.key_as_string
        return str(self.key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], key: Any = None) -> "Bucket":
        return cls(
            key=data.get("key", key),
            doc_count=data.get("doc_count", 0),
            key_as_string=data.get("key_as_string"),
            aggregations=_sub_aggregations(data, _BUCKET_KEYS),
            from_=data.get("from"),
            to=data.get("to"),
            from_as_string=data.get("from_as_string"),
            to_as_string=data.get("to_as_string"),
            score=data.get("score"),
            bg_count=data.get("bg_count"),
        )


@dataclass
class MultiBucketResult:
    """Result of filters, terms, significant_terms, ranges and histograms."""
    name: str
    buckets: List[Bucket] = field(default_factory=list)
    doc_count_error_upper_bound: Optional[int] = None
    sum_other_doc_count: Optional[int] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "MultiBucketResult":
        raw_buckets: Union[List[Dict[str, Any]], Dict[str, Dict[str, Any]]] = data.get("buckets", [])

        # keyed responses (filters, keyed ranges) come back as an object
        if isinstance(raw_buckets, dict):
            buckets = [Bucket.from_dict(bucket, key=key) for key, bucket in raw_buckets.items()]
        else:
            buckets = [Bucket.from_dict(bucket) for bucket in raw_buckets]

        return cls(
            name=name,
            buckets=buckets,
            doc_count_error_upper_bound=data.get("doc_count_error_upper_bound"),
            sum_other_doc_count=data.get("sum_other_doc_count"),
        )

    def get_bucket(self, key: Any) -> Optional[Bucket]:
        for bucket in self.buckets:
            if bucket.key == key or bucket.key_as_string == key:
                return bucket
        return None


@dataclass
class SingleValueMetric:
    """Result of min, max, sum, avg and value_count.

    ``value`` is None when no document in scope has the field.
    """
    name: str
    value: Optional[float]
    value_as_string: Optional[str] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "SingleValueMetric":
        return cls(
            name=name,
            value=data.get("value"),
            value_as_string=data.get("value_as_string"),
        )


@dataclass
class StatsResult:
    """Result of a stats aggregation."""
    name: str
    count: int
    min: Optional[float]
    max: Optional[float]
    avg: Optional[float]
    sum: float

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "StatsResult":
        return cls(
            name=name,
            count=data.get("count", 0),
            min=data.get("min"),
            max=data.get("max"),
            avg=data.get("avg"),
            sum=data.get("sum", 0.0),
        )


@dataclass
class ExtendedStatsResult(StatsResult):
    """Result of an extended_stats aggregation."""
    sum_of_squares: Optional[float] = None
    variance: Optional[float] = None
    std_deviation: Optional[float] = None
    std_deviation_bounds_upper: Optional[float] = None
    std_deviation_bounds_lower: Optional[float] = None

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "ExtendedStatsResult":
        bounds = data.get("std_deviation_bounds") or {}
        return cls(
            name=name,
            count=data.get("count", 0),
            min=data.get("min"),
            max=data.get("max"),
            avg=data.get("avg"),
            sum=data.get("sum", 0.0),
            sum_of_squares=data.get("sum_of_squares"),
            variance=data.get("variance"),
            std_deviation=data.get("std_deviation"),
            std_deviation_bounds_upper=bounds.get("upper"),
            std_deviation_bounds_lower=bounds.get("lower"),
        )


@dataclass
class Percentile:
    percent: float
    value: Optional[float]


def _percentile_pairs(data: Dict[str, Any]) -> List[tuple]:
    """(key, value) pairs from keyed or unkeyed percentile values."""
    values = data.get("values", {})
    if isinstance(values, dict):
        return [(float(key), value) for key, value in values.items() if not key.endswith("_as_string")]
    return [(float(item["key"]), item.get("value")) for item in values]


@dataclass
class PercentilesResult:
    """Result of a percentiles aggregation, sorted by percent."""
    name: str
    percentiles: List[Percentile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "PercentilesResult":
        percentiles = [Percentile(percent=key, value=value) for key, value in _percentile_pairs(data)]
        percentiles.sort(key=lambda p: p.percent)
        return cls(name=name, percentiles=percentiles)

    def percentile(self, percent: float) -> Optional[float]:
        for item in self.percentiles:
            if item.percent == percent:
                return item.value
        raise KeyError(f"Percent {percent} was not requested")

    def __iter__(self):
        return iter(self.percentiles)


@dataclass
class PercentileRanksResult:
    """Result of a percentile_ranks aggregation, sorted by value.

    Elasticsearch keys the response by the requested value and reports the
    percent of documents at or below it.
    """
    name: str
    ranks: List[Percentile] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "PercentileRanksResult":
        ranks = [Percentile(percent=percent, value=key) for key, percent in _percentile_pairs(data)]
        ranks.sort(key=lambda p: p.value)
        return cls(name=name, ranks=ranks)

    def percent(self, value: float) -> Optional[float]:
        for item in self.ranks:
            if item.value == value:
                return item.percent
        raise KeyError(f"Value {value} was not requested")

    def __iter__(self):
        return iter(self.ranks)


@dataclass
class Hit:
    id: str
    index: str
    score: Optional[float] = None
    source: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Hit":
        return cls(
            id=data.get("_id", ""),
            index=data.get("_index", ""),
            score=data.get("_score"),
            source=data.get("_source", {}),
        )

    def source_as_string(self) -> str:
        return json.dumps(self.source, ensure_ascii=False, default=str)


@dataclass
class TopHitsResult:
    """Result of a top_hits aggregation."""
    name: str
    total: int
    max_score: Optional[float] = None
    hits: List[Hit] = field(default_factory=list)

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "TopHitsResult":
        hits_data = data.get("hits", {})
        total = hits_data.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return cls(
            name=name,
            total=total,
            max_score=hits_data.get("max_score"),
            hits=[Hit.from_dict(hit) for hit in hits_data.get("hits", [])],
        )


@dataclass
class AggregationResponse:
    """Elasticsearch aggregation response."""
    took: int
    timed_out: bool
    aggregations: Dict[str, Any]
    total: int = 0
    hits: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregationResponse":
        """Create from Elasticsearch response dict."""
        hits_data = data.get("hits", {})
        total = hits_data.get("total", 0)
        if isinstance(total, dict):
            total = total.get("value", 0)

        return cls(
            took=data.get("took", 0),
            timed_out=data.get("timed_out", False),
            aggregations=data.get("aggregations", {}),
            total=total,
            hits=hits_data.get("hits", []),
        )
