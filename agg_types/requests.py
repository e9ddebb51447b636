"""
Request-side type definitions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


class SortOrder(str, Enum):
    """Sort order for bucket ordering."""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_ascending(cls, ascending: bool) -> "SortOrder":
        return cls.ASC if ascending else cls.DESC


@dataclass
class RangeSpec:
    """One range of a range or date_range aggregation.

    ``from_`` is inclusive and ``to`` exclusive, as in Elasticsearch.
    Leaving one side as ``None`` makes the range unbounded on that side.
    """
    from_: Optional[Union[str, float]] = None
    to: Optional[Union[str, float]] = None
    key: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {}
        if self.key is not None:
            body["key"] = self.key
        if self.from_ is not None:
            body["from"] = self.from_
        if self.to is not None:
            body["to"] = self.to
        return body

    @classmethod
    def unbounded_to(cls, to: Union[str, float], key: Optional[str] = None) -> "RangeSpec":
        return cls(to=to, key=key)

    @classmethod
    def unbounded_from(cls, from_: Union[str, float], key: Optional[str] = None) -> "RangeSpec":
        return cls(from_=from_, key=key)


@dataclass
class AggregationQuery:
    """Aggregation query structure."""
    index_pattern: str
    query: Dict[str, Any] = field(default_factory=lambda: {"match_all": {}})
    aggregations: Dict[str, Any] = field(default_factory=dict)
    size: int = 0  # Don't return documents by default

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Elasticsearch search body."""
        return {
            "query": self.query,
            "aggs": self.aggregations,
            "size": self.size,
        }
