"""
Input validation utilities.
"""

import re
from typing import Any, Iterable, List


_INVALID_AGG_NAME_CHARS = re.compile(r"[\[\]>]")


def validate_index_pattern(pattern: str) -> None:
    """
    Validate an Elasticsearch index pattern.

    Args:
        pattern: Index pattern to validate

    Raises:
        ValueError: If pattern is invalid
    """
    if not pattern:
        raise ValueError("Index pattern cannot be empty")

    if pattern.startswith("_"):
        raise ValueError("Index pattern cannot start with underscore")

    # Check for invalid characters
    invalid_chars = re.findall(r'[^a-zA-Z0-9\-_.*,]', pattern)
    if invalid_chars:
        raise ValueError(f"Invalid characters in index pattern: {invalid_chars}")


def validate_aggregation_name(name: str) -> None:
    """
    Validate an aggregation name.

    Elasticsearch uses '>' and '[...]' in bucket paths, so they cannot
    appear in a name.

    Raises:
        ValueError: If name is invalid
    """
    if not name:
        raise ValueError("Aggregation name cannot be empty")

    if _INVALID_AGG_NAME_CHARS.search(name):
        raise ValueError(
            f"Invalid aggregation name [{name}]: names cannot contain '[', ']' or '>'"
        )


def validate_field(field: str) -> None:
    if not field or not field.strip():
        raise ValueError("Field name cannot be empty")


def validate_interval(interval: float) -> float:
    """
    Validate a histogram interval.

    Raises:
        ValueError: If interval is not strictly positive
    """
    if interval <= 0:
        raise ValueError(f"Histogram interval must be greater than 0, got {interval}")
    return interval


def validate_percents(percents: Iterable[float]) -> List[float]:
    """
    Validate percentiles to compute.

    Returns:
        Percents as floats, in the order given

    Raises:
        ValueError: If the list is empty or a percent is outside [0, 100]
    """
    values = [float(p) for p in percents]
    if not values:
        raise ValueError("At least one percent is required")

    out_of_range = [p for p in values if not 0 <= p <= 100]
    if out_of_range:
        raise ValueError(f"Percents must be between 0 and 100: {out_of_range}")
    return values


def validate_rank_values(values: Iterable[float]) -> List[float]:
    values = [float(v) for v in values]
    if not values:
        raise ValueError("At least one value is required for percentile ranks")
    return values


def validate_size(size: int, max_size: int = 10000) -> int:
    """
    Validate and clamp size parameter.

    Args:
        size: Requested size
        max_size: Maximum allowed size

    Returns:
        Valid size value
    """
    return clamp_value(size, min_value=0, max_value=max_size)


def clamp_value(value: Any, min_value: Any, max_value: Any) -> Any:
    """
    Clamp a value between min and max.

    Args:
        value: Value to clamp
        min_value: Minimum allowed value
        max_value: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_value, min(value, max_value))
