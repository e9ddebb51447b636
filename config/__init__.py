"""
Configuration management for the Elasticsearch aggregation demos.
"""

from .indices import INDEX_REGISTRY, get_index_config, get_field_mapping
from .environments import (
    get_environment_config,
    get_current_environment,
    get_demo_index,
)
from .logging_config import configure_logging

__all__ = [
    "INDEX_REGISTRY",
    "get_index_config",
    "get_field_mapping",
    "get_environment_config",
    "get_current_environment",
    "get_demo_index",
    "configure_logging",
]
