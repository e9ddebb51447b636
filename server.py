"""
FastMCP Elasticsearch aggregation demo server.

This server exposes the aggregation demos as tools:
- health: Check Elasticsearch connectivity and the demo index
- list_aggregation_demos: Names of the available demos
- run_bucket_aggregation: Run one bucket aggregation demo
- run_metric_aggregation: Run one metric aggregation demo
- aggregate_data_primitive: Raw aggregation request
"""

import logging
from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP

# Load environment variables before config reads them
load_dotenv()

from config import (  # noqa: E402
    configure_logging,
    get_current_environment,
    get_demo_index,
)
from tools.bucket import BUCKET_AGGREGATIONS  # noqa: E402
from tools.metric import METRIC_AGGREGATIONS  # noqa: E402
from tools.primitives import aggregate_elastic_data, check_index_exists  # noqa: E402
from utils import test_connection  # noqa: E402
from utils.errors import ElasticsearchOperationError  # noqa: E402


logger = logging.getLogger(__name__)

# Initialize MCP server
mcp = FastMCP("es-aggregation-demo")


def _to_json(result: Any) -> Any:
    if isinstance(result, list):
        return [_to_json(item) for item in result]
    if is_dataclass(result):
        return asdict(result)
    return result


def _run_demo(registry: Dict[str, Any], kind: str, name: str, index: Optional[str]) -> Dict[str, Any]:
    demo = registry.get(name)
    if demo is None:
        raise ValueError(f"Unknown {kind} aggregation: {name}. Available: {sorted(registry)}")

    index = index or get_demo_index()
    logger.info("Running %s aggregation demo '%s' on %s", kind, name, index)
    return {
        "aggregation": name,
        "kind": kind,
        "index": index,
        "result": _to_json(demo(index=index)),
    }


# ========== HEALTH TOOL ==========

@mcp.tool()
def health() -> Dict[str, Any]:
    """
    Check connectivity and configuration.

    Returns status information about:
    - Elasticsearch connectivity
    - Whether the demo index exists
    - Environment configuration
    """
    env = get_current_environment()
    index = get_demo_index()

    connected = test_connection()
    index_exists = False
    if connected:
        try:
            index_exists = check_index_exists(index)
        except ElasticsearchOperationError as e:
            logger.warning("Could not check demo index %s: %s", index, e)

    return {
        "overall_status": "healthy" if connected and index_exists else "degraded",
        "environment": env,
        "services": {
            "elasticsearch": {
                "service": "elasticsearch",
                "connected": connected,
                "demo_index": index,
                "demo_index_exists": index_exists,
            },
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ========== DEMO TOOLS ==========

@mcp.tool()
def list_aggregation_demos() -> Dict[str, List[str]]:
    """List the bucket and metric aggregation demos that can be run."""
    return {
        "bucket": sorted(BUCKET_AGGREGATIONS),
        "metric": sorted(METRIC_AGGREGATIONS),
    }


@mcp.tool()
def run_bucket_aggregation(name: str, index: Optional[str] = None) -> Dict[str, Any]:
    """
    Run a bucket aggregation demo against the cluster.

    Args:
        name: Demo name (global, filter, filters, missing, nested,
            reverse_nested, terms, order, significant_terms, date_range,
            histogram)
        index: Index to aggregate (defaults to the configured demo index)

    Returns:
        The typed aggregation result as a dict
    """
    return _run_demo(BUCKET_AGGREGATIONS, "bucket", name, index)


@mcp.tool()
def run_metric_aggregation(name: str, index: Optional[str] = None) -> Dict[str, Any]:
    """
    Run a metric aggregation demo against the cluster.

    Args:
        name: Demo name (min, max, sum, avg, stats, extended_stats,
            value_count, percentiles, percentile_ranks, top_hits)
        index: Index to aggregate (defaults to the configured demo index)

    Returns:
        The typed aggregation result as a dict
    """
    return _run_demo(METRIC_AGGREGATIONS, "metric", name, index)


# ========== PRIMITIVE TOOL ==========

@mcp.tool()
def aggregate_data_primitive(
    index_pattern: str,
    aggregations: Dict[str, Any],
    query: Optional[Dict[str, Any]] = None,
    size: int = 0,
) -> Dict[str, Any]:
    """
    Low-level Elasticsearch aggregation.

    Provides direct access to the aggregation DSL without any demo logic.

    Args:
        index_pattern: Index pattern (e.g., "dcvciclass")
        aggregations: Aggregation DSL (name -> aggregation body)
        query: Query scoping the aggregated documents
        size: Number of documents to return alongside the aggregations

    Returns:
        Raw aggregation response
    """
    response = aggregate_elastic_data(
        index_pattern=index_pattern,
        aggregations=aggregations,
        query=query,
        size=size,
    )

    return {
        "took": response.took,
        "timed_out": response.timed_out,
        "total": response.total,
        "aggregations": response.aggregations,
        "hits": response.hits,
    }


if __name__ == "__main__":
    configure_logging()
    mcp.run()
