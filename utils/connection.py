"""
Elasticsearch connection management.
"""

import logging
from typing import Optional

from elasticsearch import ApiError, Elasticsearch, TransportError

from config.environments import get_elasticsearch_config


logger = logging.getLogger(__name__)


def get_elasticsearch_client(environment: Optional[str] = None) -> Elasticsearch:
    """
    Create an Elasticsearch client for the specified environment.

    Args:
        environment: Environment name (uses current if not specified)

    Returns:
        Configured Elasticsearch client
    """
    config = get_elasticsearch_config(environment)

    # Build connection parameters
    params = {
        "hosts": [config["url"]],
        "request_timeout": config["timeout_ms"] / 1000.0,
        "verify_certs": config.get("verify_certs", True),
    }

    # Add CA certificates if provided
    if config.get("ca_certs"):
        params["ca_certs"] = config["ca_certs"]

    # Add authentication
    if config.get("api_key"):
        params["api_key"] = config["api_key"]
    elif config.get("username") and config.get("password"):
        params["basic_auth"] = (config["username"], config["password"])

    logger.debug("Creating Elasticsearch client for %s", config["url"])
    return Elasticsearch(**params)


def test_connection(environment: Optional[str] = None) -> bool:
    """
    Test Elasticsearch connection using a low-privilege operation.

    Args:
        environment: Environment name (uses current if not specified)

    Returns:
        True if connection successful
    """
    es = get_elasticsearch_client(environment)

    try:
        # ping() needs cluster:monitor, a zero-size search only needs read
        response = es.search(
            index="*",
            size=0,
            query={"match_all": {}},
            timeout="5s",
        )
        return "hits" in response

    except (ApiError, TransportError) as e:
        logger.warning("Elasticsearch connection check failed: %s", e)
        return False


# not a pytest test
test_connection.__test__ = False
