"""
Pytest configuration and fixtures for the aggregation demo tests.
"""

import pytest
import os
import sys
from unittest.mock import Mock, patch
from typing import Dict, Any

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)


DEMO_INDEX = "dcvciclass"


@pytest.fixture
def mock_elasticsearch():
    """Mock Elasticsearch client for testing."""
    mock_es = Mock()

    # Mock search response
    mock_es.search.return_value = {
        "took": 5,
        "timed_out": False,
        "hits": {
            "total": {"value": 100, "relation": "eq"},
            "max_score": None,
            "hits": [],
        },
        "aggregations": {},
    }

    mock_es.count.return_value = {"count": 100}
    mock_es.indices.exists.return_value = True
    mock_es.indices.get_mapping.return_value = {
        DEMO_INDEX: {
            "mappings": {
                "properties": {
                    "parentId": {"type": "long"},
                    "classLvl": {"type": "integer"},
                    "createTime": {"type": "date", "format": "yyyyMMddHHmmss"},
                    "resellers": {"type": "nested"},
                }
            }
        }
    }

    return mock_es


@pytest.fixture
def mock_es_client(mock_elasticsearch):
    """Patch get_elasticsearch_client wherever it is looked up."""
    with patch('tools.primitives.aggregate.get_elasticsearch_client', return_value=mock_elasticsearch), \
         patch('tools.primitives.stats.get_elasticsearch_client', return_value=mock_elasticsearch), \
         patch('utils.connection.get_elasticsearch_client', return_value=mock_elasticsearch):
        yield mock_elasticsearch


@pytest.fixture
def set_aggregations(mock_es_client):
    """Set the aggregations section the mocked search returns."""
    def _set(aggregations: Dict[str, Any]) -> None:
        mock_es_client.search.return_value = {
            "took": 3,
            "timed_out": False,
            "hits": {"total": {"value": 100, "relation": "eq"}, "hits": []},
            "aggregations": aggregations,
        }
    return _set


@pytest.fixture
def search_kwargs(mock_es_client):
    """Keyword arguments of the last search call."""
    def _kwargs() -> Dict[str, Any]:
        return mock_es_client.search.call_args.kwargs
    return _kwargs


@pytest.fixture
def sample_aggregation():
    """Sample aggregation for testing."""
    return {
        "agg": {
            "terms": {
                "field": "parentId",
                "size": 10
            }
        }
    }


@pytest.fixture
def test_environment_config():
    """Test environment configuration."""
    return {
        "name": "test",
        "elasticsearch": {
            "url": "http://localhost:9200",
            "username": None,
            "password": None,
            "api_key": None,
            "timeout_ms": 5000,
            "verify_certs": False,
            "ca_certs": None,
        },
        "demo": {
            "index": "demo-test",
        },
        "logging": {
            "level": "DEBUG",
        },
    }


@pytest.fixture
def patch_environment(test_environment_config):
    """Patch environment configuration for testing."""
    with patch('config.environments.get_environment_config', return_value=test_environment_config), \
         patch('config.environments.get_current_environment', return_value='test'):
        yield test_environment_config
