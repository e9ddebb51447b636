"""
Unit tests for configuration and the index registry.
"""

import logging
from unittest.mock import patch

from config.environments import get_demo_index, get_elasticsearch_config
from config.indices import get_date_format, get_field_mapping, get_index_config, list_nested_paths
from config.logging_config import configure_logging
from utils.connection import get_elasticsearch_client


def test_field_mapping_for_demo_index():
    assert get_field_mapping("parent_id", "dcvciclass") == "parentId"
    assert get_field_mapping("class_level", "dcvciclass") == "classLvl"
    assert get_field_mapping("reseller_type", "dcvciclass") == "resellers.type"


def test_unknown_field_passes_through():
    assert get_field_mapping("someOtherField", "dcvciclass") == "someOtherField"


def test_unregistered_index_uses_demo_layout():
    config = get_index_config("dcvciclass-copy")

    assert config["pattern"] == "dcvciclass-copy"
    assert config["fields"]["parent_id"] == "parentId"


def test_date_format_and_nested_paths():
    assert get_date_format("create_time", "dcvciclass") == "yyyyMMddHHmmss"
    assert get_date_format("parent_id", "dcvciclass") is None
    assert list_nested_paths("dcvciclass") == ["resellers"]


def test_demo_index_from_environment(patch_environment):
    assert get_demo_index() == "demo-test"
    assert get_elasticsearch_config()["timeout_ms"] == 5000


def test_client_built_from_config(patch_environment, test_environment_config):
    test_environment_config["elasticsearch"]["username"] = "elastic"
    test_environment_config["elasticsearch"]["password"] = "changeme"

    with patch("utils.connection.Elasticsearch") as es_class:
        get_elasticsearch_client()

    es_class.assert_called_once_with(
        hosts=["http://localhost:9200"],
        request_timeout=5.0,
        verify_certs=False,
        basic_auth=("elastic", "changeme"),
    )


def test_api_key_wins_over_basic_auth(patch_environment, test_environment_config):
    test_environment_config["elasticsearch"].update(api_key="key", username="u", password="p")

    with patch("utils.connection.Elasticsearch") as es_class:
        get_elasticsearch_client()

    kwargs = es_class.call_args.kwargs
    assert kwargs["api_key"] == "key"
    assert "basic_auth" not in kwargs


def test_configure_logging_quiets_transport():
    with patch("config.logging_config.logging.basicConfig") as basic_config:
        configure_logging("debug")

    assert basic_config.call_args.kwargs["level"] == "DEBUG"
    assert logging.getLogger("elastic_transport").level == logging.WARNING
