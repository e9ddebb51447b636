"""
Index registry for the aggregation demos.

Maps logical field names to the Elasticsearch fields of each demo index so
the demos never hard-code the cluster schema.
"""

from typing import Dict, Any, Optional, List

from .environments import get_demo_index


INDEX_REGISTRY: Dict[str, Dict[str, Any]] = {
    "dcvciclass": {
        "pattern": "dcvciclass",
        "fields": {
            "id": "id",
            "parent_id": "parentId",
            "class_level": "classLvl",
            "class_code": "classCode.keyword",
            "create_time": "createTime",
            "resellers": "resellers",
            "reseller_type": "resellers.type",
        },
        "nested_paths": ["resellers"],
        "date_formats": {
            "create_time": "yyyyMMddHHmmss",
        },
    },
}


def get_index_config(index: Optional[str] = None) -> Dict[str, Any]:
    """
    Get the registry entry for an index.

    Indices missing from the registry fall back to the default demo
    layout so a renamed copy of the demo index works out of the box.

    Args:
        index: Index name (uses the configured demo index if not specified)

    Returns:
        Index configuration dictionary
    """
    if index is None:
        index = get_demo_index()

    config = INDEX_REGISTRY.get(index)
    if config is None:
        config = dict(INDEX_REGISTRY["dcvciclass"], pattern=index)
    return config


def get_field_mapping(field: str, index: Optional[str] = None) -> str:
    """
    Resolve a logical field name to the actual Elasticsearch field.

    Args:
        field: Logical field name (e.g. "parent_id")
        index: Index name (uses the configured demo index if not specified)

    Returns:
        Elasticsearch field name; unknown names are returned unchanged
    """
    return get_index_config(index)["fields"].get(field, field)


def get_date_format(field: str, index: Optional[str] = None) -> Optional[str]:
    return get_index_config(index).get("date_formats", {}).get(field)


def list_nested_paths(index: Optional[str] = None) -> List[str]:
    return list(get_index_config(index).get("nested_paths", []))
