"""Conversion of location sort codes to their symbolic names."""

from typing import Dict


SORT_FIELDS: Dict[int, str] = {
    1: "path",
    2: "published",
    3: "modified",
    4: "section",
    5: "depth",
    6: "class_identifier",
    7: "class_name",
    8: "priority",
    9: "name",
    10: "modified_subnode",
    11: "node_id",
    12: "contentobject_id",
}

SORT_ORDERS: Dict[int, str] = {
    0: "DESC",
    1: "ASC",
}


def sort_field_to_hash(value: int) -> str:
    """Symbolic name of a location sort field code."""
    if value not in SORT_FIELDS:
        raise ValueError(f"Unsupported sort field: {value!r}")
    return SORT_FIELDS[value]


def sort_order_to_hash(value: int) -> str:
    """Symbolic name of a location sort order code."""
    if value not in SORT_ORDERS:
        raise ValueError(f"Unsupported sort order: {value!r}")
    return SORT_ORDERS[value]
