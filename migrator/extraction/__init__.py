"""Reference attribute extraction module."""

from .attributes import ATTRIBUTE_GETTERS, AttributeExtractor, single_of
from .sort import sort_field_to_hash, sort_order_to_hash

__all__ = [
    "ATTRIBUTE_GETTERS",
    "AttributeExtractor",
    "single_of",
    "sort_field_to_hash",
    "sort_order_to_hash",
]
