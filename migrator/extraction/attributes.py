"""
Attribute extraction for reference definitions.

Each supported attribute name maps to a small getter taking the entity and the
repository; the repository is only used by the getters that need a secondary
lookup (content type and section identifiers).
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, TypeVar

from ..domain.types import LocatedContent, Repository
from ..exceptions import (
    AmbiguousReferenceTargetError,
    EmptyResultError,
    UnsupportedReferenceAttributeError,
)
from .sort import sort_field_to_hash, sort_order_to_hash


T = TypeVar('T')
AttributeGetter = Callable[[LocatedContent, Repository], Any]


def _timestamp(value: Optional[datetime]) -> Optional[int]:
    """Integer POSIX timestamp; naive datetimes are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp())


def _location_id(item, repository):
    return item.id


def _remote_id(item, repository):
    return item.remote_id


def _content_type_identifier(item, repository):
    return repository.load_content_type(item.content_info.content_type_id).identifier


def _current_version_no(item, repository):
    return item.content_info.current_version_no


def _section_identifier(item, repository):
    return repository.load_section(item.content_info.section_id).identifier


ATTRIBUTE_GETTERS: Dict[str, AttributeGetter] = {
    'location_id': _location_id,
    'id': _location_id,
    'remote_id': _remote_id,
    'location_remote_id': _remote_id,
    'always_available': lambda item, repository: item.content_info.always_available,
    'content_id': lambda item, repository: item.content_id,
    'content_type_id': lambda item, repository: item.content_info.content_type_id,
    'content_type_identifier': _content_type_identifier,
    'current_version': _current_version_no,
    'current_version_no': _current_version_no,
    'depth': lambda item, repository: item.depth,
    'is_hidden': lambda item, repository: item.hidden,
    'main_location_id': lambda item, repository: item.content_info.main_location_id,
    'main_language_code': lambda item, repository: item.content_info.main_language_code,
    'modification_date': lambda item, repository: _timestamp(item.content_info.modification_date),
    'name': lambda item, repository: item.content_info.name,
    'owner_id': lambda item, repository: item.content_info.owner_id,
    'parent_location_id': lambda item, repository: item.parent_location_id,
    'path': lambda item, repository: item.path_string,
    'priority': lambda item, repository: item.priority,
    'publication_date': lambda item, repository: _timestamp(item.content_info.published_date),
    'section_id': lambda item, repository: item.content_info.section_id,
    'section_identifier': _section_identifier,
    'sort_field': lambda item, repository: sort_field_to_hash(item.sort_field),
    'sort_order': lambda item, repository: sort_order_to_hash(item.sort_order),
}


def single_of(collection: Sequence[T]) -> T:
    """
    Return the only entity of a collection.

    Raises:
        EmptyResultError: If the collection is empty
        AmbiguousReferenceTargetError: If it holds more than one entity
    """
    if len(collection) == 0:
        raise EmptyResultError()
    if len(collection) > 1:
        raise AmbiguousReferenceTargetError(len(collection))
    return collection[0]


class AttributeExtractor:
    """Reads reference attributes from locations and trashed items."""

    def __init__(self, repository: Repository, getters: Optional[Dict[str, AttributeGetter]] = None):
        """
        Initialize the extractor.

        Args:
            repository: Repository used for content type and section lookups
            getters: Attribute table (defaults to ATTRIBUTE_GETTERS)
        """
        self.repository = repository
        self.getters = getters if getters is not None else ATTRIBUTE_GETTERS

    def supports(self, attribute: str) -> bool:
        return attribute in self.getters

    def check_supported(self, attributes: Iterable[str]) -> None:
        """Fail on the first attribute missing from the table."""
        for attribute in attributes:
            if not self.supports(attribute):
                raise UnsupportedReferenceAttributeError(attribute)

    def extract(self, item: LocatedContent, attribute: str) -> Any:
        """
        Extract one attribute value from an entity.

        Raises:
            UnsupportedReferenceAttributeError: If the attribute is not in the table
        """
        getter = self.getters.get(attribute)
        if getter is None:
            raise UnsupportedReferenceAttributeError(attribute)
        return getter(item, self.repository)
