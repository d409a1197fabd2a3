"""
In-memory repository and trash matcher.

A fixture-backed stand-in for the content repository, used by the CLI to run
migrations against a YAML description of the trash and by the tests.
"""

import dataclasses
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import yaml

from ..extraction.attributes import AttributeExtractor
from .types import ContentInfo, ContentType, Location, Section, TrashItem


logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Requested repository object does not exist."""


class InMemoryRepository:
    """
    Repository services backed by plain dictionaries.

    Every mutation is recorded in ``calls`` as (operation, id) so callers can
    check what was done and in which order.
    """

    def __init__(
        self,
        trash: Iterable[TrashItem] = (),
        locations: Iterable[Location] = (),
        content_types: Iterable[ContentType] = (),
        sections: Iterable[Section] = (),
    ):
        self.trash: Dict[int, TrashItem] = {item.id: item for item in trash}
        self.locations: Dict[int, Location] = {loc.id: loc for loc in locations}
        self.content_types: Dict[int, ContentType] = {ct.id: ct for ct in content_types}
        self.sections: Dict[int, Section] = {s.id: s for s in sections}
        self.calls: List[Tuple[str, Optional[int]]] = []

    def trash_items(self) -> List[TrashItem]:
        """Trashed items ordered by location id."""
        return [self.trash[key] for key in sorted(self.trash)]

    def empty_trash(self) -> None:
        self.calls.append(("empty_trash", None))
        logger.debug(f"Emptying trash ({len(self.trash)} item(s))")
        self.trash.clear()

    def recover(self, item: TrashItem) -> Location:
        """Restore a trashed item under its original parent with a fresh location id."""
        self.calls.append(("recover", item.id))
        if item.id not in self.trash:
            raise NotFoundError(f"Trash item {item.id} not found")

        new_id = self._next_location_id()
        parent_path = self._parent_path(item)
        content_info = item.content_info
        if content_info.main_location_id in (None, item.id):
            content_info = dataclasses.replace(content_info, main_location_id=new_id)

        location = Location(
            id=new_id,
            content_info=content_info,
            remote_id=item.remote_id,
            parent_location_id=item.parent_location_id,
            path_string=f"{parent_path}{new_id}/",
            depth=item.depth,
            priority=item.priority,
            hidden=item.hidden,
            invisible=item.invisible,
            sort_field=item.sort_field,
            sort_order=item.sort_order,
        )

        del self.trash[item.id]
        self.locations[new_id] = location
        return location

    def delete_trash_item(self, item: TrashItem) -> None:
        self.calls.append(("delete_trash_item", item.id))
        if item.id not in self.trash:
            raise NotFoundError(f"Trash item {item.id} not found")
        del self.trash[item.id]

    def load_content_type(self, content_type_id: int) -> ContentType:
        if content_type_id not in self.content_types:
            raise NotFoundError(f"Content type {content_type_id} not found")
        return self.content_types[content_type_id]

    def load_section(self, section_id: int) -> Section:
        if section_id not in self.sections:
            raise NotFoundError(f"Section {section_id} not found")
        return self.sections[section_id]

    def _next_location_id(self) -> int:
        known = list(self.trash) + list(self.locations)
        return max(known, default=1) + 1

    def _parent_path(self, item: TrashItem) -> str:
        parent = self.locations.get(item.parent_location_id)
        if parent is not None and parent.path_string:
            return parent.path_string
        # Drop the item's own id from its path
        parts = [p for p in item.path_string.split('/') if p]
        return '/' + ''.join(f"{p}/" for p in parts[:-1]) if parts[:-1] else '/'

    @classmethod
    def from_fixture(cls, fixture_path: Union[str, Path]) -> "InMemoryRepository":
        """
        Build a repository from a YAML fixture file.

        The file holds optional ``content_types``, ``sections``, ``locations``
        and ``trash`` lists; locations and trash items carry their content
        record under ``content``.
        """
        with open(fixture_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Fixture file must contain a YAML mapping: {fixture_path}")

        return cls(
            trash=[_build_location(TrashItem, entry) for entry in data.get('trash', [])],
            locations=[_build_location(Location, entry) for entry in data.get('locations', [])],
            content_types=[ContentType(**entry) for entry in data.get('content_types', [])],
            sections=[Section(**entry) for entry in data.get('sections', [])],
        )


def _to_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, int):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return datetime.fromisoformat(str(value))


def _build_location(cls, entry: Dict[str, Any]):
    entry = dict(entry)
    content = dict(entry.pop('content'))
    for key in ('modification_date', 'published_date'):
        content[key] = _to_datetime(content.get(key))
    if 'trashed' in entry:
        entry['trashed'] = _to_datetime(entry['trashed'])
    return cls(content_info=ContentInfo(**content), **entry)


class InMemoryTrashMatcher:
    """
    Equality lookup over the trashed items of an InMemoryRepository.

    Each key of the conditions mapping is a reference attribute name (such as
    ``content_type_identifier`` or ``remote_id``); a list value matches any of
    its members. All keys must hold. Items come back ordered by id.
    """

    def __init__(self, repository: InMemoryRepository):
        self.repository = repository
        self.extractor = AttributeExtractor(repository)

    def match(self, conditions: Dict[str, Any]) -> List[TrashItem]:
        if not isinstance(conditions, dict):
            raise ValueError(f"Match conditions must be a mapping, got {type(conditions).__name__}")
        if not conditions:
            return []

        for key in conditions:
            if not self.extractor.supports(key):
                raise ValueError(f"Unsupported trash match condition '{key}'")

        return [
            item for item in self.repository.trash_items()
            if all(self._holds(item, key, expected) for key, expected in conditions.items())
        ]

    def _holds(self, item: TrashItem, key: str, expected: Any) -> bool:
        actual = self.extractor.extract(item, key)
        if isinstance(expected, list):
            return actual in expected
        return actual == expected
