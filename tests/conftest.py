"""Shared fixtures and builders for trash step tests."""

from datetime import datetime, timezone

import pytest

from migrator.domain.memory import InMemoryRepository
from migrator.domain.types import ContentInfo, ContentType, Location, Section, TrashItem
from migrator.references.store import ReferenceStore


MODIFIED = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
PUBLISHED = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)


def make_trash_item(location_id=60, content_id=58, content_type_id=2, **overrides) -> TrashItem:
    """Build a trashed article under location 2."""
    content_info = ContentInfo(
        id=content_id,
        content_type_id=content_type_id,
        name=f"Article {content_id}",
        owner_id=14,
        section_id=1,
        main_location_id=location_id,
        main_language_code="eng-GB",
        current_version_no=3,
        always_available=True,
        modification_date=MODIFIED,
        published_date=PUBLISHED,
        remote_id=f"content-{content_id}",
    )
    fields = dict(
        id=location_id,
        content_info=content_info,
        remote_id=f"loc-{location_id}",
        parent_location_id=2,
        path_string=f"/1/2/{location_id}/",
        depth=2,
        priority=5,
        hidden=False,
        sort_field=2,
        sort_order=0,
    )
    fields.update(overrides)
    return TrashItem(**fields)


class StubMatcher:
    """Matcher returning a fixed list and recording the conditions it got."""

    def __init__(self, items=()):
        self.items = list(items)
        self.conditions = []

    def match(self, conditions):
        self.conditions.append(conditions)
        return list(self.items)


@pytest.fixture
def make_repository():
    """Factory for an in-memory repository holding the given trashed items."""
    def _make(*items):
        return InMemoryRepository(
            trash=items,
            locations=[
                Location(
                    id=2,
                    content_info=ContentInfo(id=1, content_type_id=1, name="Home"),
                    path_string="/1/2/",
                    depth=1,
                ),
            ],
            content_types=[
                ContentType(id=1, identifier="folder", name="Folder"),
                ContentType(id=2, identifier="article", name="Article"),
            ],
            sections=[
                Section(id=1, identifier="standard", name="Standard"),
                Section(id=3, identifier="media", name="Media"),
            ],
        )
    return _make


@pytest.fixture
def store():
    return ReferenceStore()
