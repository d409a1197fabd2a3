"""Tests for the fixture-backed repository and matcher."""

from datetime import datetime, timezone

import pytest

from migrator.domain.memory import InMemoryRepository, InMemoryTrashMatcher, NotFoundError
from migrator.domain.types import Location, TrashItem
from tests.conftest import make_trash_item


FIXTURE = """
content_types:
  - {id: 2, identifier: article, name: Article}
sections:
  - {id: 1, identifier: standard}
locations:
  - id: 2
    path_string: /1/2/
    depth: 1
    content: {id: 1, content_type_id: 1, name: Home}
trash:
  - id: 60
    remote_id: loc-60
    parent_location_id: 2
    path_string: /1/2/60/
    depth: 2
    trashed: 2024-04-02T08:00:00+00:00
    content:
      id: 58
      content_type_id: 2
      name: Hello
      main_location_id: 60
      modification_date: 1709294400
      published_date: 2024-01-15 09:30:00
"""


class TestInMemoryRepository:
    """Repository behaviour used by the CLI and the step tests."""

    def test_from_fixture(self, tmp_path):
        fixture_path = tmp_path / "repo.yaml"
        fixture_path.write_text(FIXTURE)

        repository = InMemoryRepository.from_fixture(fixture_path)

        item = repository.trash[60]
        assert isinstance(item, TrashItem)
        assert item.content_id == 58
        assert item.trashed == datetime(2024, 4, 2, 8, 0, tzinfo=timezone.utc)
        assert item.content_info.modification_date == datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
        assert item.content_info.published_date == datetime(2024, 1, 15, 9, 30)
        assert isinstance(repository.locations[2], Location)
        assert repository.load_content_type(2).identifier == "article"
        assert repository.load_section(1).identifier == "standard"

    def test_fixture_must_be_a_mapping(self, tmp_path):
        fixture_path = tmp_path / "repo.yaml"
        fixture_path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="YAML mapping"):
            InMemoryRepository.from_fixture(fixture_path)

    def test_recover_creates_new_location(self, make_repository):
        item = make_trash_item(60)
        repository = make_repository(item)

        location = repository.recover(item)

        assert location.id == 61
        assert location.path_string == "/1/2/61/"
        assert location.parent_location_id == 2
        assert location.remote_id == "loc-60"
        assert location.content_info.main_location_id == 61
        assert repository.locations[61] is location
        assert 60 not in repository.trash
        # The trashed item itself is left untouched
        assert item.content_info.main_location_id == 60

    def test_recover_under_unknown_parent_uses_item_path(self, make_repository):
        item = make_trash_item(60, parent_location_id=43, path_string="/1/43/60/")
        repository = make_repository(item)

        assert repository.recover(item).path_string == "/1/43/61/"

    def test_missing_objects(self, make_repository):
        repository = make_repository()

        with pytest.raises(NotFoundError):
            repository.delete_trash_item(make_trash_item(60))
        with pytest.raises(NotFoundError):
            repository.recover(make_trash_item(60))
        with pytest.raises(NotFoundError):
            repository.load_content_type(99)
        with pytest.raises(NotFoundError):
            repository.load_section(99)


class TestInMemoryTrashMatcher:
    """Equality matching over trashed items."""

    @pytest.fixture
    def matcher(self, make_repository):
        repository = make_repository(
            make_trash_item(70, content_id=68, content_type_id=1),
            make_trash_item(60),
            make_trash_item(80, content_id=78, parent_location_id=43),
        )
        return InMemoryTrashMatcher(repository)

    def test_all_conditions_must_hold(self, matcher):
        items = matcher.match({"content_type_identifier": "article", "parent_location_id": 2})

        assert [item.id for item in items] == [60]

    def test_list_means_any_of_in_id_order(self, matcher):
        items = matcher.match({"location_id": [80, 70, 60]})

        assert [item.id for item in items] == [60, 70, 80]

    def test_empty_conditions_match_nothing(self, matcher):
        assert matcher.match({}) == []

    def test_unknown_condition(self, matcher):
        with pytest.raises(ValueError, match="'colour'"):
            matcher.match({"colour": "red"})

    def test_conditions_must_be_a_mapping(self, matcher):
        with pytest.raises(ValueError, match="mapping"):
            matcher.match(["location_id", 60])
