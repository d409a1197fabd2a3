"""Tests for reference placeholder resolution in match specifications."""

import copy

import pytest

from migrator.exceptions import UnresolvedReferenceError
from migrator.references.resolver import ReferenceResolver
from migrator.references.store import ReferenceStore


@pytest.fixture
def resolver():
    store = ReferenceStore({
        "parent": 2,
        "type": "article",
        "visible": True,
        "ids": [60, 61],
    })
    return ReferenceResolver(store)


def test_structure_without_placeholders_is_unchanged(resolver):
    spec = {
        "and": [
            {"content_type_identifier": ["article", "folder"]},
            {"parent_location_id": 2, "is_hidden": False, "priority": None},
        ],
        "name": "reference without colon",
    }

    assert resolver.resolve(spec) == spec


def test_whole_value_keeps_stored_type(resolver):
    assert resolver.resolve("reference:parent") == 2
    assert resolver.resolve("reference:visible") is True
    assert resolver.resolve("reference:ids") == [60, 61]


def test_every_occurrence_is_substituted_and_shape_kept(resolver):
    spec = {
        "or": [
            {"parent_location_id": "reference:parent"},
            {"parent_location_id": ["reference:parent", 5]},
        ],
        "content_type_identifier": "reference:type",
    }

    assert resolver.resolve(spec) == {
        "or": [
            {"parent_location_id": 2},
            {"parent_location_id": [2, 5]},
        ],
        "content_type_identifier": "article",
    }


def test_embedded_tokens_are_rendered_as_text(resolver):
    assert resolver.resolve("/1/[reference:parent]/") == "/1/2/"
    assert resolver.resolve("[reference:type]-[reference:visible]") == "article-true"


def test_keys_are_not_resolved(resolver):
    spec = {"reference:parent": "reference:parent"}

    assert resolver.resolve(spec) == {"reference:parent": 2}


def test_unresolved_identifiers_are_all_reported(resolver):
    spec = {"a": "reference:zeta", "b": ["x", "/[reference:alpha]/"], "c": "reference:parent"}

    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolver.resolve(spec)

    assert exc_info.value.identifiers == ["alpha", "zeta"]


def test_resolving_twice_is_a_no_op(resolver):
    spec = {"parent_location_id": "reference:parent", "path": "/1/[reference:parent]/"}

    once = resolver.resolve(spec)

    assert resolver.resolve(once) == once


def test_input_is_not_mutated(resolver):
    spec = {"parent_location_id": ["reference:parent"]}
    original = copy.deepcopy(spec)

    resolver.resolve(spec)

    assert spec == original


def test_tuples_become_lists_in_order(resolver):
    assert resolver.resolve(("reference:parent", 3)) == [2, 3]


def test_failed_resolution_does_not_leak_into_next_call(resolver):
    with pytest.raises(UnresolvedReferenceError):
        resolver.resolve("reference:missing")

    assert resolver.resolve("reference:parent") == 2
