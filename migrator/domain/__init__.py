"""Domain entities and repository contracts."""

from .types import (
    ContentInfo,
    ContentType,
    LocatedContent,
    Location,
    Repository,
    Section,
    TrashItem,
    TrashMatcher,
)

__all__ = [
    'ContentInfo',
    'ContentType',
    'LocatedContent',
    'Location',
    'Repository',
    'Section',
    'TrashItem',
    'TrashMatcher',
]
