"""
Domain type definitions for trash migrations.

Entities mirror the content repository's value objects; the protocols are the
narrow contracts the step executor needs from the repository and the matcher.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


@dataclass
class ContentInfo:
    """
    Content metadata attached to every location.

    Attributes:
        id: Content id
        content_type_id: Id of the content type
        section_id: Id of the section the content belongs to
        modification_date: Last modification time
        published_date: First publication time
    """
    id: int
    content_type_id: int
    name: str = ""
    owner_id: Optional[int] = None
    section_id: int = 1
    main_location_id: Optional[int] = None
    main_language_code: str = "eng-GB"
    current_version_no: int = 1
    always_available: bool = False
    modification_date: Optional[datetime] = None
    published_date: Optional[datetime] = None
    remote_id: str = ""


@dataclass
class Location:
    """A location in the content tree."""
    id: int
    content_info: ContentInfo
    remote_id: str = ""
    parent_location_id: Optional[int] = None
    path_string: str = ""
    depth: int = 0
    priority: int = 0
    hidden: bool = False
    invisible: bool = False
    sort_field: int = 1
    sort_order: int = 1

    @property
    def content_id(self) -> int:
        return self.content_info.id


@dataclass
class TrashItem(Location):
    """A location that has been moved to the trash."""
    trashed: Optional[datetime] = None


@dataclass
class ContentType:
    id: int
    identifier: str
    name: str = ""


@dataclass
class Section:
    id: int
    identifier: str
    name: str = ""


class LocatedContent(Protocol):
    """
    Anything with hierarchy fields and an attached content record.

    Both Location and TrashItem satisfy it, so reference extraction works the
    same for recovered locations and for trashed items.
    """
    id: int
    remote_id: str
    parent_location_id: Optional[int]
    path_string: str
    depth: int
    priority: int
    hidden: bool
    sort_field: int
    sort_order: int
    content_info: ContentInfo

    @property
    def content_id(self) -> int: ...


class Repository(Protocol):
    """Repository services used by trash steps."""

    def empty_trash(self) -> None: ...

    def recover(self, item: TrashItem) -> Location: ...

    def delete_trash_item(self, item: TrashItem) -> None: ...

    def load_content_type(self, content_type_id: int) -> ContentType: ...

    def load_section(self, section_id: int) -> Section: ...


class TrashMatcher(Protocol):
    """Turns a resolved match specification into trashed items."""

    def match(self, conditions: Dict[str, Any]) -> List[TrashItem]: ...
