"""
Trash action handlers.

One function per Action. Each receives a step whose match specification has
already been resolved and returns the collection references are read from.
Domain calls are issued one item at a time, in matcher order; a failing call
propagates as is and items already processed stay processed.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..domain.types import LocatedContent, Repository, TrashItem, TrashMatcher
from ..exceptions import AmbiguousReferenceTargetError
from .types import Action, Step


logger = logging.getLogger(__name__)


@dataclass
class HandlerContext:
    """Collaborators available to action handlers."""
    repository: Repository
    matcher: TrashMatcher


Handler = Callable[[Step, HandlerContext], List[LocatedContent]]


def match_items(step: Step, context: HandlerContext) -> List[TrashItem]:
    """
    Match trashed items and check that references can be set on them.

    Raises:
        AmbiguousReferenceTargetError: If references are requested and more
            than one item matched
    """
    items = list(context.matcher.match(step.match))
    logger.debug(f"{step.label}: matched {len(items)} trashed item(s)")

    if len(items) > 1 and step.references:
        raise AmbiguousReferenceTargetError(len(items))

    return items


def purge(step: Step, context: HandlerContext) -> List[LocatedContent]:
    """Empty the trash entirely."""
    context.repository.empty_trash()
    logger.info("Trash emptied")
    return []


def recover(step: Step, context: HandlerContext) -> List[LocatedContent]:
    """Restore matched items to their original parent; returns the new locations."""
    # TODO: support restoring into a location other than the original parent
    items = match_items(step, context)

    locations = []
    for item in items:
        location = context.repository.recover(item)
        logger.debug(f"Recovered trash item {item.id} as location {location.id}")
        locations.append(location)

    return locations


def delete(step: Step, context: HandlerContext) -> List[LocatedContent]:
    """Permanently remove matched items; returns the matched items."""
    items = match_items(step, context)

    for item in items:
        context.repository.delete_trash_item(item)
        logger.debug(f"Deleted trash item {item.id}")

    return items


HANDLERS: Dict[Action, Handler] = {
    Action.PURGE: purge,
    Action.RECOVER: recover,
    Action.DELETE: delete,
}
