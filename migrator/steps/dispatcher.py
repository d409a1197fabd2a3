"""
Trash step dispatcher.

Validates a step, resolves references in its match specification, runs the
action handler and stores the requested references afterwards.
"""

import dataclasses
import logging
from typing import Dict, List, Optional

from ..domain.types import LocatedContent, Repository, TrashMatcher
from ..exceptions import (
    MissingMatchConditionError,
    StepExecutionError,
    UnsupportedActionError,
)
from ..extraction.attributes import AttributeExtractor, single_of
from ..references.resolver import ReferenceResolver
from ..references.store import ReferenceStore
from .handlers import HANDLERS, Handler, HandlerContext
from .types import Action, Step


logger = logging.getLogger(__name__)


class TrashStepDispatcher:
    """
    Executes trash steps against a repository.

    The reference store is owned by the run and passed in; the dispatcher only
    writes to it after a handler has completed.
    """

    SUPPORTED_STEP_TYPES = {"trash"}

    def __init__(
        self,
        repository: Repository,
        matcher: TrashMatcher,
        store: ReferenceStore,
        handlers: Optional[Dict[Action, Handler]] = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            repository: Repository services for trash, content types and sections
            matcher: Matcher turning match specifications into trashed items
            store: Run-scoped reference store
            handlers: Action handlers (defaults to HANDLERS)

        Raises:
            ValueError: If an Action has no handler
        """
        self.handlers = handlers if handlers is not None else HANDLERS
        missing = set(Action) - set(self.handlers)
        if missing:
            raise ValueError(f"Missing handlers for actions: {sorted(a.value for a in missing)}")

        self.store = store
        self.resolver = ReferenceResolver(store)
        self.extractor = AttributeExtractor(repository)
        self.context = HandlerContext(repository=repository, matcher=matcher)

    def supports(self, step: Step) -> bool:
        return step.step_type in self.SUPPORTED_STEP_TYPES and step.action in self._action_names()

    def execute(self, step: Step) -> List[LocatedContent]:
        """
        Execute one step.

        Args:
            step: Step description

        Returns:
            The collection references were taken from: recovered locations for
            recover, the matched items for delete, an empty list for purge

        Raises:
            StepExecutionError: On any failure of the step; domain errors
                raised by the repository propagate unchanged
        """
        try:
            action = self._resolve_action(step)
            logger.info(f"Executing step: {step.label}")

            if action.requires_match:
                if step.match is None:
                    raise MissingMatchConditionError(action.value)
                step = dataclasses.replace(step, match=self.resolver.resolve(step.match))

            if action.sets_references:
                self.extractor.check_supported(step.reference_attributes)
            elif step.references:
                logger.warning(f"{step.label}: references are ignored for action '{action.value}'")

            result = self.handlers[action](step, self.context)

            if action.sets_references and step.references:
                self._set_references(result, step)

            return result

        except StepExecutionError as e:
            if e.action is None:
                e.action = step.action
            logger.error(f"Step failed: {e}")
            raise

    def _resolve_action(self, step: Step) -> Action:
        if step.step_type not in self.SUPPORTED_STEP_TYPES:
            raise UnsupportedActionError(
                f"step type '{step.step_type}' is not supported, "
                f"expected one of {sorted(self.SUPPORTED_STEP_TYPES)}",
                step.action,
            )
        if step.action not in self._action_names():
            raise UnsupportedActionError(
                f"action '{step.action}' is not supported, "
                f"expected one of {sorted(self._action_names())}",
                step.action,
            )
        return Action(step.action)

    def _action_names(self) -> List[str]:
        return [action.value for action in self.handlers]

    def _set_references(self, result: List[LocatedContent], step: Step) -> None:
        """Extract every requested attribute, then store them in order."""
        item = single_of(result)

        values = [(ref, self.extractor.extract(item, ref.attribute)) for ref in step.references]

        for ref, value in values:
            self.store.add(ref.identifier, value, overwrite=ref.overwrite)
            logger.debug(f"{step.label}: reference {ref.identifier} <- {ref.attribute} = {value!r}")
