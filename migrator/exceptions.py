"""Migrator exceptions."""

from typing import Any, List, Optional
from dataclasses import dataclass


@dataclass
class ValidationError:
    """Single validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class MigrationValidationError(Exception):
    """Raised when a migration file fails validation.

    The loader accumulates every problem it finds before raising, so the CLI
    can report them all at once and map to the validation exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))


class StepExecutionError(Exception):
    """Base class for every failure that aborts a single step.

    ``action`` is the step action the failure belongs to. Errors raised below
    the dispatcher (resolver, extractor, store) do not know it; the dispatcher
    fills it in before the error reaches the caller.
    """

    step_type = "trash"

    def __init__(self, message: str, action: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.action = action

    def __str__(self) -> str:
        if self.action:
            return f"{self.step_type} {self.action}: {self.message}"
        return self.message


class UnsupportedActionError(StepExecutionError):
    """Action or step type not handled by this executor."""


class MissingMatchConditionError(StepExecutionError):
    """A matching action was requested without a match specification."""

    def __init__(self, action: str):
        super().__init__("a match condition is required", action)


class UnresolvedReferenceError(StepExecutionError):
    """One or more reference placeholders name unknown identifiers."""

    def __init__(self, identifiers: List[str], action: Optional[str] = None):
        self.identifiers = sorted(identifiers)
        super().__init__(f"undefined references: {self.identifiers}", action)


class AmbiguousReferenceTargetError(StepExecutionError):
    """References requested but more than one entity is involved."""

    def __init__(self, count: int, action: Optional[str] = None):
        self.count = count
        super().__init__(
            f"{count} items matched and a references section is specified; "
            "references can be set only when exactly 1 item matches",
            action,
        )


class EmptyResultError(StepExecutionError):
    """A single entity was required but nothing matched."""

    def __init__(self, action: Optional[str] = None):
        super().__init__(
            "no items matched and a references section is specified; "
            "references can be set only when exactly 1 item matches",
            action,
        )


class UnsupportedReferenceAttributeError(StepExecutionError):
    """A reference definition names an attribute that cannot be extracted."""

    def __init__(self, attribute: Any, action: Optional[str] = None):
        self.attribute = attribute
        super().__init__(
            f"setting references for attribute '{attribute}' is not supported",
            action,
        )


class DuplicateReferenceError(StepExecutionError):
    """Write to an existing reference without ``overwrite``."""

    def __init__(self, identifier: str, action: Optional[str] = None):
        self.identifier = identifier
        super().__init__(
            f"a reference named '{identifier}' already exists; "
            "set 'overwrite: true' to replace it",
            action,
        )
