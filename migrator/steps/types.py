"""
Step type definitions for trash migrations.

Defines the action set, reference definitions and the step description handed
to the dispatcher by the loader.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Action(str, Enum):
    """Trash step actions."""
    PURGE = "purge"
    RECOVER = "recover"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value

    @property
    def requires_match(self) -> bool:
        return self is not Action.PURGE

    @property
    def sets_references(self) -> bool:
        return self is not Action.PURGE


@dataclass(frozen=True)
class ReferenceDefinition:
    """
    A value to capture after the step has run.

    Attributes:
        identifier: Key the value is stored under
        attribute: Attribute of the acted-upon entity to extract
        overwrite: Whether an existing value under identifier may be replaced
    """
    identifier: str
    attribute: str
    overwrite: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceDefinition":
        return cls(
            identifier=data["identifier"],
            attribute=data["attribute"],
            overwrite=bool(data.get("overwrite", False)),
        )


def parse_references(references: Any) -> Tuple[ReferenceDefinition, ...]:
    """
    Build reference definitions from their DSL form.

    Accepts a list of {identifier, attribute, overwrite} mappings or the
    shorthand mapping {identifier: attribute}.
    """
    if not references:
        return ()
    if isinstance(references, dict):
        return tuple(
            ReferenceDefinition(identifier=identifier, attribute=attribute)
            for identifier, attribute in references.items()
        )
    return tuple(ReferenceDefinition.from_dict(ref) for ref in references)


@dataclass(frozen=True)
class Step:
    """
    Declarative description of one migration step.

    ``action`` is kept as written in the migration file; the dispatcher turns
    it into an Action and rejects anything it does not handle.
    """
    action: str
    step_type: str = "trash"
    match: Optional[Dict[str, Any]] = None
    references: Tuple[ReferenceDefinition, ...] = field(default_factory=tuple)
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or f"{self.step_type} {self.action}"

    @property
    def reference_attributes(self) -> List[str]:
        return [ref.attribute for ref in self.references]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        """Create a Step from a validated DSL mapping."""
        return cls(
            action=data["mode"],
            step_type=data["type"],
            match=data.get("match"),
            references=parse_references(data.get("references")),
            name=data.get("name"),
        )
