"""
Trash step module.

Provides step types, action handlers and the dispatcher executing them.
"""

from .types import Action, ReferenceDefinition, Step, parse_references
from .handlers import HANDLERS, HandlerContext
from .dispatcher import TrashStepDispatcher


__all__ = [
    "Action",
    "ReferenceDefinition",
    "Step",
    "parse_references",
    "HANDLERS",
    "HandlerContext",
    "TrashStepDispatcher",
]
