"""Run-scoped reference store.

Holds the values captured by earlier steps so later steps can refer to them
from their match specifications. One store lives for one migration run and is
handed to every step explicitly; nothing is persisted.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..exceptions import DuplicateReferenceError, UnresolvedReferenceError


logger = logging.getLogger(__name__)


class ReferenceStore:
    """
    Mapping from reference identifier to a scalar value.

    Write policy: the first write of an identifier wins. A later write of the
    same identifier is rejected with DuplicateReferenceError unless it asks for
    ``overwrite``, in which case it replaces the stored value.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        """
        Initialize the store.

        Args:
            initial: Optional values to seed the store with
        """
        self._references: Dict[str, Any] = {}
        if initial:
            for identifier, value in initial.items():
                self.add(identifier, value, overwrite=True)

    def add(self, identifier: str, value: Any, overwrite: bool = False) -> bool:
        """
        Store a value under an identifier.

        Args:
            identifier: Reference identifier
            value: Value to store
            overwrite: Whether an existing value may be replaced

        Returns:
            True once the value is stored

        Raises:
            DuplicateReferenceError: If the identifier exists and overwrite is False
        """
        if identifier in self._references and not overwrite:
            raise DuplicateReferenceError(identifier)

        self._references[identifier] = value
        logger.debug(f"Set reference {identifier} = {value!r}")
        return True

    def get(self, identifier: str) -> Any:
        """
        Get the value stored under an identifier.

        Raises:
            UnresolvedReferenceError: If nothing is stored under the identifier
        """
        if identifier not in self._references:
            raise UnresolvedReferenceError([identifier])
        return self._references[identifier]

    def has(self, identifier: str) -> bool:
        return identifier in self._references

    def identifiers(self) -> List[str]:
        return list(self._references.keys())

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot of the current references."""
        return dict(self._references)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._references

    def __len__(self) -> int:
        return len(self._references)

    def __iter__(self) -> Iterator[str]:
        return iter(self._references)
