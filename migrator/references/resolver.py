"""
Reference resolution for match specifications.
Handles reference:<identifier> values and embedded [reference:<identifier>] tokens.
"""

import json
import re
from typing import Any, Dict, List, Set, Union

from ..exceptions import UnresolvedReferenceError
from .store import ReferenceStore


class ReferenceResolver:
    """
    Substitutes reference placeholders in nested data with stored values.

    Supports:
    - whole values: "reference:loc1" becomes the stored value, type preserved
    - embedded tokens: "/path/[reference:loc1]/" gets the value rendered as text

    Only values are resolved. Mapping keys, nesting and sequence order are
    kept as they are, and the input is never mutated.
    """

    # A value that is nothing but a reference
    REFERENCE_PATTERN = re.compile(r'^reference:([^\s\[\]]+)$')
    # Reference embedded in a longer string
    EMBEDDED_PATTERN = re.compile(r'\[reference:([^\s\[\]]+)\]')

    def __init__(self, store: ReferenceStore):
        """
        Initialize the resolver.

        Args:
            store: Reference store to read values from
        """
        self.store = store
        self.undefined_refs: Set[str] = set()

    def resolve(self, value: Union[str, List, Dict, Any]) -> Union[str, List, Dict, Any]:
        """
        Resolve every reference placeholder in a value (string, list, or dict).

        Args:
            value: The value to resolve

        Returns:
            A new value with placeholders substituted

        Raises:
            UnresolvedReferenceError: If any placeholder names an unknown identifier
        """
        self.undefined_refs.clear()
        result = self._resolve(value)
        if self.undefined_refs:
            raise UnresolvedReferenceError(list(self.undefined_refs))
        return result

    def _resolve(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._resolve_string(value)
        elif isinstance(value, (list, tuple)):
            return [self._resolve(item) for item in value]
        elif isinstance(value, dict):
            return {k: self._resolve(v) for k, v in value.items()}
        else:
            # Numbers, booleans, None, dates pass through unchanged
            return value

    def _resolve_string(self, text: str) -> Any:
        match = self.REFERENCE_PATTERN.match(text)
        if match:
            identifier = match.group(1)
            if not self.store.has(identifier):
                self.undefined_refs.add(identifier)
                return text
            return self.store.get(identifier)

        def replace_ref(embedded):
            identifier = embedded.group(1)
            if not self.store.has(identifier):
                self.undefined_refs.add(identifier)
                return embedded.group(0)
            return self._to_text(self.store.get(identifier))

        return self.EMBEDDED_PATTERN.sub(replace_ref, text)

    @staticmethod
    def _to_text(value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        elif isinstance(value, (int, float)):
            return str(value)
        elif isinstance(value, str):
            return value
        else:
            return json.dumps(value, default=str)
