"""Migration file loader and strict DSL validation."""

from pathlib import Path
from typing import Any, Dict, List
import yaml

from migrator.exceptions import ValidationError, MigrationValidationError
from migrator.steps.types import Step


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps 'on', 'off', 'yes' and 'no' as strings."""
    pass


# Drop the implicit bool resolvers for words starting with o/O/y/Y/n/N so that
# values like 'no' or 'on' inside match specifications stay strings
PreservingLoader.yaml_implicit_resolvers = dict(PreservingLoader.yaml_implicit_resolvers)
for _first in 'oOyYnN':
    if _first in PreservingLoader.yaml_implicit_resolvers:
        PreservingLoader.yaml_implicit_resolvers[_first] = [
            (tag, regexp) for tag, regexp in PreservingLoader.yaml_implicit_resolvers[_first]
            if tag != 'tag:yaml.org,2002:bool'
        ]


class MigrationLoader:
    """Loads and validates migration YAML with strict DSL enforcement."""

    SUPPORTED_VERSIONS = {"1.0"}
    KNOWN_FIELDS = {'version', 'name', 'steps'}
    STEP_FIELDS = {'type', 'mode', 'name', 'match', 'references'}
    REFERENCE_FIELDS = {'identifier', 'attribute', 'overwrite'}

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, migration_path: Path) -> Dict[str, Any]:
        """Load and validate a migration file."""
        self.errors = []
        try:
            with open(migration_path, 'r') as f:
                migration = yaml.load(f, Loader=PreservingLoader)
        except Exception as e:
            self._add_error(f"Failed to load migration: {e}")
            self._raise_validation_errors()

        if migration is None or not isinstance(migration, dict):
            self._add_error("Migration must be a YAML object/dictionary")
            self._raise_validation_errors()

        version = migration.get('version')
        if not version:
            self._add_error("'version' field is required")
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}")
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}")

        for key in migration.keys():
            if key not in self.KNOWN_FIELDS:
                self._add_error(f"Unknown field '{key}'")

        steps = migration.get('steps')
        if not steps:
            self._add_error("'steps' field is required and must not be empty")
        else:
            self._validate_steps(steps)

        if self.errors:
            self._raise_validation_errors()

        return migration

    def load_steps(self, migration_path: Path) -> List[Step]:
        """Load a migration file and build its steps."""
        migration = self.load(migration_path)
        return [Step.from_dict(step) for step in migration['steps']]

    def _validate_steps(self, steps: Any):
        """Validate step definitions."""
        if not isinstance(steps, list):
            self._add_error("'steps' must be a list")
            return

        for i, step in enumerate(steps):
            if not isinstance(step, dict):
                self._add_error(f"Step {i} must be a dictionary")
                continue

            label = f"Step {i}"
            if isinstance(step.get('name'), str):
                label = f"Step {i} ('{step['name']}')"

            for key in step.keys():
                if key not in self.STEP_FIELDS:
                    self._add_error(f"{label}: unknown field '{key}'")

            for required in ('type', 'mode'):
                if required not in step:
                    self._add_error(f"{label}: missing required '{required}' field")
                elif not isinstance(step[required], str):
                    self._add_error(f"{label}: '{required}' must be a string")

            if 'match' in step and not isinstance(step['match'], dict):
                self._add_error(f"{label}: 'match' must be a dictionary")

            # Purge empties the whole trash: it neither matches nor yields an item
            if step.get('mode') == 'purge':
                for field in ('match', 'references'):
                    if field in step:
                        self._add_error(f"{label}: '{field}' is not allowed with mode 'purge'")

            if 'references' in step:
                self._validate_references(step['references'], label)

    def _validate_references(self, references: Any, label: str):
        """Validate list or shorthand-mapping reference definitions."""
        if isinstance(references, dict):
            for identifier, attribute in references.items():
                if not isinstance(identifier, str) or not isinstance(attribute, str):
                    self._add_error(f"{label}: references must map identifier strings to attribute strings")
            return

        if not isinstance(references, list):
            self._add_error(f"{label}: 'references' must be a list or a dictionary")
            return

        for j, ref in enumerate(references):
            if not isinstance(ref, dict):
                self._add_error(f"{label}: references[{j}] must be a dictionary")
                continue
            for key in ref.keys():
                if key not in self.REFERENCE_FIELDS:
                    self._add_error(f"{label}: references[{j}] unknown field '{key}'")
            for required in ('identifier', 'attribute'):
                if not isinstance(ref.get(required), str) or not ref.get(required):
                    self._add_error(f"{label}: references[{j}] requires a string '{required}'")
            if 'overwrite' in ref and not isinstance(ref['overwrite'], bool):
                self._add_error(f"{label}: references[{j}] 'overwrite' must be true or false")

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise MigrationValidationError with accumulated errors."""
        raise MigrationValidationError(self.errors)
