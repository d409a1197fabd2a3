"""Run and validate command implementations."""

import json
import logging
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict

import yaml

from migrator.domain.memory import InMemoryRepository, InMemoryTrashMatcher
from migrator.exceptions import MigrationValidationError, StepExecutionError
from migrator.loader import MigrationLoader
from migrator.references.store import ReferenceStore
from migrator.steps.dispatcher import TrashStepDispatcher


logger = logging.getLogger(__name__)


def parse_seed_value(value: str) -> Any:
    """Decode a KEY=VALUE right-hand side as a YAML scalar; plain words stay strings."""
    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def parse_seed_references(args: Namespace) -> Dict[str, Any]:
    """Parse seed references from command line arguments."""
    references: Dict[str, Any] = {}

    # JSON file first so KEY=VALUE flags win
    if args.references_file:
        references_file = Path(args.references_file)
        if not references_file.exists():
            raise FileNotFoundError(f"References file not found: {references_file}")

        with open(references_file, 'r') as f:
            file_references = json.load(f)
            if not isinstance(file_references, dict):
                raise ValueError(f"References file must contain a JSON object, got {type(file_references).__name__}")

            for key, value in file_references.items():
                references[str(key)] = value

    if args.reference:
        for item in args.reference:
            if '=' not in item:
                raise ValueError(f"Invalid reference format: {item}. Expected KEY=VALUE")
            key, value = item.split('=', 1)
            references[key] = parse_seed_value(value)

    return references


def configure_logging(args: Namespace) -> None:
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def validate_migration(args: Namespace) -> int:
    """Load and validate a migration file without running it."""
    migration_path = Path(args.migration)
    if not migration_path.exists():
        logger.error(f"Migration file not found: {migration_path}")
        return 1

    try:
        steps = MigrationLoader().load_steps(migration_path)
    except MigrationValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    print(f"{migration_path}: {len(steps)} step(s) valid")
    return 0


def run_migration(args: Namespace) -> int:
    """
    Run every step of a migration against a fixture repository.

    Steps run in file order; the first failing step stops the run. Nothing is
    retried or rolled back.
    """
    configure_logging(args)

    try:
        migration_path = Path(args.migration).resolve()
        if not migration_path.exists():
            logger.error(f"Migration file not found: {migration_path}")
            return 1

        logger.info(f"Loading migration: {migration_path}")
        try:
            steps = MigrationLoader().load_steps(migration_path)
        except MigrationValidationError as e:
            for error in e.errors:
                logger.error(f"Validation error: {error.message}")
            return e.exit_code

        if args.dry_run:
            logger.info(f"[DRY RUN] Migration validation successful ({len(steps)} step(s))")
            return 0

        store = ReferenceStore(parse_seed_references(args))
        repository = InMemoryRepository.from_fixture(args.fixtures)
        dispatcher = TrashStepDispatcher(repository, InMemoryTrashMatcher(repository), store)

        exit_code = 0
        for index, step in enumerate(steps):
            try:
                result = dispatcher.execute(step)
            except StepExecutionError as e:
                logger.error(f"Migration stopped at step {index}: {e}")
                exit_code = 1
                break
            except Exception as e:
                # Matcher and repository errors are step failures too
                logger.error(f"Migration stopped at step {index} ({step.step_type} {step.action}): {e}", exc_info=True)
                exit_code = 1
                break
            logger.info(f"Step {index} ({step.label}) completed: {len(result)} item(s)")

        if args.print_references:
            print(json.dumps(store.to_dict(), indent=2, sort_keys=True, default=str))

        return exit_code

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
