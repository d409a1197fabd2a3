"""Main CLI entry point for the migrator."""

import argparse
import sys
from typing import Optional

from .commands import run_migration, validate_migration


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the migrator CLI."""
    parser = argparse.ArgumentParser(
        prog='migrate',
        description='Declarative trash migration runner'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Run command
    run_parser = subparsers.add_parser('run', help='Run a migration')
    run_parser.add_argument(
        'migration',
        type=str,
        help='Path to migration YAML file'
    )
    run_parser.add_argument(
        '--fixtures',
        type=str,
        required=True,
        help='Path to YAML fixture file describing the repository'
    )
    run_parser.add_argument(
        '--reference',
        action='append',
        metavar='KEY=VALUE',
        help='Seed a reference before the run (can be specified multiple times)'
    )
    run_parser.add_argument(
        '--references-file',
        type=str,
        help='Path to JSON file containing references to seed'
    )
    run_parser.add_argument(
        '--print-references',
        action='store_true',
        help='Print the references as JSON when the run ends'
    )
    run_parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate without execution'
    )
    run_parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    run_parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    run_parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    run_parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='info',
        help='Set log level'
    )

    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Validate a migration file')
    validate_parser.add_argument(
        'migration',
        type=str,
        help='Path to migration YAML file'
    )

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'run':
        return run_migration(parsed_args)
    elif parsed_args.command == 'validate':
        return validate_migration(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
