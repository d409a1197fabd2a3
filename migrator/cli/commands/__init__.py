"""CLI command handlers."""

from .run import run_migration, validate_migration

__all__ = ['run_migration', 'validate_migration']
