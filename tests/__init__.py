"""Tests for the trash migrator."""
