"""Declarative trash migration steps: match, act, extract references."""

__version__ = "0.1.0"
