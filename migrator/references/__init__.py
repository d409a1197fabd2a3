"""
Reference handling module.
Run-scoped reference storage and placeholder resolution.
"""

from .store import ReferenceStore
from .resolver import ReferenceResolver

__all__ = ['ReferenceStore', 'ReferenceResolver']
