"""Utilities module for common helper functions.

This module contains:
- Filesystem utilities (atomic writes)
"""

from loki.utils.fs import atomic_write_bytes, atomic_write_text

__all__ = [
    'atomic_write_bytes', 'atomic_write_text',
]
