"""Loki - A minimal content-addressed version control system."""

__version__ = '0.1.0'

from loki.core.repository import Repository
from loki.core.objects import ObjectStore, Commit
from loki.core.index import Index, IndexEntry

__all__ = [
    'Repository',
    'ObjectStore',
    'Commit',
    'Index',
    'IndexEntry',
]
