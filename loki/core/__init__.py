"""Core functionality for Loki.

This module contains the core data structures:
- Object store and commit records
- Repository management
- Index/staging area
- HEAD reference
- Configuration management
- Hashing utilities
- Error types

For history and diff, see loki.operations
"""

from loki.core.errors import LokiError, NotARepository, ObjectNotFound, CorruptObject, InsufficientHistory
from loki.core.objects import ObjectStore, Commit
from loki.core.repository import Repository
from loki.core.hash import hash_object, hash_file, is_digest
from loki.core.index import Index, IndexEntry, find_entry
from loki.core.refs import Head
from loki.core.config import Config, get_config

__all__ = [
    'LokiError',
    'NotARepository',
    'ObjectNotFound',
    'CorruptObject',
    'InsufficientHistory',
    'ObjectStore',
    'Commit',
    'Repository',
    'Index',
    'IndexEntry',
    'find_entry',
    'Head',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
    'is_digest',
]
