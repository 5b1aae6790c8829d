"""Index (staging area) implementation."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from loki.core.errors import CorruptObject
from loki.core.hash import is_digest
from loki.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexEntry:
    """
    Represents a single staged file.
    
    Only the logical path and the digest of its content are kept.
    """
    path: str
    hash: str
    
    def to_dict(self) -> dict:
        """Return the JSON-ready form of the entry."""
        return {'path': self.path, 'hash': self.hash}
    
    @classmethod
    def from_dict(cls, data) -> 'IndexEntry':
        """
        Build an entry from its JSON form.
        
        Raises:
            CorruptObject: If fields are missing or malformed
        """
        if not isinstance(data, dict):
            raise CorruptObject(f"Index entry is not an object: {data!r}")
        
        path = data.get('path')
        digest = data.get('hash')
        
        if not isinstance(path, str) or not path:
            raise CorruptObject(f"Index entry has invalid path: {path!r}")
        try:
            path.encode('utf-8')
        except UnicodeEncodeError:
            raise CorruptObject(f"Index entry path is not valid UTF-8: {path!r}")
        if not is_digest(digest):
            raise CorruptObject(f"Index entry has invalid hash: {digest!r}")
        
        return cls(path=path, hash=digest)
    
    def __repr__(self) -> str:
        """String representation."""
        return f"IndexEntry({self.hash[:7]} {self.path})"


def entries_to_json(entries: Iterable[IndexEntry]) -> list:
    """Convert entries to a JSON-ready list, keeping their order."""
    return [entry.to_dict() for entry in entries]


def entries_from_json(data) -> Tuple[IndexEntry, ...]:
    """
    Convert a decoded JSON list back to entries.
    
    Raises:
        CorruptObject: If data is not a list of valid entries
    """
    if not isinstance(data, list):
        raise CorruptObject(f"Expected a list of index entries, got {type(data).__name__}")
    return tuple(IndexEntry.from_dict(item) for item in data)


def find_entry(entries: Iterable[IndexEntry], path: str) -> Optional[IndexEntry]:
    """
    Find the first entry recorded for path.
    
    Paths are not deduplicated, so when a file was staged more than once
    the earliest entry wins.
    
    Args:
        entries: Entries to search, in staging order
        path: Logical file path
        
    Returns:
        Matching entry or None
    """
    for entry in entries:
        if entry.path == path:
            return entry
    return None


class Index:
    """
    Loki index (staging area) implementation.
    
    The index is an ordered list of path/digest pairs waiting for the
    next commit, stored as a JSON array. Entries are appended in the order
    files are added; adding a path twice keeps both entries.
    """
    
    def __init__(self, index_file: Path):
        """
        Initialize index.
        
        Args:
            index_file: Path to the persisted index file
        """
        self._index_file = Path(index_file)
    
    @property
    def index_file(self) -> Path:
        """Path to the persisted index file."""
        return self._index_file
    
    def read(self) -> List[IndexEntry]:
        """
        Read staged entries from disk.
        
        A missing or empty file reads as an empty index.
        
        Returns:
            List of entries in staging order
            
        Raises:
            CorruptObject: If the file is not a valid index
        """
        if not self._index_file.exists():
            return []
        
        content = self._index_file.read_text(encoding='utf-8')
        if not content.strip():
            return []
        
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise CorruptObject(f"Index file is not valid JSON: {e}")
        
        return list(entries_from_json(data))
    
    def write(self, entries: Iterable[IndexEntry]) -> None:
        """
        Persist entries, replacing the current index.
        
        Args:
            entries: Entries in staging order
        """
        atomic_write_text(self._index_file, json.dumps(entries_to_json(entries)))
    
    def record(self, path: str, digest: str) -> IndexEntry:
        """
        Append a path/digest pair to the index.
        
        Args:
            path: Logical file path
            digest: Digest of the file content, already in the object store
            
        Returns:
            IndexEntry: The recorded entry
        """
        entry = IndexEntry(path=path, hash=digest)
        entries = self.read()
        entries.append(entry)
        self.write(entries)
        logger.debug("Staged %s as %s (%d entries)", path, digest, len(entries))
        return entry
    
    def snapshot(self) -> Tuple[IndexEntry, ...]:
        """
        Return a frozen copy of the staged entries.
        
        Returns:
            Tuple of entries in staging order
        """
        return tuple(self.read())
    
    def clear(self) -> None:
        """Reset the index to an empty sequence."""
        self.write([])
        logger.debug("Cleared index %s", self._index_file)
    
    def __iter__(self) -> Iterator[IndexEntry]:
        """Iterate over staged entries."""
        return iter(self.read())
    
    def __len__(self) -> int:
        """Number of staged entries."""
        return len(self.read())
    
    def __repr__(self) -> str:
        """String representation."""
        return f"Index(path={self._index_file})"
