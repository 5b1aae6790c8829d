"""Object store and commit records for Loki."""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Tuple

from loki.core.errors import CorruptObject, ObjectNotFound
from loki.core.hash import hash_object, is_digest
from loki.core.index import IndexEntry, entries_from_json, entries_to_json
from loki.utils.fs import atomic_write_bytes

logger = logging.getLogger(__name__)

COMMIT_FIELDS = ('parent', 'message', 'time', 'files')


class ObjectStore:
    """
    Content-addressable storage for raw byte objects.
    
    Every object lives at a path derived from its digest: the first two
    hex characters name a shard directory, the remaining 38 the file.
    Objects are immutable once written.
    """
    
    def __init__(self, objects_dir: Path):
        """
        Initialize object store.
        
        Args:
            objects_dir: Directory holding the object shards
        """
        self._objects_dir = Path(objects_dir)
    
    @property
    def objects_dir(self) -> Path:
        """Root directory of the store."""
        return self._objects_dir
    
    def object_path(self, digest: str) -> Path:
        """
        Get filesystem path for an object.
        
        Example: ab/cdef0123456789... for hash abcdef0123456789...
        
        Args:
            digest: 40-character SHA-1 hash
            
        Returns:
            Path: Full path to object file
        """
        return self._objects_dir / digest[:2] / digest[2:]
    
    def put(self, content: bytes) -> str:
        """
        Store content under its digest.
        
        Writing content that is already stored leaves the existing object
        untouched.
        
        Args:
            content: Raw bytes to store
            
        Returns:
            str: SHA-1 hash of the content
        """
        digest = hash_object(content)
        path = self.object_path(digest)
        
        # Object already exists
        if path.exists():
            logger.debug("Object %s already stored", digest)
            return digest
        
        path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_bytes(path, content)
        logger.debug("Wrote object %s (%d bytes)", digest, len(content))
        
        return digest
    
    def get(self, digest: str) -> bytes:
        """
        Read object content.
        
        Args:
            digest: 40-character SHA-1 hash
            
        Returns:
            bytes: Stored content
            
        Raises:
            ObjectNotFound: If no object exists for digest
        """
        if not is_digest(digest):
            raise ObjectNotFound(digest)
        
        path = self.object_path(digest)
        if not path.is_file():
            raise ObjectNotFound(digest)
        
        return path.read_bytes()
    
    def exists(self, digest: str) -> bool:
        """Check if an object is stored for digest."""
        return is_digest(digest) and self.object_path(digest).is_file()
    
    def __iter__(self) -> Iterator[str]:
        """Iterate over every stored digest, in no particular order."""
        if not self._objects_dir.exists():
            return
        for shard in sorted(self._objects_dir.iterdir()):
            if not shard.is_dir() or len(shard.name) != 2:
                continue
            for obj in sorted(shard.iterdir()):
                digest = shard.name + obj.name
                if is_digest(digest):
                    yield digest
    
    def __repr__(self) -> str:
        """String representation."""
        return f"ObjectStore(path={self._objects_dir})"


def format_time(moment: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with milliseconds, e.g. 2026-01-02T03:04:05.678Z."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def parse_time(value: str) -> datetime:
    """Parse a timestamp written by format_time."""
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Commit:
    """
    Represents a commit.
    
    A commit captures:
    - Parent commit digest ('' for the first commit)
    - Commit message
    - Timestamp (ISO-8601, UTC)
    - Frozen copy of the index at commit time
    
    Commits are stored in the object store as JSON and addressed by the
    digest of that serialization.
    """
    parent: str
    message: str
    time: str
    files: Tuple[IndexEntry, ...] = field(default_factory=tuple)
    
    def __post_init__(self):
        # Keep files immutable even when a list is passed in
        object.__setattr__(self, 'files', tuple(self.files))
    
    @property
    def is_root(self) -> bool:
        """True for a commit without parent."""
        return not self.parent
    
    @property
    def timestamp(self) -> datetime:
        """Commit time as an aware datetime."""
        return parse_time(self.time)
    
    def serialize(self) -> bytes:
        """
        Serialize commit to JSON.
        
        Keys are always written in the order parent, message, time, files.
        
        Returns:
            bytes: UTF-8 encoded commit data
        """
        data = {
            'parent': self.parent,
            'message': self.message,
            'time': self.time,
            'files': entries_to_json(self.files),
        }
        return json.dumps(data, ensure_ascii=False).encode('utf-8')
    
    @property
    def hash(self) -> str:
        """Digest of the serialized commit."""
        return hash_object(self.serialize())
    
    @classmethod
    def deserialize(cls, data: bytes, digest: str = '') -> 'Commit':
        """
        Deserialize and validate a commit.
        
        Args:
            data: Serialized commit data
            digest: Digest the data was read from, for error messages
            
        Returns:
            Commit: Parsed commit
            
        Raises:
            CorruptObject: If data is not a well-formed commit
        """
        try:
            record = json.loads(data.decode('utf-8'))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorruptObject(f"Commit is not valid JSON: {e}", digest)
        
        if not isinstance(record, dict):
            raise CorruptObject("Commit is not a JSON object", digest)
        
        missing = [name for name in COMMIT_FIELDS if name not in record]
        if missing:
            raise CorruptObject(f"Commit is missing fields: {', '.join(missing)}", digest)
        
        parent = record['parent']
        message = record['message']
        time = record['time']
        
        if not isinstance(parent, str) or (parent and not is_digest(parent)):
            raise CorruptObject(f"Commit has invalid parent: {parent!r}", digest)
        if not isinstance(message, str):
            raise CorruptObject("Commit message is not a string", digest)
        if not isinstance(time, str):
            raise CorruptObject("Commit time is not a string", digest)
        try:
            parse_time(time)
        except ValueError:
            raise CorruptObject(f"Commit time is not ISO-8601: {time!r}", digest)
        
        try:
            files = entries_from_json(record['files'])
        except CorruptObject as e:
            raise CorruptObject(str(e), digest)
        
        return cls(parent=parent, message=message, time=time, files=files)
    
    @classmethod
    def create(
        cls,
        parent: str,
        message: str,
        files=(),
        time: Optional[datetime] = None
    ) -> 'Commit':
        """
        Create a new commit.
        
        Args:
            parent: Parent commit digest, or '' for the first commit
            message: Commit message
            files: Index entries captured by the commit
            time: Commit time (defaults to now)
            
        Returns:
            Commit: New commit object
        """
        if time is None:
            time = datetime.now(timezone.utc)
        return cls(parent=parent or '', message=message, time=format_time(time), files=tuple(files))
    
    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
