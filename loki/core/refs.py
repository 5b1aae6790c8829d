"""Head reference management for Loki."""

import logging
from pathlib import Path

from loki.core.errors import CorruptObject
from loki.core.hash import is_digest
from loki.utils.fs import atomic_write_text

logger = logging.getLogger(__name__)


class Head:
    """
    Pointer to the most recent commit.
    
    The HEAD file holds a single commit digest, or nothing at all before
    the first commit.
    """
    
    def __init__(self, head_file: Path):
        """
        Initialize head reference.
        
        Args:
            head_file: Path to the HEAD file
        """
        self._head_file = Path(head_file)
    
    @property
    def head_file(self) -> Path:
        """Path to the HEAD file."""
        return self._head_file
    
    def read(self) -> str:
        """
        Read the current head digest.
        
        Returns:
            Commit digest, or '' when there are no commits yet
            
        Raises:
            CorruptObject: If HEAD holds something other than a digest
        """
        if not self._head_file.exists():
            return ''
        
        content = self._head_file.read_text(encoding='utf-8').strip()
        if content and not is_digest(content):
            raise CorruptObject(f"HEAD does not contain a commit digest: {content!r}")
        return content
    
    def write(self, digest: str) -> None:
        """
        Point HEAD at a commit.
        
        The file is replaced in a single rename.
        
        Args:
            digest: Commit digest
        """
        if not is_digest(digest):
            raise ValueError(f"Invalid commit digest: {digest!r}")
        atomic_write_text(self._head_file, digest)
        logger.debug("HEAD -> %s", digest)
    
    def __repr__(self) -> str:
        """String representation."""
        return f"Head(path={self._head_file})"
