"""Hash utilities for Loki."""

import hashlib
import re

DIGEST_LENGTH = 40

_DIGEST_RE = re.compile(r'^[0-9a-f]{%d}$' % DIGEST_LENGTH)


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute SHA-1 hash of file.
    
    Args:
        filepath: Path to file
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_digest(value) -> bool:
    """Check that value looks like a digest produced by hash_object."""
    return isinstance(value, str) and bool(_DIGEST_RE.match(value))
