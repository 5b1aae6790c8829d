"""Filesystem helpers."""

import os
from pathlib import Path
from uuid import uuid4


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """
    Write data to path so readers never observe a partial file.

    The content goes to a temporary sibling first and is then renamed
    over the target.
    """
    path = Path(path)
    tmp_path = path.parent / f".{path.name}.tmp-{uuid4().hex}"
    try:
        with open(tmp_path, 'wb') as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()


def atomic_write_text(path: Path, text: str) -> None:
    """Text variant of atomic_write_bytes, always UTF-8."""
    atomic_write_bytes(path, text.encode('utf-8'))
