"""Operations module for high-level Loki operations.

This module contains the business logic for Loki operations like:
- History traversal
- Diff computation
"""

from loki.operations.diff import DiffEngine, FileDiff, LineSegment, diff_lines
from loki.operations.history import HistoryWalker, LogEntry, walk

__all__ = [
    'DiffEngine', 'FileDiff', 'LineSegment', 'diff_lines',
    'HistoryWalker', 'LogEntry', 'walk',
]
