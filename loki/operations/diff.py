"""Diff engine for comparing commit snapshots."""

import logging
from difflib import SequenceMatcher
from typing import List, NamedTuple, Sequence

from colorama import Fore, Style

from loki.core.errors import InsufficientHistory
from loki.core.index import IndexEntry, find_entry

logger = logging.getLogger(__name__)

UNCHANGED = 'unchanged'
ADDED = 'added'
REMOVED = 'removed'
EOL = '\r\n'


class LineSegment(NamedTuple):
    """A run of consecutive lines sharing the same diff kind."""
    kind: str
    text: str
    
    def lines(self) -> List[str]:
        """Split the run into individual lines, terminators kept."""
        return self.text.splitlines(keepends=True)


def split_lines(text: str) -> List[str]:
    """Split text into lines, keeping line terminators."""
    return text.splitlines(keepends=True)


def _append(segments: List[LineSegment], kind: str, lines: Sequence[str]) -> None:
    if not lines:
        return
    text = ''.join(lines)
    if segments and segments[-1].kind == kind:
        segments[-1] = LineSegment(kind, segments[-1].text + text)
    else:
        segments.append(LineSegment(kind, text))


def diff_lines(old: str, new: str) -> List[LineSegment]:
    """
    Compute a line diff between two texts.
    
    Both texts are split into lines and compared with difflib. The result
    lists, in document order, runs of unchanged lines, lines only present
    in old (removed) and lines only present in new (added). Where a block
    is replaced, the removed run comes before the added run.
    
    Args:
        old: Previous content
        new: Current content
        
    Returns:
        List of LineSegment
    """
    old_lines = split_lines(old)
    new_lines = split_lines(new)
    
    matcher = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    segments: List[LineSegment] = []
    
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            _append(segments, UNCHANGED, old_lines[i1:i2])
        else:
            # replace, delete and insert
            _append(segments, REMOVED, old_lines[i1:i2])
            _append(segments, ADDED, new_lines[j1:j2])
    
    return segments


def decode(content: bytes) -> str:
    """Decode stored file content for display."""
    return content.decode('utf-8', errors='replace')


class FileDiff:
    """Represents the diff for a single file of a commit."""
    
    def __init__(self, path: str, segments: List[LineSegment], is_new: bool = False):
        self.path = path
        self.segments = segments
        self.is_new = is_new
    
    @property
    def has_changes(self) -> bool:
        """True for new files and for files with added or removed lines."""
        return self.is_new or any(seg.kind != UNCHANGED for seg in self.segments)
    
    @property
    def added_lines(self) -> List[str]:
        return [line for seg in self.segments if seg.kind == ADDED for line in seg.lines()]
    
    @property
    def removed_lines(self) -> List[str]:
        return [line for seg in self.segments if seg.kind == REMOVED for line in seg.lines()]
    
    def __repr__(self) -> str:
        state = 'new' if self.is_new else f"+{len(self.added_lines)} -{len(self.removed_lines)}"
        return f"FileDiff({self.path}, {state})"


class DiffEngine:
    """
    Engine for computing diffs between commits.
    
    Only files recorded in the newer commit are compared. Each one is
    matched against the first entry with the same path in the older
    commit; paths missing there are reported as new files. Files that
    exist only in the older commit are not reported.
    """
    
    def __init__(self, repo):
        """
        Initialize diff engine.
        
        Args:
            repo: Repository instance
        """
        self.repo = repo
    
    def diff_entry(self, entry: IndexEntry, old_files: Sequence[IndexEntry]) -> FileDiff:
        """
        Diff one file of the newer commit against the older file list.
        
        Args:
            entry: Entry from the newer commit
            old_files: Entries of the older commit
        
        Returns:
            FileDiff object
        """
        new_content = decode(self.repo.read_blob(entry.hash))
        old_entry = find_entry(old_files, entry.path)
        
        if old_entry is None:
            segments = [LineSegment(ADDED, new_content)] if new_content else []
            return FileDiff(entry.path, segments, is_new=True)
        
        old_content = decode(self.repo.read_blob(old_entry.hash))
        return FileDiff(entry.path, diff_lines(old_content, new_content))
    
    def diff_commits(self, old_commit_hash: str, new_commit_hash: str) -> List[FileDiff]:
        """
        Compute diff between two commits.
        
        Args:
            old_commit_hash: Older commit digest
            new_commit_hash: Newer commit digest
        
        Returns:
            List of FileDiff objects, one per entry of the newer commit
        """
        old_commit = self.repo.resolve(old_commit_hash)
        new_commit = self.repo.resolve(new_commit_hash)
        
        diffs = [self.diff_entry(entry, old_commit.files) for entry in new_commit.files]
        logger.debug("Diffed %s..%s: %d file(s)", old_commit_hash[:7], new_commit_hash[:7], len(diffs))
        return diffs
    
    def diff_head(self) -> List[FileDiff]:
        """
        Compute diff between HEAD and its parent.
        
        Returns:
            List of FileDiff objects
            
        Raises:
            InsufficientHistory: If there are fewer than two commits
        """
        head = self.repo.head()
        if not head:
            raise InsufficientHistory("No commits yet")
        
        head_commit = self.repo.resolve(head)
        if not head_commit.parent:
            raise InsufficientHistory("HEAD has no parent commit to compare against")
        
        return self.diff_commits(head_commit.parent, head)
    
    def format_diff(self, diffs: List[FileDiff], color: bool = True) -> str:
        """
        Format diffs as an annotated report.
        
        Added lines are prefixed with '+', removed lines with '-'.
        Unchanged lines and files without changes are left out.
        
        Args:
            diffs: List of FileDiff objects
            color: Whether to use colors
        
        Returns:
            Formatted diff string
        """
        def paint(text: str, style: str) -> str:
            return f"{style}{text}{Style.RESET_ALL}" if color else text
        
        output = []
        
        for file_diff in diffs:
            if not file_diff.has_changes:
                continue
            
            if file_diff.is_new:
                output.append('')
                output.append(paint("new file in this commit", Style.BRIGHT))
                output.append(paint(f"+ {file_diff.path}", Fore.GREEN))
                continue
            
            output.append('')
            output.append(paint(f"Changes in file: {file_diff.path}", Style.BRIGHT))
            output.append('')
            
            for seg in file_diff.segments:
                if seg.kind == ADDED:
                    for line in seg.lines():
                        output.append(paint(f"+ {line.rstrip(EOL)}", Fore.GREEN))
                elif seg.kind == REMOVED:
                    for line in seg.lines():
                        output.append(paint(f"- {line.rstrip(EOL)}", Fore.RED))
        
        return '\n'.join(output)
