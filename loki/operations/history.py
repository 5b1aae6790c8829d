"""History traversal over the commit parent chain."""

import logging
from typing import Iterator, NamedTuple, Optional

from loki.core.objects import Commit

logger = logging.getLogger(__name__)


class LogEntry(NamedTuple):
    """A commit together with the digest it is stored under."""
    digest: str
    commit: Commit
    
    @property
    def message(self) -> str:
        return self.commit.message
    
    @property
    def time(self) -> str:
        return self.commit.time
    
    @property
    def parent(self) -> str:
        return self.commit.parent


def walk(repo, head_digest: str, limit: Optional[int] = None) -> Iterator[LogEntry]:
    """
    Walk the commit chain backwards from head_digest.
    
    Commits are yielded most recent first. The walk stops after the root
    commit, and yields nothing for an empty head. Parent links are
    followed in a loop, so long histories do not hit the recursion limit.
    Cycles are not detected.
    
    Args:
        repo: Repository instance
        head_digest: Digest to start from, or '' for no commits
        limit: Maximum number of commits to yield
        
    Yields:
        LogEntry for each commit
        
    Raises:
        ObjectNotFound: If a parent link points to a missing commit
        CorruptObject: If a commit on the chain is malformed
    """
    digest = head_digest
    count = 0
    
    while digest:
        if limit is not None and count >= limit:
            return
        
        commit = repo.resolve(digest)
        yield LogEntry(digest, commit)
        count += 1
        
        digest = commit.parent
    
    logger.debug("Walked %d commit(s) from %s", count, head_digest or '-')


class HistoryWalker:
    """
    Walks the history of a repository.
    
    Every call to walk() starts a fresh traversal.
    """
    
    def __init__(self, repo):
        """
        Initialize history walker.
        
        Args:
            repo: Repository instance
        """
        self.repo = repo
    
    def walk(self, head: Optional[str] = None, limit: Optional[int] = None) -> Iterator[LogEntry]:
        """
        Walk history starting from head, or from HEAD when head is None.
        
        Args:
            head: Commit digest to start from
            limit: Maximum number of commits to yield
        """
        if head is None:
            head = self.repo.head()
        return walk(self.repo, head, limit=limit)
    
    def __iter__(self) -> Iterator[LogEntry]:
        return self.walk()
