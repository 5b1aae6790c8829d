"""Repository management for Loki VCS."""

import logging
from pathlib import Path
from typing import Optional

from loki.core.errors import LokiError, NotARepository, ObjectNotFound
from loki.core.index import Index
from loki.core.objects import Commit, ObjectStore
from loki.core.refs import Head

logger = logging.getLogger(__name__)

LOKI_DIR = '.loki'


class Repository:
    """
    Represents a Loki repository.
    
    A repository manages the .loki directory structure: the object store,
    the staging index and the HEAD pointer. The root path is fixed at
    construction, so several repositories can be used side by side.
    """
    
    def __init__(self, path: str = '.'):
        """
        Initialize repository.
        
        Args:
            path: Path to repository root (defaults to current directory)
        """
        self._work_tree = Path(path).resolve()
        self._loki_dir = self._work_tree / LOKI_DIR
        
        self.objects = ObjectStore(self._loki_dir / 'objects')
        self.index = Index(self._loki_dir / 'index')
        self.head_ref = Head(self._loki_dir / 'HEAD')
        
        # Initialize engines lazily to avoid circular import
        self._diff_engine = None
        self._history_walker = None
    
    @property
    def work_tree(self) -> Path:
        """Working tree root."""
        return self._work_tree
    
    @property
    def loki_dir(self) -> Path:
        """The .loki directory."""
        return self._loki_dir
    
    @property
    def objects_dir(self) -> Path:
        return self.objects.objects_dir
    
    @property
    def head_file(self) -> Path:
        return self.head_ref.head_file
    
    @property
    def index_file(self) -> Path:
        return self.index.index_file
    
    @property
    def config_file(self) -> Path:
        return self._loki_dir / 'config'
    
    @property
    def diff(self):
        """Get DiffEngine instance."""
        if self._diff_engine is None:
            from loki.operations.diff import DiffEngine
            self._diff_engine = DiffEngine(self)
        return self._diff_engine
    
    @property
    def history(self):
        """Get HistoryWalker instance."""
        if self._history_walker is None:
            from loki.operations.history import HistoryWalker
            self._history_walker = HistoryWalker(self)
        return self._history_walker
    
    def is_initialized(self) -> bool:
        """Check whether the .loki structure exists."""
        return self._loki_dir.is_dir() and self.objects_dir.is_dir()
    
    def init(self) -> 'Repository':
        """
        Initialize the repository.
        
        Creates the .loki directory structure:
        .loki/
        ├── objects/       # Object database
        ├── HEAD           # Current commit digest (empty at first)
        ├── index          # Staging area (JSON array)
        └── config         # Repository configuration
        
        Running init on an existing repository only fills in what is
        missing; objects, index, HEAD and config are left untouched.
        
        Returns:
            Repository: self for method chaining
        """
        self.objects_dir.mkdir(parents=True, exist_ok=True)
        
        if not self.head_file.exists():
            self.head_file.write_text('')
        
        if not self.index_file.exists():
            self.index_file.write_text('[]')
        
        if not self.config_file.exists():
            config_content = '[core]\nrepositoryformatversion = 0\n'
            self.config_file.write_text(config_content)
        
        logger.debug("Initialized repository at %s", self._loki_dir)
        return self
    
    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.
        
        Searches from the given path upwards until it finds a .loki directory
        or reaches the filesystem root.
        
        Args:
            path: Starting path for search
            
        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()
        
        while True:
            if (current / LOKI_DIR).is_dir():
                return cls(str(current))
            
            # Reached filesystem root
            if current == current.parent:
                return None
            
            current = current.parent
    
    @classmethod
    def discover(cls, path: str = '.') -> 'Repository':
        """
        Find the repository containing path.
        
        Raises:
            NotARepository: If no .loki directory is found up to the filesystem root
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepository(Path(path).resolve())
        return repo
    
    def head(self) -> str:
        """
        Get the current head commit digest.
        
        Returns:
            Commit digest, or '' when nothing has been committed
        """
        return self.head_ref.read()
    
    def relative_path(self, filepath) -> str:
        """
        Convert a file path to the logical path stored in the index.
        
        Relative paths are taken relative to the working tree. The result
        always uses forward slashes.
        
        Raises:
            LokiError: If the path is outside the working tree, inside .loki
                or not encodable as UTF-8
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self._work_tree / file_path
        file_path = file_path.resolve()
        
        try:
            rel_path = file_path.relative_to(self._work_tree)
        except ValueError:
            raise LokiError(f"Path is outside repository: {filepath}")
        
        if rel_path.parts and rel_path.parts[0] == LOKI_DIR:
            raise LokiError(f"Cannot add repository internals: {filepath}")
        
        logical = rel_path.as_posix()
        try:
            logical.encode('utf-8')
        except UnicodeEncodeError:
            raise LokiError(f"File name is not valid UTF-8: {logical!r}")
        
        return logical
    
    def add(self, filepath) -> str:
        """
        Stage a file for commit.
        
        The file content is stored as an object before the index is
        updated, so every staged digest is backed by an object.
        
        Args:
            filepath: Path to file (absolute or relative to the working tree)
            
        Returns:
            str: SHA-1 hash of staged content
            
        Raises:
            FileNotFoundError: If the file does not exist
            LokiError: If the path is not a regular file inside the repository
        """
        rel_path = self.relative_path(filepath)
        file_path = self._work_tree / rel_path
        
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        
        if not file_path.is_file():
            raise LokiError(f"Not a file: {filepath}")
        
        digest = self.objects.put(file_path.read_bytes())
        self.index.record(rel_path, digest)
        return digest
    
    def commit(self, message: str) -> str:
        """
        Record the staged changes as a new commit.
        
        An empty index is allowed and produces a commit without files.
        The commit object is stored first, then HEAD is moved and finally
        the index is cleared. A failure before HEAD moves leaves at most
        an unreferenced object behind.
        
        Args:
            message: Commit message
            
        Returns:
            str: Digest of the new commit
            
        Raises:
            ObjectNotFound: If a staged entry references a missing object
            LokiError: If the message cannot be encoded as UTF-8
        """
        try:
            message.encode('utf-8')
        except UnicodeEncodeError:
            raise LokiError("Commit message is not valid UTF-8")
        
        parent = self.head()
        files = self.index.snapshot()
        
        for entry in files:
            if not self.objects.exists(entry.hash):
                raise ObjectNotFound(entry.hash)
        
        commit = Commit.create(parent=parent, message=message, files=files)
        commit_hash = self.objects.put(commit.serialize())
        
        self.head_ref.write(commit_hash)
        self.index.clear()
        
        logger.debug("Committed %s with %d file(s), parent %s", commit_hash, len(files), parent or '-')
        return commit_hash
    
    def resolve(self, digest: str) -> Commit:
        """
        Read a commit from the object store.
        
        Args:
            digest: Commit digest
            
        Returns:
            Commit: Parsed commit
            
        Raises:
            ObjectNotFound: If no object exists for digest
            CorruptObject: If the object is not a well-formed commit
        """
        data = self.objects.get(digest)
        return Commit.deserialize(data, digest)
    
    def read_blob(self, digest: str) -> bytes:
        """Read file content stored under digest."""
        return self.objects.get(digest)
    
    def count_objects(self) -> int:
        """Number of objects in the store."""
        return sum(1 for _ in self.objects)
    
    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self._work_tree})"
