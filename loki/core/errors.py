"""Error types for Loki."""


class LokiError(Exception):
    """Base class for all Loki errors."""


class NotARepository(LokiError):
    """Raised when no .loki directory can be found."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Not a loki repository: {path}")


class ObjectNotFound(LokiError, KeyError):
    """
    Raised when a digest has no object in the store.

    Usually means the index or a commit references a blob that was
    never written, or the digest was mistyped.
    """

    def __init__(self, digest: str):
        self.digest = digest
        super().__init__(f"Object {digest} not found")

    def __str__(self) -> str:
        return self.args[0]


class CorruptObject(LokiError, ValueError):
    """Raised when stored data does not deserialize into the expected record."""

    def __init__(self, message: str, digest: str = ''):
        self.digest = digest
        if digest:
            message = f"{message} (object {digest})"
        super().__init__(message)


class InsufficientHistory(LokiError):
    """Raised when diff is requested with fewer than two commits in history."""
