"""Exceptions raised by the minigit core."""

from typing import Optional


class MinigitError(Exception):
    """
    Base class for all minigit errors.

    Every error names the object it failed on (a path or a fingerprint)
    so the CLI can print a one-line diagnostic.
    """

    def __init__(self, message: str, target: Optional[str] = None):
        super().__init__(message)
        self.target = target


class NotARepositoryError(MinigitError):
    """Raised when an operation runs outside an initialized repository."""


class RepositoryExistsError(MinigitError):
    """Raised by init when repository state is already present."""


class ReadError(MinigitError):
    """Raised when an object, the index or a ref cannot be read."""


class PathNotFoundError(ReadError, FileNotFoundError):
    """Raised when a file to stage does not exist."""


class WriteError(MinigitError):
    """Raised when an object, the index or a ref cannot be written."""


class NothingToCommitError(MinigitError):
    """Raised when committing with an empty staging index."""


class ObjectNotFoundError(MinigitError):
    """Raised when the object store has no object under a fingerprint."""


class CorruptRecordError(MinigitError):
    """Raised when a stored record (commit, index or ref) cannot be parsed."""
