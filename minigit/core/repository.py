"""Repository management for minigit."""

import logging
from pathlib import Path
from typing import Optional

from .config import DEFAULT_LOG_MAXCOUNT
from .errors import (
    NotARepositoryError,
    NothingToCommitError,
    ObjectNotFoundError,
    ReadError,
    RepositoryExistsError,
    WriteError,
)
from .hash import is_valid_hash
from .history import HistoryWalk, walk_history
from .index import Index
from .object_store import ObjectStore
from .objects import Commit

logger = logging.getLogger(__name__)

REPO_DIR_NAME = '.minigit'


class Repository:
    """
    Represents a minigit repository.

    A repository is the handle every operation goes through: it owns the
    .minigit directory layout, the object store and the branch reference.
    Several independent repositories can be open in one process.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.minigit_dir = self.work_tree / REPO_DIR_NAME
        self.objects_dir = self.minigit_dir / 'objects'
        self.refs_dir = self.minigit_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.minigit_dir / 'HEAD'
        self.index_file = self.minigit_dir / 'index'
        self.config_file = self.minigit_dir / 'config'

        self.objects = ObjectStore(self.objects_dir)

        # Lazy loading to avoid circular import
        self._ref_manager = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    def exists(self) -> bool:
        """Check whether repository state is present."""
        return self.minigit_dir.is_dir()

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .minigit directory structure:
        .minigit/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch reference (main)
        ├── HEAD           # Symbolic pointer to refs/heads/main
        ├── index          # Staging area
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExistsError: If repository already exists
            WriteError: If the structure cannot be created
        """
        if self.minigit_dir.exists():
            raise RepositoryExistsError(
                f"Repository already exists at {self.minigit_dir}",
                target=str(self.minigit_dir),
            )

        try:
            self.minigit_dir.mkdir(parents=True)
            self.objects_dir.mkdir()
            self.refs_dir.mkdir()
            self.heads_dir.mkdir()
            self.index_file.write_bytes(b'')
        except OSError as e:
            raise WriteError(
                f"Cannot create repository at {self.minigit_dir}: {e}",
                target=str(self.minigit_dir),
            ) from e

        self.refs.set_head()
        self.config.set('core', 'repositoryformatversion', '0')
        self.config.set('log', 'maxcount', str(DEFAULT_LOG_MAXCOUNT))

        logger.debug("Initialized repository in %s", self.minigit_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .minigit
        directory or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / REPO_DIR_NAME).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Find the repository containing path.

        Raises:
            NotARepositoryError: If path is not inside a repository
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotARepositoryError(
                f"Not a minigit repository: {Path(path).resolve()}",
                target=str(path),
            )
        return repo

    def relative_path(self, path) -> str:
        """
        Path of a working file relative to the work tree, '/'-separated.

        Raises:
            ReadError: If path lies outside the work tree
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.work_tree / path
        try:
            rel_path = path.resolve().relative_to(self.work_tree)
        except ValueError as e:
            raise ReadError(f"{path} is outside the repository", target=str(path)) from e
        return rel_path.as_posix()

    def load_index(self) -> Index:
        """Read the staging index."""
        return Index.load(self.index_file)

    def stage(self, path, sha1: Optional[str] = None) -> str:
        """
        Stage a working file.

        Without sha1 the file is read and stored as a blob. With sha1 the
        path is recorded against an already stored fingerprint.

        Returns:
            str: Fingerprint now staged for path

        Raises:
            ValueError: If sha1 is not a full fingerprint
            ObjectNotFoundError: If sha1 is not in the object store
        """
        if sha1 is None:
            index = self.load_index()
            return index.add_file(self, path)

        if not is_valid_hash(sha1):
            raise ValueError(f"Invalid object name: {sha1!r}")
        if not self.objects.exists(sha1):
            raise ObjectNotFoundError(
                f"Cannot stage {path}: object {sha1} not found", target=sha1
            )

        Index.stage(self.index_file, self.relative_path(path), sha1)
        return sha1

    def commit(self, message: str, timestamp: Optional[str] = None) -> str:
        """
        Record the staged files as a new commit on the current branch.

        Steps: load the index, read the branch tip as parent, build and
        store the commit record under the hash of its bytes, advance the
        branch, clear the index. A single writer is assumed; no lock is
        taken across the steps. The branch moves before the index is
        cleared: if clearing fails the commit stands, its entries stay
        staged, and the WriteError names the new commit.

        Args:
            message: Commit message
            timestamp: Override for the commit timestamp

        Returns:
            str: Hash of the new commit

        Raises:
            ValueError: If message is empty
            NothingToCommitError: If nothing is staged
            WriteError: If the commit or the cleared index cannot be written
        """
        if not message:
            raise ValueError("Commit message must not be empty")

        index = self.load_index()
        if len(index) == 0:
            raise NothingToCommitError(
                "Nothing to commit (staging area is empty)",
                target=str(self.index_file),
            )

        parent = self.refs.resolve_head()
        commit = Commit.create(
            message=message,
            files=index.as_list(),
            parent=parent,
            timestamp=timestamp,
        )

        commit_hash = self.objects.write(commit)
        self.refs.update_head(commit_hash)

        index.clear()
        try:
            index.save(self.index_file)
        except WriteError as e:
            raise WriteError(
                f"Created commit {commit_hash} but could not clear the staging area: {e}",
                target=commit_hash,
            ) from e

        logger.debug(
            "Committed %s (%d file(s), parent %s)",
            commit_hash[:7], len(commit.files), parent[:7] if parent else 'none',
        )
        return commit_hash

    def head_commit(self) -> Optional[str]:
        """Hash of the branch tip, or None before the first commit."""
        return self.refs.resolve_head()

    def history(self, start: Optional[str] = None, max_depth: Optional[int] = None) -> HistoryWalk:
        """
        Walk history from start (defaults to the branch tip).

        With no commits yet the walk is empty.
        """
        if start is None:
            start = self.head_commit()
        return walk_history(self, start or '', max_depth)

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
