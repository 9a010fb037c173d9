"""Index (staging area) implementation."""

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from minigit.utils.fs import atomic_write
from .errors import CorruptRecordError, PathNotFoundError, ReadError, WriteError
from .hash import is_valid_hash
from .objects import Blob, StagedFile

logger = logging.getLogger(__name__)


class Index:
    """
    minigit index (staging area) implementation.

    The index maps each staged path to the fingerprint of its last staged
    content. Re-staging a path replaces its fingerprint but keeps its place;
    new paths are appended, so listing order is staging order.

    On disk the index is one '<escaped path> <sha1>' line per entry.
    """

    def __init__(self):
        """Initialize empty index."""
        self.entries: Dict[str, StagedFile] = {}

    def add_entry(self, path: str, sha1: str) -> None:
        """
        Add or update entry in index.

        Args:
            path: File path relative to repository root
            sha1: SHA-1 hash of file content
        """
        self.entries[path] = StagedFile(path, sha1)

    def add_file(self, repo, filepath) -> str:
        """
        Stage a file for commit.

        Reads the file, stores its content as a blob and records the
        path in the index, which is persisted right away. If the file
        cannot be read, neither the store nor the index is touched.

        Args:
            repo: Repository instance
            filepath: Path to file (absolute or relative to the work tree)

        Returns:
            str: SHA-1 hash of staged content

        Raises:
            PathNotFoundError: If the file does not exist
            ReadError: If the path is not a readable regular file
        """
        file_path = Path(filepath)

        if not file_path.is_absolute():
            file_path = repo.work_tree / file_path

        if not file_path.exists():
            raise PathNotFoundError(f"File not found: {filepath}", target=str(filepath))

        if not file_path.is_file():
            raise ReadError(f"Not a file: {filepath}", target=str(filepath))

        try:
            blob = Blob.from_file(str(file_path))
        except OSError as e:
            raise ReadError(f"Cannot read {filepath}: {e}", target=str(filepath)) from e

        rel_path = repo.relative_path(file_path)
        sha1 = repo.objects.write(blob)
        self.add_entry(rel_path, sha1)

        self.write(repo.index_file)
        logger.debug("Staged %s as %s", rel_path, sha1[:7])

        return sha1

    def remove_entry(self, path: str) -> None:
        """Remove entry from index."""
        self.entries.pop(path, None)

    def get_entry(self, path: str) -> Optional[StagedFile]:
        """Get entry by path."""
        return self.entries.get(path)

    def clear(self) -> None:
        """Clear all entries from index."""
        self.entries.clear()

    def as_list(self) -> List[StagedFile]:
        """Entries in staging order."""
        return list(self.entries.values())

    def write(self, index_path) -> None:
        """
        Write index to disk, replacing whatever was there.

        Args:
            index_path: Path to index file

        Raises:
            WriteError: If the index cannot be written
        """
        content = ''.join(entry.to_line() + '\n' for entry in self.entries.values())
        try:
            atomic_write(Path(index_path), content.encode('utf-8'))
        except OSError as e:
            raise WriteError(f"Cannot write index: {e}", target=str(index_path)) from e

    def read(self, index_path) -> None:
        """
        Read index from disk.

        A missing index file is an empty index.

        Args:
            index_path: Path to index file

        Raises:
            ReadError: If the index file cannot be read
            CorruptRecordError: If a line is malformed
        """
        path = Path(index_path)
        self.entries.clear()

        try:
            content = path.read_bytes().decode('utf-8')
        except FileNotFoundError:
            return
        except UnicodeDecodeError as e:
            raise CorruptRecordError(f"Index is not valid UTF-8: {e}", target=str(path)) from e
        except OSError as e:
            raise ReadError(f"Cannot read index: {e}", target=str(path)) from e

        for line in content.split('\n'):
            if not line:
                continue
            try:
                entry = StagedFile.from_line(line)
            except CorruptRecordError as e:
                raise CorruptRecordError(f"Corrupt index: {e}", target=str(path)) from e
            self.entries[entry.path] = entry

    @classmethod
    def load(cls, index_path) -> 'Index':
        """Read the persisted index; empty if none was saved yet."""
        index = cls()
        index.read(index_path)
        return index

    def save(self, index_path) -> None:
        """Persist the full mapping."""
        self.write(index_path)

    @classmethod
    def stage(cls, index_path, path: str, sha1: str) -> 'Index':
        """
        Load the index, upsert path, and save it back.

        Returns:
            Index: The updated index

        Raises:
            ValueError: If sha1 is not a full fingerprint
        """
        if not is_valid_hash(sha1):
            raise ValueError(f"Invalid object name for {path}: {sha1!r}")

        index = cls.load(index_path)
        index.add_entry(path, sha1)
        index.save(index_path)
        return index

    def __iter__(self) -> Iterator[StagedFile]:
        return iter(self.entries.values())

    def __contains__(self, path: object) -> bool:
        return path in self.entries

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self.entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(entries={len(self.entries)})"
