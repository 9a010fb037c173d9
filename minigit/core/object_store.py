"""Content-addressed object storage for minigit."""

import logging
from pathlib import Path
from typing import Iterator

from minigit.utils.fs import atomic_write
from .errors import ObjectNotFoundError, ReadError, WriteError
from .hash import HASH_LENGTH, is_valid_hash
from .objects import Blob, Commit, MinigitObject

logger = logging.getLogger(__name__)

MIN_PREFIX_LENGTH = 4


class ObjectStore:
    """
    Stores blobs and commit records under their SHA-1 fingerprint.

    Layout:
        .minigit/objects/<sha1>     # raw object bytes, one file per object

    The store does not tell blobs and commits apart; it only maps a
    fingerprint to bytes. Writing the same content twice is a no-op.
    """

    def __init__(self, objects_dir: Path):
        """
        Args:
            objects_dir: Path to the objects directory
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, sha1: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            sha1: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / sha1

    def put(self, sha1: str, data: bytes) -> None:
        """
        Persist data under sha1.

        An object that already exists is left untouched: same key means
        same bytes, so there is nothing to rewrite.

        Raises:
            ValueError: If sha1 is not a full fingerprint
            WriteError: If the object cannot be written
        """
        if not is_valid_hash(sha1):
            raise ValueError(f"Invalid object name: {sha1!r}")

        path = self.object_path(sha1)
        if path.exists():
            logger.debug("Object %s already in store, skipped", sha1[:7])
            return

        try:
            atomic_write(path, data)
        except OSError as e:
            raise WriteError(f"Cannot write object {sha1}: {e}", target=sha1) from e

        logger.debug("Stored object %s (%d bytes)", sha1[:7], len(data))

    def get(self, sha1: str) -> bytes:
        """
        Read the bytes stored under sha1.

        Raises:
            ObjectNotFoundError: If no object was stored under sha1
            ReadError: If the object file exists but cannot be read
        """
        if not is_valid_hash(sha1):
            raise ObjectNotFoundError(f"Object {sha1} not found", target=sha1)

        path = self.object_path(sha1)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"Object {sha1} not found", target=sha1) from e
        except OSError as e:
            raise ReadError(f"Cannot read object {sha1}: {e}", target=sha1) from e

    def exists(self, sha1: str) -> bool:
        """Check for an object without reading it."""
        return is_valid_hash(sha1) and self.object_path(sha1).is_file()

    def write(self, obj: MinigitObject) -> str:
        """
        Serialize obj and store it under its own hash.

        Returns:
            str: SHA-1 hash of the object
        """
        data = obj.serialize()
        sha1 = obj.compute_hash()
        self.put(sha1, data)
        return sha1

    def read_blob(self, sha1: str) -> Blob:
        return Blob(self.get(sha1))

    def read_commit(self, sha1: str) -> Commit:
        """
        Read and parse a commit record.

        Raises:
            ObjectNotFoundError: If the object is missing
            CorruptRecordError: If the object is not a valid commit record
        """
        data = self.get(sha1)
        commit = Commit.parse(data)
        return commit

    def resolve_prefix(self, prefix: str) -> str:
        """
        Expand an abbreviated fingerprint to the full one.

        Args:
            prefix: At least 4 leading hex characters of a fingerprint

        Returns:
            str: The only stored fingerprint starting with prefix

        Raises:
            ObjectNotFoundError: If no object or more than one object matches
        """
        prefix = prefix.lower()
        if len(prefix) == HASH_LENGTH:
            if not self.exists(prefix):
                raise ObjectNotFoundError(f"Object {prefix} not found", target=prefix)
            return prefix

        if len(prefix) < MIN_PREFIX_LENGTH:
            raise ObjectNotFoundError(
                f"Object name {prefix!r} is too short (need {MIN_PREFIX_LENGTH} characters)",
                target=prefix,
            )

        matches = [sha1 for sha1 in self if sha1.startswith(prefix)]
        if not matches:
            raise ObjectNotFoundError(f"Object {prefix} not found", target=prefix)
        if len(matches) > 1:
            raise ObjectNotFoundError(
                f"Object name {prefix} is ambiguous ({len(matches)} matches)",
                target=prefix,
            )
        return matches[0]

    def __iter__(self) -> Iterator[str]:
        """Iterate over stored fingerprints in sorted order."""
        if not self.objects_dir.is_dir():
            return iter(())
        return iter(sorted(
            p.name for p in self.objects_dir.iterdir()
            if p.is_file() and is_valid_hash(p.name)
        ))

    def __contains__(self, sha1: object) -> bool:
        return isinstance(sha1, str) and self.exists(sha1)

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
