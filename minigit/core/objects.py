"""minigit objects: blobs, staged file entries and commits."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from .errors import CorruptRecordError
from .hash import hash_object, is_valid_hash

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'

_ESCAPES = {'\\': '\\\\', '\n': '\\n', '\r': '\\r'}
_UNESCAPES = {'\\': '\\', 'n': '\n', 'r': '\r'}


def escape_field(value: str) -> str:
    """
    Escape a free-text field so it fits on a single record line.

    Backslash, newline and carriage return are written as two-character
    escapes; everything else is kept as is.
    """
    return ''.join(_ESCAPES.get(c, c) for c in value)


def unescape_field(value: str) -> str:
    """
    Reverse escape_field.

    Raises:
        ValueError: On a dangling or unknown escape sequence
    """
    result = []
    chars = iter(value)
    for c in chars:
        if c != '\\':
            result.append(c)
            continue
        nxt = next(chars, None)
        if nxt is None:
            raise ValueError("Dangling escape at end of field")
        if nxt not in _UNESCAPES:
            raise ValueError(f"Unknown escape sequence: \\{nxt}")
        result.append(_UNESCAPES[nxt])
    return ''.join(result)


class MinigitObject(ABC):
    """
    Anything the object store can hold.

    Subclasses turn themselves into bytes and back; the store keys those
    bytes by their SHA-1 and knows nothing else about them.
    """

    @abstractmethod
    def serialize(self) -> bytes:
        """Bytes as written to the object store."""

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Replace this object's fields with the ones encoded in data.

        Args:
            data: Bytes previously produced by serialize()
        """

    @property
    def type(self) -> str:
        """'blob' or 'commit'."""
        return type(self).__name__.lower()

    def compute_hash(self) -> str:
        """
        Fingerprint of the serialized bytes.

        No type header is mixed in, so a blob's fingerprint is the plain
        SHA-1 of the file it came from.
        """
        return hash_object(self.serialize())

    @property
    def hash(self) -> str:
        return self.compute_hash()


class Blob(MinigitObject):
    """The bytes of one staged file, with no path or mode attached."""

    def __init__(self, data: Optional[bytes] = None):
        self.data = data if data is not None else b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Read a working file into a blob.

        Raises:
            OSError: If the file cannot be read
        """
        with open(filepath, 'rb') as f:
            data = f.read()
        return cls(data)

    def __repr__(self) -> str:
        return f"Blob({self.hash[:7]}, {len(self.data)} bytes)"


@dataclass(frozen=True)
class StagedFile:
    """A (path, fingerprint) pair, as staged in the index or recorded in a commit."""

    path: str
    sha1: str

    def to_line(self) -> str:
        return f"{escape_field(self.path)} {self.sha1}"

    @classmethod
    def from_line(cls, line: str) -> 'StagedFile':
        """
        Parse '<escaped path> <sha1>'.

        The fingerprint is split off the last space, so paths may contain
        spaces.

        Raises:
            CorruptRecordError: If the line is malformed
        """
        path, sep, sha1 = line.rpartition(' ')
        if not sep or not path or not is_valid_hash(sha1):
            raise CorruptRecordError(f"Malformed file entry: {line!r}")
        try:
            return cls(unescape_field(path), sha1)
        except ValueError as e:
            raise CorruptRecordError(f"Malformed file entry: {line!r} ({e})") from e

    def __repr__(self) -> str:
        return f"StagedFile({self.sha1[:7]} {self.path})"


class Commit(MinigitObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - The files staged at commit time, in staging order
    - The parent commit (empty for the root commit)
    - A second-resolution timestamp
    - Commit message

    Serialized form:

        message: <escaped message>
        timestamp: <YYYY-MM-DD HH:MM:SS>
        parent: <sha1 or empty>
        files:
          <escaped path> <sha1>
    """

    def __init__(self):
        """Initialize empty commit."""
        self.message: str = ''
        self.timestamp: str = ''
        self.parent: Optional[str] = None
        self.files: List[StagedFile] = []

    def serialize(self) -> bytes:
        """
        Serialize commit to its line-oriented record.

        Returns:
            bytes: UTF-8 encoded record
        """
        lines = [
            f'message: {escape_field(self.message)}',
            f'timestamp: {self.timestamp}',
            f'parent: {self.parent or ""}',
            'files:',
        ]
        for entry in self.files:
            lines.append(f'  {entry.to_line()}')

        return ''.join(line + '\n' for line in lines).encode('utf-8')

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit from its record.

        Args:
            data: Serialized commit data

        Raises:
            CorruptRecordError: If the record is structurally invalid
        """
        try:
            content = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise CorruptRecordError(f"Commit record is not valid UTF-8: {e}") from e

        lines = content.split('\n')
        if lines and lines[-1] == '':
            lines.pop()

        if len(lines) < 4:
            raise CorruptRecordError("Commit record is truncated")

        raw_message = _read_header(lines[0], 'message')
        timestamp = _read_header(lines[1], 'timestamp')
        parent = _read_header(lines[2], 'parent')

        if lines[3] != 'files:':
            raise CorruptRecordError(f"Expected 'files:' header, got {lines[3]!r}")

        try:
            message = unescape_field(raw_message)
        except ValueError as e:
            raise CorruptRecordError(f"Malformed commit message: {e}") from e

        try:
            datetime.strptime(timestamp, TIMESTAMP_FORMAT)
        except ValueError as e:
            raise CorruptRecordError(f"Malformed timestamp: {timestamp!r}") from e

        if parent and not is_valid_hash(parent):
            raise CorruptRecordError(f"Malformed parent reference: {parent!r}")

        files = []
        for line in lines[4:]:
            if not line.startswith('  '):
                raise CorruptRecordError(f"Malformed file entry: {line!r}")
            files.append(StagedFile.from_line(line[2:]))

        self.message = message
        self.timestamp = timestamp
        self.parent = parent or None
        self.files = files

    @classmethod
    def parse(cls, data: bytes) -> 'Commit':
        """Build a new commit from serialized bytes."""
        commit = cls()
        commit.deserialize(data)
        return commit

    @classmethod
    def create(
        cls,
        message: str,
        files: Iterable[StagedFile],
        parent: Optional[str] = None,
        timestamp: Optional[str] = None,
    ) -> 'Commit':
        """
        Create a new commit.

        Nothing is written; the caller stores the commit.

        Args:
            message: Commit message (may span several lines)
            files: Staged entries, in staging order
            parent: Parent commit hash, or None for the root commit
            timestamp: 'YYYY-MM-DD HH:MM:SS' (defaults to the current local time)

        Returns:
            Commit: New commit object

        Raises:
            ValueError: If parent is not a full hash or timestamp is not
                in TIMESTAMP_FORMAT
        """
        if parent and not is_valid_hash(parent):
            raise ValueError(f"Invalid parent hash: {parent!r}")

        if timestamp is None:
            timestamp = datetime.now().strftime(TIMESTAMP_FORMAT)
        elif not _is_timestamp(timestamp):
            raise ValueError(f"Timestamp must look like 'YYYY-MM-DD HH:MM:SS', got {timestamp!r}")

        commit = cls()
        commit.message = message
        commit.files = list(files)
        commit.parent = parent or None
        commit.timestamp = timestamp
        return commit

    @property
    def summary(self) -> str:
        """First line of the message."""
        return self.message.split('\n')[0]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Commit):
            return NotImplemented
        return (
            self.message == other.message
            and self.timestamp == other.timestamp
            and self.parent == other.parent
            and self.files == other.files
        )

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{self.summary[:50]}')"


def _read_header(line: str, key: str) -> str:
    """Return the value of a 'key: value' header line."""
    prefix = f'{key}: '
    if line.startswith(prefix):
        return line[len(prefix):]
    if line == f'{key}:':
        return ''
    raise CorruptRecordError(f"Expected '{key}:' header, got {line!r}")


def _is_timestamp(value: str) -> bool:
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return False
    return parsed.strftime(TIMESTAMP_FORMAT) == value
