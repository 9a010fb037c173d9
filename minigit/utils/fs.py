"""Filesystem helpers."""

import os
import tempfile
from pathlib import Path


def atomic_write(path: Path, data: bytes) -> None:
    """
    Replace the file at path with data in a single rename.

    The bytes go to a temp file in the same directory first, so a reader
    sees either the old content or the new content, never a partial write.

    Args:
        path: Destination file
        data: Full new content

    Raises:
        OSError: If the directory is not writable or the disk is full
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix='.tmp_')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
