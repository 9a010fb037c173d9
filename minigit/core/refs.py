"""Reference management for minigit."""

import logging
from typing import Optional

from minigit.utils.fs import atomic_write
from .errors import CorruptRecordError, ObjectNotFoundError, ReadError, WriteError
from .hash import is_valid_hash

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'main'
SYMREF_PREFIX = 'ref: '


class RefManager:
    """
    Manages the branch reference and the symbolic HEAD.

    Only one branch exists. HEAD always reads 'ref: refs/heads/main';
    the branch file holds the tip commit hash, or is absent until the
    first commit. Nothing is cached: every read goes to disk.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.minigit_dir = repo.minigit_dir
        self.heads_dir = self.minigit_dir / 'refs' / 'heads'
        self.head_file = self.minigit_dir / 'HEAD'

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference and return its commit hash.

        Args:
            ref_name: Reference name ('HEAD', 'refs/heads/main' or 'main')

        Returns:
            Commit hash or None if the reference has no commit yet

        Raises:
            ReadError: If the ref file cannot be read
            CorruptRecordError: If the ref holds something other than a hash
        """
        if ref_name == 'HEAD':
            return self.resolve_head()

        ref_path = self._ref_path(ref_name)
        try:
            content = ref_path.read_text().strip()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise ReadError(f"Cannot read ref {ref_name}: {e}", target=ref_name) from e

        if not content:
            return None

        if content.startswith(SYMREF_PREFIX):
            return self.read_ref(content[len(SYMREF_PREFIX):])

        if not is_valid_hash(content):
            raise CorruptRecordError(
                f"Ref {ref_name} holds an invalid hash: {content!r}", target=ref_name
            )
        return content

    def write_ref(self, ref_name: str, commit_hash: str) -> None:
        """
        Point a reference at a commit.

        Args:
            ref_name: Reference name (e.g., 'refs/heads/main')
            commit_hash: Commit hash to point to

        Raises:
            ObjectNotFoundError: If commit_hash is not in the object store
            WriteError: If the ref file cannot be written
        """
        if not self.repo.objects.exists(commit_hash):
            raise ObjectNotFoundError(
                f"Cannot point {ref_name} at missing object {commit_hash}",
                target=commit_hash,
            )

        ref_path = self._ref_path(ref_name)
        try:
            atomic_write(ref_path, (commit_hash + '\n').encode())
        except OSError as e:
            raise WriteError(f"Cannot write ref {ref_name}: {e}", target=ref_name) from e

        logger.debug("Updated %s to %s", ref_name, commit_hash[:7])

    def head_target(self) -> str:
        """
        Name of the branch ref HEAD points to.

        Falls back to the default branch when HEAD is missing.
        """
        try:
            content = self.head_file.read_text().strip()
        except FileNotFoundError:
            return f'refs/heads/{DEFAULT_BRANCH}'
        except OSError as e:
            raise ReadError(f"Cannot read HEAD: {e}", target='HEAD') from e

        if not content.startswith(SYMREF_PREFIX):
            raise CorruptRecordError(f"HEAD is not a symbolic ref: {content!r}", target='HEAD')
        return content[len(SYMREF_PREFIX):]

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit hash.

        Returns:
            Commit hash or None if there are no commits yet
        """
        return self.read_ref(self.head_target())

    def update_head(self, commit_hash: str) -> None:
        """Advance the branch HEAD points to."""
        self.write_ref(self.head_target(), commit_hash)

    def set_head(self, branch: str = DEFAULT_BRANCH) -> None:
        """Write HEAD as a symbolic ref to a branch."""
        try:
            self.head_file.write_text(f'{SYMREF_PREFIX}refs/heads/{branch}\n')
        except OSError as e:
            raise WriteError(f"Cannot write HEAD: {e}", target='HEAD') from e

    def get_current_branch(self) -> str:
        """Get the current branch name."""
        target = self.head_target()
        if target.startswith('refs/heads/'):
            return target[len('refs/heads/'):]
        return target

    def _ref_path(self, ref_name: str):
        if ref_name.startswith('refs/'):
            return self.minigit_dir / ref_name
        return self.heads_dir / ref_name
