"""Commit history traversal."""

import logging
from typing import Iterator, Optional, Tuple

from .errors import CorruptRecordError, ObjectNotFoundError
from .objects import Commit

logger = logging.getLogger(__name__)

# Upper bound for every walk, including walks without an explicit depth.
HISTORY_HARD_LIMIT = 10_000


class HistoryWalk:
    """
    Lazy, bounded walk over a commit chain.

    Iterating yields (hash, Commit) pairs from the start commit back
    through parent links, most recent first. The walk stops when:

    - a commit has no parent (the root commit),
    - max_depth commits have been produced,
    - a hash repeats (a parent cycle in a damaged store),
    - a parent is missing or unparseable.

    The last two end the walk early: a warning is logged and
    `truncated` is set. A missing or corrupt start commit raises,
    because there is no history at all to show.
    """

    def __init__(self, objects, start: str, max_depth: Optional[int] = None):
        """
        Args:
            objects: ObjectStore to read commits from
            start: Hash of the first commit to yield
            max_depth: Maximum number of commits (None for no explicit limit)
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")

        self.objects = objects
        self.start = start
        self.max_depth = min(max_depth or HISTORY_HARD_LIMIT, HISTORY_HARD_LIMIT)
        self.truncated = False

    def __iter__(self) -> Iterator[Tuple[str, Commit]]:
        self.truncated = False
        seen = set()
        commit_hash = self.start
        count = 0

        while commit_hash:
            if count >= self.max_depth:
                if self.max_depth == HISTORY_HARD_LIMIT:
                    self._stop(commit_hash, f"history exceeds {HISTORY_HARD_LIMIT} commits")
                return

            if commit_hash in seen:
                self._stop(commit_hash, "parent cycle detected")
                return
            seen.add(commit_hash)

            try:
                commit = self.objects.read_commit(commit_hash)
            except (ObjectNotFoundError, CorruptRecordError) as e:
                if count == 0:
                    raise
                self._stop(commit_hash, str(e))
                return

            yield commit_hash, commit
            count += 1
            commit_hash = commit.parent

    def _stop(self, commit_hash: str, reason: str) -> None:
        self.truncated = True
        logger.warning("History truncated at %s: %s", commit_hash[:7], reason)


def walk_history(repo, start: str, max_depth: Optional[int] = None) -> HistoryWalk:
    """
    Walk history from start through parent links.

    Args:
        repo: Repository instance
        start: Hash of the newest commit to show
        max_depth: Maximum number of commits to yield

    Returns:
        HistoryWalk: Iterable of (hash, Commit), most recent first
    """
    return HistoryWalk(repo.objects, start, max_depth)
