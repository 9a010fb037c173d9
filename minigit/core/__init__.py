"""Core functionality for minigit.

This module contains the core data structures:
- minigit objects (Blob, Commit) and staged file entries
- Content-addressed object store
- Index/staging area
- Branch reference management
- History traversal
- Configuration management
- Hashing utilities
"""

from minigit.core.objects import MinigitObject, Blob, Commit, StagedFile
from minigit.core.object_store import ObjectStore
from minigit.core.repository import Repository
from minigit.core.hash import hash_object, hash_file
from minigit.core.index import Index
from minigit.core.refs import RefManager
from minigit.core.history import HistoryWalk, walk_history
from minigit.core.config import Config, get_config

__all__ = [
    'MinigitObject',
    'Blob',
    'Commit',
    'StagedFile',
    'ObjectStore',
    'Repository',
    'Index',
    'RefManager',
    'HistoryWalk',
    'walk_history',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
]
