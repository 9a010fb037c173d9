"""Settings for minigit.

Values are looked up in three layers: the environment, the repository's
.minigit/config and the user's ~/.minigitconfig. Both files are INI.
"""

import os
import configparser
from pathlib import Path
from typing import Iterator, Optional

from .errors import WriteError

DEFAULT_LOG_MAXCOUNT = 10

ENV_PREFIX = 'MINIGIT'


def _read_ini(path: Optional[Path]) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path is not None and path.exists():
        parser.read(path)
    return parser


class Config:
    """
    Layered minigit settings.

    Lookup order, first hit wins:
        MINIGIT_<SECTION>_<KEY> environment variable
        repository config (.minigit/config)
        user config (~/.minigitconfig)

    Only the repository layer is written to. Files are parsed once per
    Config instance; open a new one to pick up changes made elsewhere.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.minigitconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        self.repo_config_path = Path(repo_config_path) if repo_config_path else None
        self._user = None
        self._repo = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        if self._user is None:
            self._user = _read_ini(self.GLOBAL_CONFIG_PATH)
        return self._user

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self.repo_config_path is None:
            return None
        if self._repo is None:
            self._repo = _read_ini(self.repo_config_path)
        return self._repo

    def _file_layers(self) -> Iterator[configparser.ConfigParser]:
        if self.repo_config is not None:
            yield self.repo_config
        yield self.global_config

    @staticmethod
    def env_key(section: str, key: str) -> str:
        """Environment variable that overrides section.key."""
        return f"{ENV_PREFIX}_{section.upper()}_{key.upper()}"

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Look up section.key across all layers.

        Returns:
            The first value found, or fallback
        """
        from_env = os.environ.get(self.env_key(section, key))
        if from_env is not None:
            return from_env

        for layer in self._file_layers():
            if layer.has_option(section, key):
                return layer.get(section, key)
        return fallback

    def get_int(self, section: str, key: str, fallback: int) -> int:
        """
        Integer variant of get().

        Raises:
            ValueError: If the stored value is not an integer
        """
        raw = self.get(section, key)
        if raw is None:
            return fallback
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{section}.{key} must be an integer, got {raw!r}")

    def set(self, section: str, key: str, value: str) -> None:
        """
        Store section.key in the repository config file.

        Raises:
            ValueError: If this Config has no repository file
            WriteError: If the file cannot be written
        """
        if self.repo_config_path is None:
            raise ValueError("No repository config path available")

        parser = self.repo_config
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)

        try:
            with open(self.repo_config_path, 'w') as f:
                parser.write(f)
        except OSError as e:
            raise WriteError(f"Cannot write config: {e}", target=str(self.repo_config_path)) from e

    def log_max_count(self) -> int:
        """
        Number of commits 'log' shows when no limit is given.

        Raises:
            ValueError: If log.maxcount is not a positive integer
        """
        count = self.get_int('log', 'maxcount', DEFAULT_LOG_MAXCOUNT)
        if count < 1:
            raise ValueError(f"log.maxcount must be at least 1, got {count}")
        return count


def get_config(repo=None) -> Config:
    """Config for repo, or user-level settings only when repo is None."""
    if repo:
        return Config(repo.config_file)
    return Config()
