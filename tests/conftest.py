"""Shared pytest fixtures for minigit tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from minigit.core.repository import Repository
from minigit.core.objects import Blob, Commit, StagedFile


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep the user's global config and environment out of tests."""
    from minigit.core.config import Config
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', tmp_path / '.minigitconfig')
    monkeypatch.delenv('MINIGIT_LOG_MAXCOUNT', raising=False)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")


@pytest.fixture
def sample_commit(repo, sample_blob):
    """Sample root commit referencing one stored blob."""
    blob_hash = repo.objects.write(sample_blob)
    return Commit.create(
        message="Test commit",
        files=[StagedFile('test.txt', blob_hash)],
        timestamp="2024-01-01 12:00:00",
    )


@pytest.fixture
def repo_with_commits(repo):
    """Repository with two commits: 'First commit' then 'Second commit'."""
    file1 = repo.work_tree / "file1.txt"
    file1.write_text("Hello, World!")
    repo.stage(file1)
    repo.first_commit = repo.commit("First commit", timestamp="2024-01-01 12:00:00")

    file2 = repo.work_tree / "file2.txt"
    file2.write_text("Second file")
    repo.stage(file2)
    repo.second_commit = repo.commit("Second commit", timestamp="2024-01-01 12:05:00")

    return repo


def make_commit(repo, message="Test commit", **files):
    """
    Write files into the work tree, stage them and commit.

    Args:
        repo: Repository instance
        message: Commit message
        files: filename=content pairs

    Returns:
        str: Commit hash
    """
    for name, content in files.items():
        path = repo.work_tree / name
        path.write_text(content)
        repo.stage(path)
    return repo.commit(message)


@pytest.fixture
def commit_files():
    """Return make_commit for tests that build their own history."""
    return make_commit
