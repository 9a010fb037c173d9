"""History traversal tests."""

import logging

import pytest
from minigit.core import history
from minigit.core.history import HistoryWalk
from minigit.core.objects import Commit, StagedFile
from minigit.core.errors import CorruptRecordError, ObjectNotFoundError


def store_fake_commit(repo, sha1, parent=None, message='crafted'):
    """Store a commit record under a chosen hash to simulate a damaged store."""
    commit = Commit.create(
        message=message,
        files=[StagedFile('f.txt', 'f' * 40)],
        parent=parent,
        timestamp='2024-01-01 12:00:00',
    )
    repo.objects.put(sha1, commit.serialize())


def test_walk_three_commits(repo, commit_files):
    """Test history comes back most recent first and ends at the root."""
    first = commit_files(repo, 'one', a='1')
    second = commit_files(repo, 'two', a='2')
    third = commit_files(repo, 'three', a='3')

    walked = list(repo.history())

    assert [h for h, _ in walked] == [third, second, first]
    assert [c.message for _, c in walked] == ['three', 'two', 'one']
    assert walked[-1][1].parent is None


def test_max_depth(repo, commit_files):
    """Test the walk stops after max_depth commits."""
    commit_files(repo, 'one', a='1')
    second = commit_files(repo, 'two', a='2')
    third = commit_files(repo, 'three', a='3')

    walk = repo.history(max_depth=2)

    assert [h for h, _ in walk] == [third, second]
    assert not walk.truncated


def test_max_depth_larger_than_history(repo_with_commits):
    """Test a generous limit yields the whole chain."""
    walked = list(repo_with_commits.history(max_depth=50))
    assert len(walked) == 2


@pytest.mark.parametrize('depth', [0, -1])
def test_max_depth_must_be_positive(repo, depth):
    """Test non-positive limits are refused."""
    with pytest.raises(ValueError):
        HistoryWalk(repo.objects, 'a' * 40, depth)


def test_start_from_older_commit(repo_with_commits):
    """Test walking from a commit other than the tip."""
    walked = list(repo_with_commits.history(start=repo_with_commits.first_commit))
    assert [h for h, _ in walked] == [repo_with_commits.first_commit]


def test_walk_is_lazy(repo, commit_files, monkeypatch):
    """Test commits are read only as the walk advances."""
    commit_files(repo, 'one', a='1')
    commit_files(repo, 'two', a='2')
    reads = []
    original = repo.objects.read_commit

    def counting_read(sha1):
        reads.append(sha1)
        return original(sha1)

    monkeypatch.setattr(repo.objects, 'read_commit', counting_read)

    walk = iter(repo.history())
    next(walk)

    assert len(reads) == 1


def test_missing_start_raises(repo):
    """Test a walk from a hash that is not stored fails."""
    with pytest.raises(ObjectNotFoundError):
        list(repo.history(start='a' * 40))


def test_corrupt_start_raises(repo):
    """Test a walk from something that is not a commit fails."""
    sha1 = 'b' * 40
    repo.objects.put(sha1, b'not a commit record')
    with pytest.raises(CorruptRecordError):
        list(repo.history(start=sha1))


def test_missing_parent_truncates(repo, caplog):
    """Test a dangling parent ends the walk with a warning."""
    store_fake_commit(repo, 'a' * 40, parent='b' * 40)

    walk = repo.history(start='a' * 40)
    with caplog.at_level(logging.WARNING, logger='minigit.core.history'):
        walked = list(walk)

    assert [h for h, _ in walked] == ['a' * 40]
    assert walk.truncated
    assert 'truncated' in caplog.text


def test_corrupt_parent_truncates(repo, caplog):
    """Test an unparseable parent ends the walk with a warning."""
    store_fake_commit(repo, 'a' * 40, parent='b' * 40)
    repo.objects.put('b' * 40, b'garbage')

    walk = repo.history(start='a' * 40)
    with caplog.at_level(logging.WARNING, logger='minigit.core.history'):
        walked = list(walk)

    assert len(walked) == 1
    assert walk.truncated


def test_cycle_stops(repo, caplog):
    """Test a parent cycle in a damaged store terminates."""
    store_fake_commit(repo, 'a' * 40, parent='b' * 40, message='A')
    store_fake_commit(repo, 'b' * 40, parent='a' * 40, message='B')

    walk = repo.history(start='a' * 40)
    with caplog.at_level(logging.WARNING, logger='minigit.core.history'):
        walked = list(walk)

    assert [c.message for _, c in walked] == ['A', 'B']
    assert walk.truncated
    assert 'cycle' in caplog.text


def test_hard_limit(repo, monkeypatch, caplog):
    """Test walks without a depth still stop at the hard limit."""
    monkeypatch.setattr(history, 'HISTORY_HARD_LIMIT', 3)
    hashes = [str(i) * 40 for i in range(1, 6)]
    for sha1, parent in zip(hashes, hashes[1:] + [None]):
        store_fake_commit(repo, sha1, parent=parent)

    walk = repo.history(start=hashes[0])
    with caplog.at_level(logging.WARNING, logger='minigit.core.history'):
        walked = list(walk)

    assert [h for h, _ in walked] == hashes[:3]
    assert walk.truncated

    explicit = repo.history(start=hashes[0], max_depth=100)
    assert len(list(explicit)) == 3


def test_walk_can_be_repeated(repo_with_commits):
    """Test iterating the same walk twice gives the same result."""
    walk = repo_with_commits.history()
    assert list(walk) == list(walk)
