"""
Tests for GitBackend against real temporary git repositories.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from mindcontext.core.sync import GitBackend, GitError, PendingQueue, SyncCoordinator, SyncStatus


def git(args: list[str], cwd: Path) -> str:
    return subprocess.run(
        ["git"] + args, cwd=cwd, capture_output=True, text=True, check=True
    ).stdout.strip()


@pytest.fixture
def clone(tmp_path: Path, dashboard_remote: Path) -> Path:
    """A working clone of the dashboard remote."""
    target = tmp_path / "clone"
    GitBackend.clone(str(dashboard_remote), target)
    return target


class TestClone:
    """Tests for GitBackend.clone()."""

    def test_clone(self, clone: Path) -> None:
        assert (clone / "README.md").exists()
        assert GitBackend(clone).is_repo() is True

    def test_clone_failure_raises(self, tmp_path: Path) -> None:
        with pytest.raises(GitError) as exc_info:
            GitBackend.clone(str(tmp_path / "does-not-exist.git"), tmp_path / "target")
        assert exc_info.value.command is not None
        assert exc_info.value.command[:2] == ["git", "clone"]

    def test_git_missing(self, tmp_path: Path) -> None:
        with patch("mindcontext.core.sync.backend.subprocess.run", side_effect=FileNotFoundError):
            with pytest.raises(GitError, match="git not found"):
                GitBackend.clone("url", tmp_path / "target")

    def test_timeout(self, tmp_path: Path) -> None:
        with patch(
            "mindcontext.core.sync.backend.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="git", timeout=1),
        ):
            with pytest.raises(GitError, match="timed out"):
                GitBackend.clone("url", tmp_path / "target")


class TestCommitAll:
    """Tests for GitBackend.commit_all()."""

    def test_nothing_to_commit(self, clone: Path) -> None:
        result = GitBackend(clone).commit_all("msg")

        assert result.success is True
        assert result.nothing_to_commit is True

    def test_commits_untracked_files(self, clone: Path) -> None:
        (clone / "projects").mkdir()
        (clone / "projects" / "update.json").write_text("{}")

        result = GitBackend(clone).commit_all("chore(progress): sync laptop")

        assert result.success is True
        assert result.nothing_to_commit is False
        assert git(["log", "-1", "--format=%s"], clone) == "chore(progress): sync laptop"
        assert git(["status", "--porcelain"], clone) == ""

    def test_commits_deletions(self, clone: Path) -> None:
        (clone / "README.md").unlink()

        result = GitBackend(clone).commit_all("remove readme")

        assert result.success is True
        assert "README.md" not in git(["ls-files"], clone)

    def test_failure_is_returned(self, tmp_path: Path) -> None:
        result = GitBackend(tmp_path / "not-a-repo").commit_all("msg")

        assert result.success is False
        assert result.message


class TestPushPull:
    """Tests for push(), pull() and is_online()."""

    def test_push(self, clone: Path, dashboard_remote: Path) -> None:
        (clone / "file.txt").write_text("hello")
        backend = GitBackend(clone)
        backend.commit_all("add file")

        result = backend.push()

        assert result.success is True
        assert git(["log", "-1", "--format=%s", "main"], dashboard_remote) == "add file"

    def test_push_to_missing_remote_fails(self, clone: Path) -> None:
        result = GitBackend(clone, remote="nowhere").push()

        assert result.success is False

    def test_pull_brings_in_other_machine(self, tmp_path: Path, clone: Path, dashboard_remote: Path) -> None:
        other = tmp_path / "other"
        GitBackend.clone(str(dashboard_remote), other)
        (other / "from-other.txt").write_text("hi")
        other_backend = GitBackend(other)
        other_backend.commit_all("other machine")
        assert other_backend.push().success

        result = GitBackend(clone).pull()

        assert result.success is True
        assert (clone / "from-other.txt").exists()

    def test_pull_without_repo(self, tmp_path: Path) -> None:
        result = GitBackend(tmp_path / "missing").pull()

        assert result.success is False
        assert result.message == "Repository not initialized"

    def test_is_online(self, clone: Path) -> None:
        assert GitBackend(clone).is_online() is True
        assert GitBackend(clone, remote="nowhere").is_online() is False


class TestCoordinatorWithGit:
    """SyncCoordinator driving a real repository."""

    def test_sync_then_no_changes(self, clone: Path, dashboard_remote: Path) -> None:
        coordinator = SyncCoordinator(GitBackend(clone))
        queue = PendingQueue()
        (clone / "update.json").write_text("{}")

        first = coordinator.sync("sync 1", queue)
        second = coordinator.sync("sync 2", queue)

        assert first.status == SyncStatus.SYNCED
        assert second.status == SyncStatus.NO_CHANGES
        assert git(["log", "-1", "--format=%s", "main"], dashboard_remote) == "sync 1"

    def test_offline_commit_is_kept_and_pushed_later(self, clone: Path, dashboard_remote: Path) -> None:
        queue = PendingQueue()
        (clone / "offline.json").write_text("{}")

        offline = SyncCoordinator(GitBackend(clone, remote="nowhere")).sync("offline sync", queue)

        assert offline.status == SyncStatus.PENDING
        assert git(["log", "-1", "--format=%s"], clone) == "offline sync"
        assert queue.messages == ["offline sync"]

        assert SyncCoordinator(GitBackend(clone)).flush(queue) is True
        assert queue.is_empty()
        assert git(["log", "-1", "--format=%s", "main"], dashboard_remote) == "offline sync"
