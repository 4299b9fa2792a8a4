"""
Git backend for the dashboard repository.

Each operation is one bounded, blocking ``git`` subprocess call. Public
operations return a GitResult instead of raising; only ``clone`` raises,
since there is nothing useful to do without a local copy.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from mindcontext.core.sync.models import GitResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60
ONLINE_CHECK_TIMEOUT = 5


class GitError(Exception):
    """Exception raised when a git operation fails."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


def _run(
    args: list[str],
    cwd: Path | None = None,
    *,
    check: bool = True,
    timeout: int = DEFAULT_TIMEOUT,
) -> str:
    """
    Run a git command and return its stdout.

    Args:
        args: Git command arguments (without "git" prefix).
        cwd: Working directory for the command.
        check: Whether to raise on non-zero exit code.
        timeout: Seconds before the command is abandoned.

    Returns:
        Command stdout as string (stripped).

    Raises:
        GitError: If the command fails and check=True, times out, or git
            is not installed.
    """
    cmd = ["git"] + args

    logger.debug("Running git command: %s", " ".join(cmd))

    if cwd is not None and not Path(cwd).is_dir():
        raise GitError(f"Directory not found: {cwd}", command=cmd)

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise GitError(f"Git command timed out: {' '.join(cmd)}", command=cmd) from e
    except FileNotFoundError as e:
        raise GitError("git not found in PATH", command=cmd) from e

    if check and result.returncode != 0:
        stderr = result.stderr.strip() if result.stderr else ""
        raise GitError(
            f"Git command failed: {' '.join(cmd)}",
            command=cmd,
            stderr=stderr,
        )

    return result.stdout.strip() if result.stdout else ""


def _describe(error: GitError) -> str:
    return error.stderr or str(error)


class GitBackend:
    """
    Commits, pushes and pulls the local dashboard repository clone.

    Example:
        >>> backend = GitBackend(get_repo_dir())
        >>> result = backend.commit_all("chore(progress): sync laptop")
        >>> if result.success and not result.nothing_to_commit:
        ...     backend.push()
    """

    def __init__(
        self,
        repo_dir: Path,
        remote: str = "origin",
        branch: str = "main",
        push_timeout: int = 30,
        pull_timeout: int = DEFAULT_TIMEOUT,
    ) -> None:
        self.repo_dir = Path(repo_dir)
        self.remote = remote
        self.branch = branch
        self.push_timeout = push_timeout
        self.pull_timeout = pull_timeout

    def _run_git(self, args: list[str], *, check: bool = True, timeout: int = DEFAULT_TIMEOUT) -> str:
        return _run(args, self.repo_dir, check=check, timeout=timeout)

    def is_repo(self) -> bool:
        """Check whether the local clone exists and is a git repository."""
        if not (self.repo_dir / ".git").exists():
            return False
        try:
            self._run_git(["rev-parse", "--git-dir"])
            return True
        except GitError:
            return False

    def has_changes(self) -> bool:
        """Check for uncommitted changes, including untracked files."""
        return bool(self._run_git(["status", "--porcelain"]))

    def commit_all(self, message: str) -> GitResult:
        """
        Stage everything and commit.

        Args:
            message: Commit message

        Returns:
            GitResult; nothing_to_commit=True when the tree was clean
        """
        try:
            if not self.has_changes():
                return GitResult(success=True, message="Nothing to commit", nothing_to_commit=True)

            self._run_git(["add", "-A"])
            self._run_git(["commit", "-m", message])
        except GitError as e:
            logger.error("Commit failed: %s", _describe(e))
            return GitResult(success=False, message=_describe(e))

        logger.info("Committed: %s", message)
        return GitResult(success=True, message="Committed")

    def push(self) -> GitResult:
        """Push the branch to the remote."""
        try:
            self._run_git(["push", self.remote, self.branch], timeout=self.push_timeout)
        except GitError as e:
            logger.warning("Push failed: %s", _describe(e))
            return GitResult(success=False, message=_describe(e))

        logger.info("Pushed to %s/%s", self.remote, self.branch)
        return GitResult(success=True, message="Pushed")

    def pull(self) -> GitResult:
        """Pull remote changes, rebasing local commits on top."""
        if not self.is_repo():
            return GitResult(success=False, message="Repository not initialized")

        try:
            self._run_git(
                ["pull", "--rebase", self.remote, self.branch],
                timeout=self.pull_timeout,
            )
        except GitError as e:
            logger.warning("Pull failed: %s", _describe(e))
            return GitResult(success=False, message=_describe(e))

        return GitResult(success=True, message="Pulled latest changes")

    def is_online(self) -> bool:
        """Check whether the remote is reachable."""
        try:
            self._run_git(
                ["ls-remote", "--exit-code", self.remote, "HEAD"],
                timeout=ONLINE_CHECK_TIMEOUT,
            )
            return True
        except GitError:
            return False

    @staticmethod
    def clone(url: str, dest: Path) -> None:
        """
        Clone a repository.

        Args:
            url: Repository URL
            dest: Target directory (must not exist)

        Raises:
            GitError: If the clone fails
        """
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        _run(["clone", url, str(dest)], timeout=DEFAULT_TIMEOUT * 2)
        logger.info("Cloned %s into %s", url, dest)
