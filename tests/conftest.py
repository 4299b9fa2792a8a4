"""
Pytest configuration and shared fixtures.

Provides an isolated mindcontext home, temporary git repositories (including
a bare "remote" dashboard repository) and openspec project layouts.
"""

import subprocess
from pathlib import Path

import pytest

from mindcontext.core.config import MachineInfo, MindContextConfig, save_config

TEST_MACHINE = MachineInfo(name="test-machine", id="abcd1234")


def run_git(args: list[str], cwd: Path) -> str:
    """Run a git command in a test repository."""
    result = subprocess.run(
        ["git"] + args,
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def write_tasks(change_dir: Path, done: int, todo: int) -> None:
    """Write a tasks.md checklist with the given counts."""
    change_dir.mkdir(parents=True, exist_ok=True)
    lines = ["# Tasks", ""]
    lines += [f"- [x] Done task {i}" for i in range(done)]
    lines += [f"- [ ] Open task {i}" for i in range(todo)]
    (change_dir / "tasks.md").write_text("\n".join(lines) + "\n")


@pytest.fixture
def machine() -> MachineInfo:
    """Fixed machine identity for tests."""
    return TEST_MACHINE


# ==============================================================================
# Environment Fixtures
# ==============================================================================


@pytest.fixture
def mindcontext_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point MINDCONTEXT_HOME at a temporary directory."""
    home = tmp_path / "mindcontext-home"
    monkeypatch.setenv("MINDCONTEXT_HOME", str(home))
    for var in ("MINDCONTEXT_REMOTE", "MINDCONTEXT_BRANCH", "MINDCONTEXT_PUSH_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give git an author identity without touching global config."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


# ==============================================================================
# Git Fixtures
# ==============================================================================


@pytest.fixture
def git_repo(tmp_path: Path, git_identity: None) -> Path:
    """Create a temporary git repository on branch main."""
    repo = tmp_path / "project-repo"
    repo.mkdir()
    run_git(["init"], repo)
    run_git(["symbolic-ref", "HEAD", "refs/heads/main"], repo)
    return repo


@pytest.fixture
def dashboard_remote(tmp_path: Path, git_identity: None) -> Path:
    """
    Create a bare dashboard repository with one commit on main.

    Returns:
        Path to the bare repository (usable as a clone URL)
    """
    remote = tmp_path / "dashboard.git"
    run_git(["init", "--bare", str(remote)], tmp_path)
    run_git(["symbolic-ref", "HEAD", "refs/heads/main"], remote)

    seed = tmp_path / "seed"
    seed.mkdir()
    run_git(["init"], seed)
    run_git(["symbolic-ref", "HEAD", "refs/heads/main"], seed)
    (seed / "README.md").write_text("# Progress dashboard\n")
    run_git(["add", "README.md"], seed)
    run_git(["commit", "-m", "Initial commit"], seed)
    run_git(["remote", "add", "origin", str(remote)], seed)
    run_git(["push", "origin", "main"], seed)

    return remote


@pytest.fixture
def dashboard_clone(mindcontext_home: Path, dashboard_remote: Path) -> Path:
    """Clone the dashboard remote into <home>/repo."""
    repo_dir = mindcontext_home / "repo"
    mindcontext_home.mkdir(parents=True, exist_ok=True)
    run_git(["clone", str(dashboard_remote), str(repo_dir)], mindcontext_home)
    return repo_dir


@pytest.fixture
def initialized_home(mindcontext_home: Path, dashboard_clone: Path, dashboard_remote: Path) -> MindContextConfig:
    """A fully initialized home: config plus a cloned dashboard repository."""
    config = MindContextConfig(
        dashboard_repo=str(dashboard_remote),
        machine=TEST_MACHINE,
    )
    save_config(config)
    return config


# ==============================================================================
# Project Fixtures
# ==============================================================================


@pytest.fixture
def openspec_project(tmp_path: Path) -> Path:
    """
    Create a project using the openspec layout.

    Creates:
    - openspec/project.md
    - openspec/changes/add-feature/tasks.md (2 of 4 done)
    - openspec/changes/cleanup-docs/tasks.md (3 of 3 done)
    - openspec/changes/archive/old-feature/tasks.md (1 of 2 done, ignored)
    """
    project = tmp_path / "my-project"
    openspec = project / "openspec"
    (openspec / "changes").mkdir(parents=True)
    (openspec / "project.md").write_text("# My Project\n")

    write_tasks(openspec / "changes" / "add-feature", done=2, todo=2)
    write_tasks(openspec / "changes" / "cleanup-docs", done=3, todo=0)
    write_tasks(openspec / "changes" / "archive" / "old-feature", done=1, todo=1)

    return project
