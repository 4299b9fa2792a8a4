"""
Tests for the config, cleanup, migrate and reset commands.
"""

import json
import os
import time
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mindcontext.cli import app
from mindcontext.core.config import (
    MindContextConfig,
    ProjectConfig,
    get_config_path,
    load_config,
    save_config,
)
from mindcontext.core.updates import ContextStatus, read_record

runner = CliRunner()

DAY = 24 * 60 * 60


class TestConfig:
    """Tests for `mctx config`."""

    def test_show(self, initialized_home: MindContextConfig) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0, result.output
        assert "Dashboard URL:" in result.output
        assert "Machine:        test-machine (abcd1234)" in result.output
        assert "Projects:       0 registered" in result.output

    def test_get_scalar(self, initialized_home: MindContextConfig) -> None:
        result = runner.invoke(app, ["config", "--get", "dashboard_repo"])

        assert result.exit_code == 0
        assert result.output.strip() == initialized_home.dashboard_repo

    def test_get_nested(self, initialized_home: MindContextConfig) -> None:
        result = runner.invoke(app, ["config", "--get", "machine"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "test-machine", "id": "abcd1234"}

    def test_get_unknown_key(self, initialized_home: MindContextConfig) -> None:
        result = runner.invoke(app, ["config", "--get", "nope"])

        assert result.exit_code == 2
        assert "Unknown config key: nope" in result.output

    def test_set_values(self, initialized_home: MindContextConfig) -> None:
        result = runner.invoke(
            app,
            [
                "config",
                "--dashboard-url",
                "https://alice.github.io/progress",
                "--dashboard-repo",
                "git@github.com:alice/progress.git",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "Config updated" in result.output
        config = load_config()
        assert config.dashboard_url == "https://alice.github.io/progress"
        assert config.dashboard_repo == "git@github.com:alice/progress.git"

    def test_set_value_with_env_override(
        self, initialized_home: MindContextConfig, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test saving the config while an override is exported keeps the file value."""
        monkeypatch.setenv("MINDCONTEXT_REMOTE", "temp-mirror")

        result = runner.invoke(app, ["config", "--dashboard-url", "https://alice.github.io/progress"])

        assert result.exit_code == 0, result.output
        on_disk = json.loads(get_config_path().read_text())
        assert on_disk["sync"]["remote"] == "origin"
        assert on_disk["dashboard_url"] == "https://alice.github.io/progress"

    def test_not_initialized(self, mindcontext_home: Path) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 2

    def test_invalid_config_file(self, mindcontext_home: Path) -> None:
        mindcontext_home.mkdir(parents=True)
        (mindcontext_home / "config.json").write_text("{not json")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 2
        assert "Failed to read config" in result.output


class TestCleanup:
    """Tests for `mctx cleanup`."""

    @pytest.fixture
    def aged_updates(self, initialized_home: MindContextConfig, dashboard_clone: Path) -> Path:
        """Register a project with one old and one recent update file."""
        config = load_config()
        config.projects["api"] = ProjectConfig(path="/work/api")
        save_config(config)

        updates = dashboard_clone / "projects" / "api" / "updates"
        updates.mkdir(parents=True)
        now = time.time()
        for name, age_days in [("old.json", 40), ("new.json", 2)]:
            path = updates / name
            path.write_text("{}")
            os.utime(path, (now - age_days * DAY, now - age_days * DAY))
        return updates

    def test_dry_run(self, aged_updates: Path) -> None:
        result = runner.invoke(app, ["cleanup", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Would delete: api/old.json" in result.output
        assert "1 file(s) would be deleted." in result.output
        assert (aged_updates / "old.json").exists()

    def test_deletes_old_files(self, aged_updates: Path) -> None:
        result = runner.invoke(app, ["cleanup"])

        assert result.exit_code == 0, result.output
        assert "Cleaned up 1 file(s)." in result.output
        assert not (aged_updates / "old.json").exists()
        assert (aged_updates / "new.json").exists()

    def test_older_than(self, aged_updates: Path) -> None:
        result = runner.invoke(app, ["cleanup", "--older-than", "1"])

        assert result.exit_code == 0, result.output
        assert "Cleaned up 2 file(s)." in result.output


class TestMigrate:
    """Tests for `mctx migrate`."""

    @pytest.fixture
    def legacy_project(
        self,
        initialized_home: MindContextConfig,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> Path:
        project = tmp_path / "legacy"
        (project / ".claude").mkdir(parents=True)
        (project / ".claude" / "focus.json").write_text(
            json.dumps(
                {
                    "timestamp": "2026-01-10T09:30:00Z",
                    "current_focus": "Refactor auth",
                    "session_summary": "Split token service",
                    "next_session_tasks": ["Add refresh tokens"],
                }
            )
        )
        (project / ".project").mkdir()
        (project / ".project" / "roadmap.md").write_text("# Roadmap\n")
        monkeypatch.chdir(project)
        return project

    def test_nothing_to_migrate(self, initialized_home: MindContextConfig, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["migrate"])

        assert result.exit_code == 0
        assert "Nothing to migrate." in result.output

    def test_dry_run(self, legacy_project: Path, dashboard_clone: Path) -> None:
        result = runner.invoke(app, ["migrate", "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "roadmap.md" in result.output
        assert "Dry-run mode - no changes made." in result.output
        assert not (dashboard_clone / "projects" / "legacy").exists()

    def test_migrates_focus(self, legacy_project: Path, dashboard_clone: Path) -> None:
        result = runner.invoke(app, ["migrate"])

        assert result.exit_code == 0, result.output
        assert "Migration complete." in result.output
        assert ".project/ migration is not automated." in result.output

        [path] = sorted((dashboard_clone / "projects" / "legacy" / "updates").glob("*.json"))
        assert path.name.startswith("2026-01-10T09-30-00_test-machine_abcd1234")
        record = read_record(path)
        assert record.context.status == ContextStatus.MIGRATED
        assert record.context.current_task == "Refactor auth"
        assert record.context.next == ["Add refresh tokens"]
        assert (legacy_project / ".project" / "roadmap.md").exists()

    def test_skip_focus(self, legacy_project: Path, dashboard_clone: Path) -> None:
        result = runner.invoke(app, ["migrate", "--skip-focus"])

        assert result.exit_code == 0, result.output
        assert "Migration complete." not in result.output
        assert not (dashboard_clone / "projects" / "legacy").exists()

    def test_invalid_focus(self, legacy_project: Path) -> None:
        (legacy_project / ".claude" / "focus.json").write_text("[1, 2]")

        result = runner.invoke(app, ["migrate"])

        assert result.exit_code == 1
        assert "Failed to migrate focus.json" in result.output


class TestReset:
    """Tests for `mctx reset`."""

    def test_nothing_to_remove(self, mindcontext_home: Path) -> None:
        result = runner.invoke(app, ["reset", "--force"])

        assert result.exit_code == 0
        assert "Nothing to remove" in result.output

    def test_requires_force(self, initialized_home: MindContextConfig, mindcontext_home: Path) -> None:
        result = runner.invoke(app, ["reset"])

        assert result.exit_code == 2
        assert "--force" in result.output
        assert mindcontext_home.exists()

    def test_dry_run(self, initialized_home: MindContextConfig, mindcontext_home: Path) -> None:
        result = runner.invoke(app, ["reset", "--dry-run"])

        assert result.exit_code == 0
        assert "Would remove:" in result.output
        assert mindcontext_home.exists()

    def test_force(self, initialized_home: MindContextConfig, mindcontext_home: Path) -> None:
        result = runner.invoke(app, ["reset", "--force"])

        assert result.exit_code == 0, result.output
        assert not mindcontext_home.exists()
