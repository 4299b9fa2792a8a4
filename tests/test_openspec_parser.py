"""
Tests for openspec checklist parsing and active change selection.
"""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from mindcontext.core.openspec import (
    ChangeProposal,
    ChangeStatus,
    ProgressSnapshot,
    ProgressSource,
    count_tasks,
    derive_status,
    get_progress,
    has_openspec,
    parse_change,
    parse_openspec,
    select_active_change,
)


def make_layout(project: Path) -> Path:
    """Create the openspec marker and changes directory."""
    changes = project / "openspec" / "changes"
    changes.mkdir(parents=True)
    (project / "openspec" / "project.md").write_text("# Project\n")
    return changes


class TestCountTasks:
    """Tests for count_tasks()."""

    def test_mixed_checklist(self) -> None:
        """Two checked and two unchecked items."""
        content = "- [x] Task 1\n- [x] Task 2\n- [ ] Task 3\n- [ ] Task 4\n"
        assert count_tasks(content) == (2, 4)

    def test_uppercase_x_counts_as_complete(self) -> None:
        assert count_tasks("- [X] Done\n- [ ] Open\n") == (1, 2)

    def test_indented_items_are_counted(self) -> None:
        content = "## Section\n  - [x] Nested done\n\t- [ ] Nested open\n"
        assert count_tasks(content) == (1, 2)

    def test_non_checklist_lines_are_ignored(self) -> None:
        content = "\n".join([
            "# Tasks",
            "Some prose with - [x] in the middle",
            "* [x] wrong bullet",
            "- [] missing space",
            "- [-] partial",
            "-[x] no space after dash",
            "- [x] Real task",
        ])
        assert count_tasks(content) == (1, 1)

    def test_empty_document(self) -> None:
        assert count_tasks("") == (0, 0)

    @pytest.mark.parametrize(
        "content",
        [
            "- [x] a\n- [x] b\n",
            "- [ ] a\n- [x] b\n- [ ] c\n",
            "text\n- [X] a\n\n- [ ] b\n- [x] c\n",
            "- [x]\n- [x]\n- [x]\n",
            "no tasks here\n",
        ],
    )
    def test_complete_never_exceeds_total(self, content: str) -> None:
        complete, total = count_tasks(content)
        assert 0 <= complete <= total


class TestDeriveStatus:
    """Tests for derive_status()."""

    @pytest.mark.parametrize(
        ("complete", "total", "expected"),
        [
            (0, 0, ChangeStatus.NOT_STARTED),
            (0, 3, ChangeStatus.NOT_STARTED),
            (1, 3, ChangeStatus.IN_PROGRESS),
            (2, 4, ChangeStatus.IN_PROGRESS),
            (3, 3, ChangeStatus.DONE),
        ],
    )
    def test_status_from_counts(self, complete: int, total: int, expected: ChangeStatus) -> None:
        assert derive_status(complete, total) == expected


class TestChangeProposal:
    """Tests for the ChangeProposal model."""

    def test_status_is_derived(self) -> None:
        proposal = ChangeProposal(id="add-auth", tasks_total=4, tasks_complete=2)
        assert proposal.status == ChangeStatus.IN_PROGRESS

    def test_complete_above_total_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChangeProposal(id="bad", tasks_total=1, tasks_complete=2)


class TestParseChange:
    """Tests for parse_change()."""

    def test_scenario_two_of_four(self, tmp_path: Path) -> None:
        change_dir = tmp_path / "add-feature"
        change_dir.mkdir()
        (change_dir / "tasks.md").write_text(
            "- [x] Task 1\n- [x] Task 2\n- [ ] Task 3\n- [ ] Task 4\n"
        )

        proposal = parse_change(change_dir)

        assert proposal.id == "add-feature"
        assert proposal.tasks_complete == 2
        assert proposal.tasks_total == 4
        assert proposal.status == ChangeStatus.IN_PROGRESS

    def test_missing_tasks_file(self, tmp_path: Path) -> None:
        change_dir = tmp_path / "empty-change"
        change_dir.mkdir()

        proposal = parse_change(change_dir)

        assert (proposal.tasks_complete, proposal.tasks_total) == (0, 0)
        assert proposal.status == ChangeStatus.NOT_STARTED


class TestParseOpenspec:
    """Tests for parse_openspec() and has_openspec()."""

    def test_no_layout(self, tmp_path: Path) -> None:
        result = parse_openspec(tmp_path)

        assert result.found is False
        assert result.changes == []
        assert result.active_change is None

    def test_marker_without_changes_dir(self, tmp_path: Path) -> None:
        (tmp_path / "openspec").mkdir()
        (tmp_path / "openspec" / "project.md").write_text("# Project\n")

        assert has_openspec(tmp_path) is False

    def test_archive_is_excluded(self, openspec_project: Path) -> None:
        result = parse_openspec(openspec_project)

        ids = [change.id for change in result.changes]
        assert "archive" not in ids
        assert "old-feature" not in ids
        assert ids == ["add-feature", "cleanup-docs"]

    def test_changes_sorted_by_id(self, tmp_path: Path) -> None:
        changes = make_layout(tmp_path)
        for name in ["zeta", "alpha", "mid"]:
            (changes / name).mkdir()

        result = parse_openspec(tmp_path)

        assert [c.id for c in result.changes] == ["alpha", "mid", "zeta"]

    def test_files_in_changes_dir_are_ignored(self, tmp_path: Path) -> None:
        changes = make_layout(tmp_path)
        (changes / "README.md").write_text("not a proposal")
        (changes / "real-change").mkdir()

        result = parse_openspec(tmp_path)

        assert [c.id for c in result.changes] == ["real-change"]

    @pytest.mark.skipif(
        os.name == "nt" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="permission bits are not enforced",
    )
    def test_unreadable_checklist_propagates(self, tmp_path: Path) -> None:
        changes = make_layout(tmp_path)
        change_dir = changes / "locked"
        change_dir.mkdir()
        tasks = change_dir / "tasks.md"
        tasks.write_text("- [x] a\n")
        tasks.chmod(0o000)
        try:
            with pytest.raises(OSError):
                parse_openspec(tmp_path)
        finally:
            tasks.chmod(0o644)


class TestSelectActiveChange:
    """Tests for select_active_change()."""

    def test_in_progress_wins_over_not_started(self) -> None:
        changes = [
            ChangeProposal(id="a-started", tasks_total=2, tasks_complete=1),
            ChangeProposal(id="b-new", tasks_total=1, tasks_complete=0),
        ]

        active = select_active_change(changes)

        assert active is not None
        assert active.id == "a-started"
        assert (active.tasks_complete, active.tasks_total) == (1, 2)

    def test_in_progress_found_after_other_entries(self) -> None:
        changes = [
            ChangeProposal(id="a-new", tasks_total=1, tasks_complete=0),
            ChangeProposal(id="b-done", tasks_total=2, tasks_complete=2),
            ChangeProposal(id="c-started", tasks_total=2, tasks_complete=1),
        ]

        active = select_active_change(changes)

        assert active is not None
        assert active.id == "c-started"

    def test_no_fallback_to_done_or_not_started(self) -> None:
        changes = [
            ChangeProposal(id="done", tasks_total=2, tasks_complete=2),
            ChangeProposal(id="new", tasks_total=3, tasks_complete=0),
            ChangeProposal(id="empty"),
        ]

        assert select_active_change(changes) is None

    def test_first_in_progress_is_selected(self) -> None:
        changes = [
            ChangeProposal(id="first", tasks_total=4, tasks_complete=1),
            ChangeProposal(id="second", tasks_total=4, tasks_complete=3),
        ]

        active = select_active_change(changes)

        assert active is not None
        assert active.id == "first"

    def test_empty_list(self) -> None:
        assert select_active_change([]) is None


class TestGetProgress:
    """Tests for get_progress()."""

    def test_active_change(self, openspec_project: Path) -> None:
        snapshot = get_progress(openspec_project)

        assert snapshot.source == ProgressSource.FROM_CHECKLIST
        assert snapshot.change == "add-feature"
        assert snapshot.tasks_done == 2
        assert snapshot.tasks_total == 4
        assert snapshot.percentage == 50

    def test_layout_without_active_change(self, tmp_path: Path) -> None:
        changes = make_layout(tmp_path)
        (changes / "done").mkdir()
        (changes / "done" / "tasks.md").write_text("- [x] a\n")

        snapshot = get_progress(tmp_path)

        assert snapshot.source == ProgressSource.FROM_CHECKLIST
        assert snapshot.change is None
        assert (snapshot.tasks_done, snapshot.tasks_total) == (0, 0)

    def test_no_layout_is_manual(self, tmp_path: Path) -> None:
        snapshot = get_progress(tmp_path)

        assert snapshot.source == ProgressSource.MANUAL
        assert snapshot.change is None
        assert (snapshot.tasks_done, snapshot.tasks_total) == (0, 0)


class TestProgressSnapshot:
    """Tests for the ProgressSnapshot model."""

    def test_percentage_rounds(self) -> None:
        snapshot = ProgressSnapshot(source=ProgressSource.FROM_CHECKLIST, tasks_done=2, tasks_total=3)
        assert snapshot.percentage == 67

    def test_percentage_zero_without_tasks(self) -> None:
        assert ProgressSnapshot(source=ProgressSource.MANUAL).percentage == 0

    def test_done_above_total_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ProgressSnapshot(source=ProgressSource.MANUAL, tasks_done=3, tasks_total=2)

    def test_source_serializes_as_string(self) -> None:
        snapshot = ProgressSnapshot(source=ProgressSource.FROM_CHECKLIST, change="x")
        assert snapshot.model_dump(mode="json")["source"] == "openspec"
