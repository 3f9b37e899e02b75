"""
Tests for the end-to-end docs sync service.

Runs DocSyncService against a temp checkout with mocked `bd` output or a
snapshot fallback.
"""

from datetime import date
from pathlib import Path

import pytest
from conftest import GATE_ID, PROGRESS_END, PROGRESS_START, VISION_END, VISION_START

from docsync.core.config.models import DocSyncConfig
from docsync.core.docs.patcher import MarkerNotFoundError
from docsync.core.sync import DocSyncService, DocumentState
from docsync.core.tracker.errors import IssueNotFoundError, MalformedDataError
from docsync.core.tracker.models import DataSource


def make_service(project_dir: Path, config: DocSyncConfig) -> DocSyncService:
    return DocSyncService(config, project_dir=project_dir, today=lambda: date(2026, 1, 2))


def region(text: str, start: str, end: str) -> str:
    return text[text.index(start) + len(start) : text.index(end)]


class TestRunWithLiveBeads:
    """Test a run served by the bd CLI."""

    def test_updates_both_documents(self, project_dir: Path, config, bd_available):
        """Test that both regions are rewritten from bd data."""
        result = make_service(project_dir, config).run()

        assert result.source == DataSource.BEADS
        assert result.fallback_reason is None
        assert [d.state for d in result.documents] == [DocumentState.UPDATED] * 2
        assert result.release_gate_id == GATE_ID
        assert (result.dependencies_closed, result.dependencies_total) == (1, 2)

        progress = (project_dir / "docs" / "progress-tracker.md").read_text(encoding="utf-8")
        assert progress.startswith("# Progress\n\nHand-written intro.\n\n")
        assert progress.endswith(f"{PROGRESS_END}\n\nOutro.\n")
        body = region(progress, PROGRESS_START, PROGRESS_END)
        assert "_Generated from Beads on 2026-01-02 via `docsync sync`._" in body
        assert "| Foundation milestone roadmap | `haxe.rust-oo3` | closed |" in body
        assert "| `haxe.rust-b2` Async runtime | P1 | blocked |" in body

        vision = (project_dir / "docs" / "vision-vs-implementation.md").read_text(
            encoding="utf-8"
        )
        assert "- 1.0 parity dependencies closed: **1 / 2 (50%)**" in vision

    def test_second_run_writes_nothing(self, project_dir: Path, config, bd_available):
        """Test that re-running with unchanged tracker data is a no-op."""
        service = make_service(project_dir, config)
        service.run()
        before = {p: p.read_bytes() for p in (project_dir / "docs").iterdir()}

        result = make_service(project_dir, config).run()

        assert [d.state for d in result.documents] == [DocumentState.UNCHANGED] * 2
        assert {p: p.read_bytes() for p in (project_dir / "docs").iterdir()} == before


class TestRunWithFallback:
    """Test a run served by the snapshot."""

    def test_uses_snapshot_and_reports_reason(self, project_dir: Path, config, bd_missing):
        """Test that a missing bd switches the whole run to the snapshot."""
        result = make_service(project_dir, config).run()

        assert result.source == DataSource.SNAPSHOT
        assert "not installed" in result.fallback_reason
        assert len(bd_missing) == 1
        assert (result.dependencies_closed, result.dependencies_total) == (1, 3)
        assert result.dependencies_remaining == 2

        progress = (project_dir / "docs" / "progress-tracker.md").read_text(encoding="utf-8")
        assert "| `haxe.rust-zz` haxe.rust-zz | n/a | unknown |" in progress
        assert "| Advanced TUI stress harness | `haxe.rust-cu0` | in progress |" in progress

    def test_malformed_snapshot_aborts(self, project_dir: Path, config, bd_missing):
        """Test that a corrupt snapshot fails the run without touching docs."""
        snapshot = project_dir / ".beads" / "issues.jsonl"
        snapshot.write_text(snapshot.read_text(encoding="utf-8") + "{ broken\n", encoding="utf-8")
        before = (project_dir / "docs" / "progress-tracker.md").read_bytes()

        with pytest.raises(MalformedDataError) as exc_info:
            make_service(project_dir, config).run()

        assert exc_info.value.line_num == 6
        assert (project_dir / "docs" / "progress-tracker.md").read_bytes() == before

    def test_missing_required_issue_aborts(self, project_dir: Path, bd_missing):
        """Test that an unresolvable tracked issue fails the run."""
        config = DocSyncConfig.model_validate(
            {"issues": {"harness": {"id": "nope", "progress_label": "x", "vision_label": "y"}}}
        )
        with pytest.raises(IssueNotFoundError):
            make_service(project_dir, config).run()


class TestRunFailures:
    """Test document-level failures."""

    def test_second_document_failure_keeps_first(self, project_dir: Path, config, bd_available):
        """Test that documents are patched in order and not rolled back."""
        (project_dir / "docs" / "vision-vs-implementation.md").write_text(
            f"# Vision\n\n{VISION_START}\n", encoding="utf-8"
        )

        with pytest.raises(MarkerNotFoundError) as exc_info:
            make_service(project_dir, config).run()

        assert VISION_END in str(exc_info.value)
        progress = (project_dir / "docs" / "progress-tracker.md").read_text(encoding="utf-8")
        assert "old" not in region(progress, PROGRESS_START, PROGRESS_END)

    def test_check_mode_never_writes(self, project_dir: Path, config, bd_available):
        """Test that check mode reports stale documents without writing."""
        before = (project_dir / "docs" / "progress-tracker.md").read_bytes()

        result = make_service(project_dir, config).run(check=True)

        assert result.check_only
        assert [d.name for d in result.stale_documents] == ["progress", "vision"]
        assert result.updated_documents == []
        assert (project_dir / "docs" / "progress-tracker.md").read_bytes() == before


class TestConfiguredPaths:
    """Test that config drives documents and markers."""

    def test_custom_document_and_markers(self, project_dir: Path, bd_available):
        """Test a project with its own doc paths and markers."""
        (project_dir / "STATUS.md").write_text("[[p]]\n[[/p]]\n", encoding="utf-8")
        (project_dir / "VISION.md").write_text("[[v]][[/v]]", encoding="utf-8")
        config = DocSyncConfig.model_validate(
            {
                "documents": {
                    "progress": {"path": "STATUS.md", "start_marker": "[[p]]", "end_marker": "[[/p]]"},
                    "vision": {"path": "VISION.md", "start_marker": "[[v]]", "end_marker": "[[/v]]"},
                },
                "generator_command": "make status",
            }
        )

        result = make_service(project_dir, config).run()

        assert [d.path.name for d in result.updated_documents] == ["STATUS.md", "VISION.md"]
        assert "via `make status`" in (project_dir / "VISION.md").read_text(encoding="utf-8")
