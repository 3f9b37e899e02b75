"""
Pytest configuration and shared fixtures.

Provides fixtures for temp project checkouts (docs with generated markers and
a beads snapshot), sample issue data, and mock `bd` CLI responses.
"""

import json
import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import Mock

import pytest

from docsync.core.config.models import DocSyncConfig

# ==============================================================================
# Sample Data
# ==============================================================================

FOUNDATION_ID = "haxe.rust-oo3"
HARNESS_ID = "haxe.rust-cu0"
GATE_ID = "haxe.rust-4jb"

PROGRESS_START = "<!-- GENERATED:beads-progress:start -->"
PROGRESS_END = "<!-- GENERATED:beads-progress:end -->"
VISION_START = "<!-- GENERATED:vision-status:start -->"
VISION_END = "<!-- GENERATED:vision-status:end -->"


def write_jsonl(path: Path, records: list[dict[str, Any]]) -> Path:
    """Write records as a beads-style JSONL snapshot."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(json.dumps(record) + "\n" for record in records), encoding="utf-8")
    return path


def bd_result(payload: Any, returncode: int = 0, stderr: str = "") -> Mock:
    """Build a fake CompletedProcess for `bd show --json`."""
    result = Mock()
    result.stdout = payload if isinstance(payload, str) else json.dumps(payload)
    result.stderr = stderr
    result.returncode = returncode
    return result


@pytest.fixture
def snapshot_records() -> list[dict[str, Any]]:
    """Issues as exported to .beads/issues.jsonl (dependencies unexpanded)."""
    return [
        {"id": FOUNDATION_ID, "title": "Foundation roadmap", "status": "closed", "priority": 1},
        {"id": HARNESS_ID, "title": "TUI stress harness", "status": "in_progress", "priority": 1},
        {
            "id": GATE_ID,
            "title": "1.0 release gate",
            "status": "open",
            "priority": 0,
            "dependencies": [
                {"issue_id": GATE_ID, "depends_on_id": "haxe.rust-a1", "type": "blocks"},
                {"issue_id": GATE_ID, "depends_on_id": "haxe.rust-b2", "type": "blocks"},
                {"issue_id": GATE_ID, "depends_on_id": "haxe.rust-zz", "type": "blocks"},
            ],
        },
        {"id": "haxe.rust-a1", "title": "Parser parity", "status": "closed", "priority": 2},
        {"id": "haxe.rust-b2", "title": "Async runtime", "status": "open", "priority": 1},
    ]


@pytest.fixture
def bd_show_payloads() -> dict[str, list[dict[str, Any]]]:
    """`bd show <id> --json` output per issue id (dependencies expanded)."""
    return {
        FOUNDATION_ID: [{"id": FOUNDATION_ID, "title": "Foundation roadmap", "status": "closed"}],
        HARNESS_ID: [{"id": HARNESS_ID, "title": "TUI stress harness", "status": "open"}],
        GATE_ID: [
            {
                "id": GATE_ID,
                "title": "1.0 release gate",
                "status": "open",
                "dependencies": [
                    {
                        "id": "haxe.rust-a1",
                        "title": "Parser parity",
                        "status": "closed",
                        "priority": 2,
                        "dependency_type": "blocks",
                    },
                    {
                        "id": "haxe.rust-b2",
                        "title": "Async runtime",
                        "status": "blocked",
                        "priority": 1,
                        "dependency_type": "blocks",
                    },
                ],
            }
        ],
    }


# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DOCSYNC_* vars and user config out of tests."""
    for var in (
        "DOCSYNC_SOURCE",
        "DOCSYNC_TRACKER_COMMAND",
        "DOCSYNC_TRACKER_TIMEOUT",
        "DOCSYNC_SNAPSHOT",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def project_dir(tmp_path: Path, snapshot_records: list[dict[str, Any]]) -> Path:
    """
    Provide a temporary repository checkout.

    Creates:
    - .beads/issues.jsonl
    - docs/progress-tracker.md and docs/vision-vs-implementation.md with markers
    """
    project = tmp_path / "project"
    project.mkdir()

    write_jsonl(project / ".beads" / "issues.jsonl", snapshot_records)

    docs = project / "docs"
    docs.mkdir()
    (docs / "progress-tracker.md").write_text(
        f"# Progress\n\nHand-written intro.\n\n{PROGRESS_START}\nold\n{PROGRESS_END}\n\nOutro.\n",
        encoding="utf-8",
    )
    (docs / "vision-vs-implementation.md").write_text(
        f"# Vision\n\n{VISION_START}\n{VISION_END}\n",
        encoding="utf-8",
    )
    return project


@pytest.fixture
def config() -> DocSyncConfig:
    """Default configuration (haxe.rust issue ids, markers and doc paths)."""
    return DocSyncConfig()


# ==============================================================================
# Mock Fixtures
# ==============================================================================


@pytest.fixture
def bd_missing(monkeypatch: pytest.MonkeyPatch) -> list[list[str]]:
    """Make every `bd` invocation fail as if the CLI were not installed."""
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], **kwargs: Any) -> Mock:
        calls.append(cmd)
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


@pytest.fixture
def bd_available(
    monkeypatch: pytest.MonkeyPatch, bd_show_payloads: dict[str, list[dict[str, Any]]]
) -> list[list[str]]:
    """Answer `bd show <id> --json` from bd_show_payloads; unknown ids return []."""
    calls: list[list[str]] = []

    def fake_run(cmd: list[str], **kwargs: Any) -> Mock:
        calls.append(cmd)
        return bd_result(bd_show_payloads.get(cmd[2], []))

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls
