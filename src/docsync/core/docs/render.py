"""
Markdown fragments for the generated doc regions.

Everything here is a pure function of its inputs: the same RenderContext
always yields byte-identical text, which is what lets the patcher skip
writes when nothing changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from docsync.core.tracker.models import UNKNOWN_STATUS, Issue, IssueStatus

from .aggregate import DependencySummary

STATUS_LABELS = {
    IssueStatus.CLOSED.value: "closed",
    IssueStatus.IN_PROGRESS.value: "in progress",
    IssueStatus.OPEN.value: "open",
    IssueStatus.BLOCKED.value: "blocked",
    IssueStatus.DEFERRED.value: "deferred",
}


@dataclass(frozen=True)
class TrackedIssue:
    """An issue plus the labels it is shown under in each document."""

    issue: Issue
    progress_label: str
    vision_label: str


@dataclass(frozen=True)
class RenderContext:
    generated_on: date
    foundation: TrackedIssue
    harness: TrackedIssue
    release_gate: TrackedIssue
    summary: DependencySummary
    generator_command: str = "docsync sync"


def status_label(status: str | None) -> str:
    if not status:
        return UNKNOWN_STATUS
    return STATUS_LABELS.get(status, status)


def escape_cell(text: str) -> str:
    """Make text safe inside a Markdown table cell."""
    return text.replace("|", "\\|").replace("\n", " ")


def _banner(ctx: RenderContext) -> str:
    return (
        f"_Generated from Beads on {ctx.generated_on.isoformat()} "
        f"via `{ctx.generator_command}`._"
    )


def _tracked_rows(ctx: RenderContext, label_attr: str) -> list[str]:
    rows = []
    for tracked in (ctx.foundation, ctx.harness, ctx.release_gate):
        label = escape_cell(getattr(tracked, label_attr))
        rows.append(f"| {label} | `{tracked.issue.id}` | {status_label(tracked.issue.status)} |")
    return rows


def build_progress_block(ctx: RenderContext) -> str:
    """
    Render the progress-tracker fragment.

    Contains the workstream table, release-gate completion, and a table of
    dependencies that are still open (omitted when none remain).
    """
    counts = ctx.summary.counts
    remaining = ctx.summary.remaining

    lines = [_banner(ctx), "", "| Workstream | Bead | Status |", "| --- | --- | --- |"]
    lines.extend(_tracked_rows(ctx, "progress_label"))
    lines.append("")
    lines.append(
        f"- Release-gate dependency completion: "
        f"**{counts.closed} / {counts.total} closed ({ctx.summary.completion})**"
    )
    lines.append(f"- Remaining release-gate dependencies: **{len(remaining)}**")

    if remaining:
        lines.append("")
        lines.append("| Remaining dependency | Priority | Status |")
        lines.append("| --- | --- | --- |")
        for dep in remaining:
            title = escape_cell(dep.title if dep.title is not None else dep.id)
            lines.append(
                f"| `{dep.id}` {title} | {dep.priority_label} | {status_label(dep.status)} |"
            )

    return "\n".join(lines)


def build_vision_block(ctx: RenderContext) -> str:
    """Render the vision-vs-implementation fragment."""
    counts = ctx.summary.counts

    lines = [_banner(ctx), "", "| Vision checkpoint | Source | Status |", "| --- | --- | --- |"]
    lines.extend(_tracked_rows(ctx, "vision_label"))
    lines.append("")
    lines.append(
        f"- 1.0 parity dependencies closed: "
        f"**{counts.closed} / {counts.total} ({ctx.summary.completion})**"
    )
    lines.append(f"- 1.0 parity dependencies still open: **{len(ctx.summary.remaining)}**")

    return "\n".join(lines)
