"""
Docs sync service.

Refreshes the generated regions of the progress tracker and the vision
document from beads in one run:

1. pin the data source by probing the first tracked issue
2. resolve the foundation, harness and release-gate issues
3. summarize the release gate's dependencies
4. render both fragments and patch each document in turn

Documents are patched sequentially. If a later document fails, earlier ones
stay patched and the error propagates to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path

from docsync.core.config.models import DocSyncConfig, DocumentConfig, TrackedIssueConfig
from docsync.core.docs.aggregate import summarize
from docsync.core.docs.patcher import patch_document
from docsync.core.docs.render import (
    RenderContext,
    TrackedIssue,
    build_progress_block,
    build_vision_block,
)
from docsync.core.sync.models import DocumentOutcome, DocumentState, SyncResult
from docsync.core.tracker.beads import BeadsCli
from docsync.core.tracker.reader import IssueReader
from docsync.core.tracker.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class DocSyncService:
    """
    Service that keeps generated doc sections in step with beads.

    Example:
        >>> service = DocSyncService(load_config(), project_dir=Path("."))
        >>> result = service.run()
        >>> result.source.value
        'beads'
    """

    def __init__(
        self,
        config: DocSyncConfig,
        project_dir: Path | None = None,
        reader: IssueReader | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        Initialize the sync service.

        Args:
            config: Loaded docsync configuration
            project_dir: Repository root; relative config paths resolve here.
                        Defaults to current working directory.
            reader: Issue reader to use; built from config when omitted
            today: Clock for the "Generated on" banner
        """
        self.config = config
        self.project_dir = (project_dir or Path.cwd()).resolve()
        self.reader = reader or self._build_reader()
        self.today = today

    def _build_reader(self) -> IssueReader:
        tracker = self.config.tracker
        beads = BeadsCli(
            project_dir=self.project_dir,
            command=tracker.command,
            timeout=tracker.effective_timeout,
        )
        snapshot = SnapshotStore(self.project_dir / tracker.snapshot_path)
        return IssueReader(beads, snapshot, mode=tracker.source)

    def _resolve_tracked(self, tracked: TrackedIssueConfig) -> TrackedIssue:
        issue = self.reader.resolve(tracked.id)
        return TrackedIssue(
            issue=issue,
            progress_label=tracked.progress_label,
            vision_label=tracked.vision_label,
        )

    def _patch(
        self, name: str, document: DocumentConfig, content: str, check: bool
    ) -> DocumentOutcome:
        path = self.project_dir / document.path
        result = patch_document(
            path, document.start_marker, document.end_marker, content, dry_run=check
        )
        if result.written:
            state = DocumentState.UPDATED
        elif result.changed:
            state = DocumentState.STALE
        else:
            state = DocumentState.UNCHANGED
        return DocumentOutcome(name=name, path=path, state=state)

    def build_context(self) -> RenderContext:
        """
        Resolve the tracked issues and aggregate the release gate.

        Raises:
            IssueNotFoundError, MalformedDataError, SnapshotUnavailableError,
            ToolUnavailableError: If any tracked issue cannot be resolved
        """
        issues = self.config.issues
        self.reader.select_source(issues.foundation.id)

        foundation = self._resolve_tracked(issues.foundation)
        harness = self._resolve_tracked(issues.harness)
        release_gate = self._resolve_tracked(issues.release_gate)

        return RenderContext(
            generated_on=self.today(),
            foundation=foundation,
            harness=harness,
            release_gate=release_gate,
            summary=summarize(release_gate.issue),
            generator_command=self.config.generator_command,
        )

    def run(self, check: bool = False) -> SyncResult:
        """
        Run one sync.

        Args:
            check: Only report stale documents; never write

        Returns:
            SyncResult with the data source and per-document outcome

        Raises:
            DocSyncError: On any unrecoverable tracker or marker failure
            OSError: If a document cannot be read or written
        """
        ctx = self.build_context()
        # already pinned by build_context; this does not probe again
        selection = self.reader.select_source(self.config.issues.foundation.id)

        documents = self.config.documents
        outcomes = [
            self._patch("progress", documents.progress, build_progress_block(ctx), check),
            self._patch("vision", documents.vision, build_vision_block(ctx), check),
        ]

        counts = ctx.summary.counts
        logger.info(
            "Synced docs from %s: %d/%d release-gate dependencies closed",
            selection.source.value,
            counts.closed,
            counts.total,
        )

        return SyncResult(
            source=selection.source,
            fallback_reason=selection.fallback_reason,
            check_only=check,
            release_gate_id=ctx.release_gate.issue.id,
            dependencies_total=counts.total,
            dependencies_closed=counts.closed,
            dependencies_remaining=len(ctx.summary.remaining),
            documents=outcomes,
        )
