"""
Dual-source issue reader.

The first issue requested in a run is used as a probe against the live `bd`
CLI. The probe answers with a tagged result, Resolved or Unavailable, and the
reader pins the matching source for the rest of the run. Later lookups never
re-probe, so a run is served entirely by one source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .beads import BeadsCli
from .errors import IssueNotFoundError, MalformedDataError, ToolUnavailableError
from .models import DataSource, Issue
from .snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class SourceMode(str, Enum):
    """How the reader picks its source."""

    AUTO = "auto"
    BEADS = "beads"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class Resolved:
    """Probe succeeded: the live source answered with an issue."""

    source: DataSource
    issue: Issue


@dataclass(frozen=True)
class Unavailable:
    """Probe failed: the live source could not answer."""

    reason: str


ProbeResult = Resolved | Unavailable


@dataclass(frozen=True)
class SourceSelection:
    """The source pinned for a run, and why the live source was skipped."""

    source: DataSource
    probe_issue_id: str | None = None
    fallback_reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None


class IssueReader:
    """
    Resolve issues from beads, falling back to the JSONL snapshot.

    Example:
        >>> reader = IssueReader(BeadsCli(), SnapshotStore(Path(".beads/issues.jsonl")))
        >>> gate = reader.resolve("bd-1")  # probes bd, pins the source
        >>> reader.selection.source
        <DataSource.SNAPSHOT: 'snapshot'>
    """

    def __init__(
        self,
        beads: BeadsCli,
        snapshot: SnapshotStore,
        mode: SourceMode = SourceMode.AUTO,
    ):
        self.beads = beads
        self.snapshot = snapshot
        self.mode = mode
        self._selection: SourceSelection | None = None
        self._probed: Issue | None = None

    @property
    def selection(self) -> SourceSelection | None:
        """The pinned source, or None before the first lookup."""
        return self._selection

    def probe(self, issue_id: str) -> ProbeResult:
        """
        Ask the live source for one issue without pinning anything.

        Every failure of the live source, including "not found", is folded
        into Unavailable.
        """
        try:
            issue = self.beads.show(issue_id)
        except (ToolUnavailableError, MalformedDataError, IssueNotFoundError) as e:
            return Unavailable(reason=str(e))
        return Resolved(source=DataSource.BEADS, issue=issue)

    def select_source(self, probe_issue_id: str) -> SourceSelection:
        """
        Pin the source for this run. Idempotent: the first call wins.

        Raises:
            ToolUnavailableError: If mode is BEADS and the probe failed
        """
        if self._selection is not None:
            return self._selection

        if self.mode == SourceMode.SNAPSHOT:
            self._selection = SourceSelection(source=DataSource.SNAPSHOT)
            logger.info("Using snapshot %s (forced)", self.snapshot.path)
            return self._selection

        result = self.probe(probe_issue_id)
        if isinstance(result, Resolved):
            self._probed = result.issue
            self._selection = SourceSelection(source=result.source, probe_issue_id=probe_issue_id)
            logger.info("Using live beads data (probe %s)", probe_issue_id)
        elif self.mode == SourceMode.BEADS:
            raise ToolUnavailableError(result.reason)
        else:
            self._selection = SourceSelection(
                source=DataSource.SNAPSHOT,
                probe_issue_id=probe_issue_id,
                fallback_reason=result.reason,
            )
            logger.warning(
                "beads CLI unavailable, falling back to snapshot %s: %s",
                self.snapshot.path,
                result.reason,
            )
        return self._selection

    def resolve(self, issue_id: str) -> Issue:
        """
        Resolve one issue from the pinned source.

        The first call pins the source using issue_id as the probe.

        Raises:
            IssueNotFoundError: If the id is absent from the pinned source
            MalformedDataError: If the pinned source's data cannot be parsed
            ToolUnavailableError: If bd fails after being pinned as the source
            SnapshotUnavailableError: If the snapshot cannot be read
        """
        selection = self.select_source(issue_id)

        if selection.source == DataSource.BEADS:
            if self._probed is not None and self._probed.id == issue_id:
                return self._probed
            return self.beads.show(issue_id)
        return self.snapshot.resolve(issue_id)
