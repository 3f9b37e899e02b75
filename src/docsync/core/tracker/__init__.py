"""
Issue tracker access for docsync.

Provides the Issue/Dependency models, the live beads CLI client, the JSONL
snapshot store, and the IssueReader that chooses between them.
"""

from .beads import BeadsCli
from .errors import (
    DocSyncError,
    IssueNotFoundError,
    MalformedDataError,
    SnapshotUnavailableError,
    ToolUnavailableError,
)
from .models import DataSource, Dependency, Issue, IssueStatus
from .reader import IssueReader, Resolved, SourceMode, SourceSelection, Unavailable
from .snapshot import DEFAULT_SNAPSHOT_PATH, SnapshotStore

__all__ = [
    # Models
    "Issue",
    "Dependency",
    "IssueStatus",
    "DataSource",
    # Sources
    "BeadsCli",
    "SnapshotStore",
    "DEFAULT_SNAPSHOT_PATH",
    "IssueReader",
    "SourceMode",
    "SourceSelection",
    "Resolved",
    "Unavailable",
    # Errors
    "DocSyncError",
    "ToolUnavailableError",
    "MalformedDataError",
    "IssueNotFoundError",
    "SnapshotUnavailableError",
]
