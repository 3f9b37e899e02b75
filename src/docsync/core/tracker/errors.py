"""
Error taxonomy for reading issues from beads.

Only ToolUnavailableError is recovered locally (by falling back to the
snapshot during the source probe). Everything else aborts the sync run.
"""

from pathlib import Path


class DocSyncError(Exception):
    """Base class for all docsync failures."""

    pass


class ToolUnavailableError(DocSyncError):
    """Raised when the beads CLI cannot be run or gives no usable answer."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class MalformedDataError(DocSyncError):
    """Raised when a tracker source exists but its data cannot be parsed."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        line_num: int | None = None,
    ):
        self.path = path
        self.line_num = line_num
        if path is not None and line_num is not None:
            message = f"{path}:{line_num}: {message}"
        elif path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class IssueNotFoundError(DocSyncError):
    """Raised when an issue id is absent from the active source."""

    def __init__(self, issue_id: str, source: str):
        self.issue_id = issue_id
        self.source = source
        super().__init__(f"Issue not found in {source}: {issue_id}")


class SnapshotUnavailableError(DocSyncError):
    """Raised when the fallback snapshot file is missing or unreadable."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Snapshot {path} is unavailable: {reason}")
