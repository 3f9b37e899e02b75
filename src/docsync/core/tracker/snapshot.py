"""
Read-only access to the beads JSONL snapshot (.beads/issues.jsonl).

The snapshot is the local export beads keeps next to its database: one JSON
object per line. It is used when the `bd` CLI cannot answer. The file is
parsed once per SnapshotStore and indexed by issue id; callers pass the store
around explicitly, so each run (or test) gets a fresh cache.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .errors import IssueNotFoundError, MalformedDataError, SnapshotUnavailableError
from .models import DataSource, Issue

logger = logging.getLogger(__name__)

DEFAULT_SNAPSHOT_PATH = Path(".beads") / "issues.jsonl"


class SnapshotStore:
    """
    Lazily loaded, id-indexed view of a beads JSONL snapshot.

    File format:
        {"id": "bd-1", "title": "Gate", "status": "open",
         "dependencies": [{"issue_id": "bd-1", "depends_on_id": "bd-2", "type": "blocks"}]}
        {"id": "bd-2", "title": "Parser", "status": "closed"}

    Example:
        >>> store = SnapshotStore(Path(".beads/issues.jsonl"))
        >>> gate = store.resolve("bd-1")
        >>> gate.dependencies[0].status
        'closed'
    """

    def __init__(self, path: Path):
        self.path = path
        self._index: dict[str, Issue] | None = None

    @property
    def is_loaded(self) -> bool:
        return self._index is not None

    def _load(self) -> dict[str, Issue]:
        """
        Parse the snapshot file into an id -> Issue mapping.

        Blank lines are skipped. When an id appears on several lines the
        last one wins, since the export is append-only.

        Raises:
            SnapshotUnavailableError: If the file cannot be read
            MalformedDataError: If any line is not a valid issue object
        """
        index: dict[str, Issue] = {}
        try:
            with open(self.path, "rb") as f:
                for line_num, raw_line in enumerate(f, start=1):
                    try:
                        line = raw_line.decode("utf-8").strip()
                    except UnicodeDecodeError as e:
                        raise MalformedDataError(
                            f"not valid UTF-8 - {e.reason} at byte {e.start}",
                            path=self.path,
                            line_num=line_num,
                        ) from e
                    if not line:
                        continue
                    try:
                        raw = json.loads(line)
                    except json.JSONDecodeError as e:
                        raise MalformedDataError(
                            f"invalid JSON - {e}", path=self.path, line_num=line_num
                        ) from e
                    if not isinstance(raw, dict):
                        type_name = type(raw).__name__
                        raise MalformedDataError(
                            f"expected JSON object, got {type_name}",
                            path=self.path,
                            line_num=line_num,
                        )
                    try:
                        issue = Issue.model_validate(raw)
                    except ValidationError as e:
                        raise MalformedDataError(
                            f"invalid issue record - {e.errors()[0]['msg']}",
                            path=self.path,
                            line_num=line_num,
                        ) from e
                    index[issue.id] = issue
        except FileNotFoundError as e:
            raise SnapshotUnavailableError(self.path, "file not found") from e
        except OSError as e:
            raise SnapshotUnavailableError(self.path, str(e)) from e

        logger.debug("Loaded %d issues from snapshot %s", len(index), self.path)
        return index

    @property
    def issues(self) -> dict[str, Issue]:
        """All snapshot issues by id, loading the file on first access."""
        if self._index is None:
            self._index = self._load()
        return self._index

    def get(self, issue_id: str) -> Issue | None:
        """Get the raw (unexpanded) issue, or None when absent."""
        return self.issues.get(issue_id)

    def resolve(self, issue_id: str) -> Issue:
        """
        Get an issue with its dependencies expanded against the snapshot.

        Dependencies whose target is not in the snapshot degrade to
        title = raw id and status = "unknown".

        Raises:
            IssueNotFoundError: If issue_id is not in the snapshot
            MalformedDataError: If the snapshot cannot be parsed
            SnapshotUnavailableError: If the snapshot cannot be read
        """
        issue = self.get(issue_id)
        if issue is None:
            raise IssueNotFoundError(issue_id, f"{DataSource.SNAPSHOT.value} {self.path}")

        expanded = [dep.resolved_against(self.get(dep.id)) for dep in issue.dependencies]
        missing = [dep.id for dep in issue.dependencies if dep.id not in self.issues]
        if missing:
            logger.debug(
                "Issue %s references ids outside the snapshot: %s", issue_id, ", ".join(missing)
            )
        return issue.model_copy(update={"dependencies": expanded})
