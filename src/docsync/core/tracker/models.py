"""
Issue data models for docsync.

Defines the Issue and Dependency models that represent beads issues, whether
they come from `bd show --json` or from the `.beads/issues.jsonl` snapshot.
Both are frozen: the sync engine treats tracker data as read-only for the
duration of a run.
"""

from __future__ import annotations

from enum import Enum

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

UNKNOWN_STATUS = "unknown"


def _coerce_priority(value: Any) -> int | None:
    # beads emits 0-4 ints; anything else renders as n/a
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class IssueStatus(str, Enum):
    """Issue status values known to beads.

    Statuses outside this set are preserved verbatim on the Issue model.
    """

    CLOSED = "closed"
    IN_PROGRESS = "in_progress"
    OPEN = "open"
    BLOCKED = "blocked"
    DEFERRED = "deferred"


class DataSource(str, Enum):
    """Where the issue data for a run came from."""

    BEADS = "beads"
    SNAPSHOT = "snapshot"


class Dependency(BaseModel):
    """
    A directed edge from an issue to another issue it depends on.

    `bd show --json` emits dependencies already expanded (with title, status
    and priority of the target). Snapshot lines only carry `depends_on_id`
    and `type`, so title and status stay None until the reader expands them.

    Example:
        >>> dep = Dependency.model_validate({"depends_on_id": "bd-2", "type": "blocks"})
        >>> dep.id, dep.dependency_type, dep.status
        ('bd-2', 'blocks', None)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("depends_on_id", "id"),
        description="ID of the issue depended on",
    )
    dependency_type: str = Field(
        default="blocks",
        validation_alias=AliasChoices("dependency_type", "type"),
        description="Kind of dependency edge (blocks, parent-child, ...)",
    )
    title: str | None = Field(default=None, description="Title of the target issue")
    status: str | None = Field(default=None, description="Status of the target issue")
    priority: int | None = Field(default=None, description="Priority of the target issue (0-4)")

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, v: Any) -> int | None:
        return _coerce_priority(v)

    @field_validator("status", mode="before")
    @classmethod
    def _validate_status(cls, v: Any) -> str | None:
        return v or None

    @property
    def is_closed(self) -> bool:
        return self.status == IssueStatus.CLOSED.value

    @property
    def priority_label(self) -> str:
        """Priority as shown in docs: P0-P4, or n/a when unknown."""
        if self.priority is None:
            return "n/a"
        return f"P{self.priority}"

    def resolved_against(self, target: Issue | None) -> Dependency:
        """
        Return a copy of this dependency filled in from its target issue.

        A missing target degrades to title = raw id and status = "unknown"
        instead of failing.
        """
        if target is None:
            return self.model_copy(
                update={"title": self.id, "status": UNKNOWN_STATUS, "priority": None}
            )
        return self.model_copy(
            update={"title": target.title, "status": target.status, "priority": target.priority}
        )

    def with_defaults(self) -> Dependency:
        """Fill in title and status when the tracker omitted them."""
        if self.title is not None and self.status:
            return self
        return self.model_copy(
            update={
                "title": self.title if self.title is not None else self.id,
                "status": self.status or UNKNOWN_STATUS,
            }
        )


class Issue(BaseModel):
    """
    A beads issue as seen by the sync engine.

    Example:
        >>> issue = Issue(id="bd-1", title="Release gate", status="open")
        >>> issue.dependencies
        []
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Unique issue identifier")
    title: str = Field(..., description="Issue title")
    status: str = Field(default=UNKNOWN_STATUS, description="Issue status (verbatim)")
    priority: int | None = Field(default=None, description="Priority (0 = highest)")
    dependencies: list[Dependency] = Field(
        default_factory=list, description="Dependencies in tracker order"
    )

    @field_validator("status", mode="before")
    @classmethod
    def _validate_status(cls, v: Any) -> Any:
        return v or UNKNOWN_STATUS

    @field_validator("priority", mode="before")
    @classmethod
    def _validate_priority(cls, v: Any) -> int | None:
        return _coerce_priority(v)

    @field_validator("dependencies", mode="before")
    @classmethod
    def _validate_dependencies(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_closed(self) -> bool:
        return self.status == IssueStatus.CLOSED.value
