"""
Data models for the docs sync service.

Defines Pydantic models describing the outcome of one sync run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from docsync.core.tracker.models import DataSource


class DocumentState(str, Enum):
    """What happened to one target document."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    STALE = "stale"


class DocumentOutcome(BaseModel):
    name: str = Field(description="Document key in the config (progress, vision)")
    path: Path = Field(description="Absolute path of the document")
    state: DocumentState


class SyncResult(BaseModel):
    """
    Result of a sync run.

    Example:
        >>> result = service.run()
        >>> result.source
        <DataSource.BEADS: 'beads'>
        >>> [d.state for d in result.documents]
        [<DocumentState.UPDATED: 'updated'>, <DocumentState.UNCHANGED: 'unchanged'>]
    """

    source: DataSource = Field(description="Backend that served the issue data")
    fallback_reason: str | None = Field(
        default=None,
        description="Why the live beads CLI was skipped, if it was",
    )
    check_only: bool = Field(default=False, description="True when nothing was written")
    release_gate_id: str
    dependencies_total: int = 0
    dependencies_closed: int = 0
    dependencies_remaining: int = 0
    documents: list[DocumentOutcome] = Field(default_factory=list)

    @property
    def stale_documents(self) -> list[DocumentOutcome]:
        return [d for d in self.documents if d.state == DocumentState.STALE]

    @property
    def updated_documents(self) -> list[DocumentOutcome]:
        return [d for d in self.documents if d.state == DocumentState.UPDATED]
