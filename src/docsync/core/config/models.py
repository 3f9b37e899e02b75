"""
Configuration data models for docsync.

These models define the structure of .docsync.json and
~/.config/docsync/config.json, with validation via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from docsync.core.tracker.reader import SourceMode


class TrackerConfig(BaseModel):
    """
    Where issue data comes from.

    The live `bd` CLI is probed first; the snapshot is the fallback.
    """

    command: str = Field(default="bd", min_length=1, description="beads CLI executable")
    timeout_seconds: float | None = Field(
        default=60.0,
        ge=0.0,
        description="Seconds to wait for bd (0 or null waits forever)",
    )
    snapshot_path: str = Field(
        default=".beads/issues.jsonl",
        min_length=1,
        description="JSONL snapshot used when bd is unavailable (relative to project)",
    )
    source: SourceMode = Field(
        default=SourceMode.AUTO,
        description="auto (probe bd, fall back), beads (live only) or snapshot",
    )

    @property
    def effective_timeout(self) -> float | None:
        """Timeout to hand to subprocess; None means no limit."""
        if not self.timeout_seconds:
            return None
        return self.timeout_seconds


class TrackedIssueConfig(BaseModel):
    """One issue shown in the generated tables."""

    id: str = Field(..., min_length=1, description="beads issue id")
    progress_label: str = Field(..., description="Row label in the progress tracker")
    vision_label: str = Field(..., description="Row label in the vision document")


class TrackedIssuesConfig(BaseModel):
    """
    The three issues the docs report on.

    The release gate's dependencies drive the completion numbers.
    """

    foundation: TrackedIssueConfig = Field(
        default_factory=lambda: TrackedIssueConfig(
            id="haxe.rust-oo3",
            progress_label="Foundation milestone roadmap",
            vision_label="Milestone roadmap complete",
        )
    )
    harness: TrackedIssueConfig = Field(
        default_factory=lambda: TrackedIssueConfig(
            id="haxe.rust-cu0",
            progress_label="Advanced TUI stress harness",
            vision_label="Real-app harness complete",
        )
    )
    release_gate: TrackedIssueConfig = Field(
        default_factory=lambda: TrackedIssueConfig(
            id="haxe.rust-4jb",
            progress_label="1.0 release gate",
            vision_label="1.0 parity gate",
        )
    )


class DocumentConfig(BaseModel):
    """A target document and the markers around its generated region."""

    path: str = Field(..., min_length=1, description="Document path (relative to project)")
    start_marker: str = Field(..., min_length=1)
    end_marker: str = Field(..., min_length=1)

    @model_validator(mode="after")
    def _markers_differ(self) -> "DocumentConfig":
        if self.start_marker == self.end_marker:
            raise ValueError("start_marker and end_marker must differ")
        return self


class DocumentsConfig(BaseModel):
    progress: DocumentConfig = Field(
        default_factory=lambda: DocumentConfig(
            path="docs/progress-tracker.md",
            start_marker="<!-- GENERATED:beads-progress:start -->",
            end_marker="<!-- GENERATED:beads-progress:end -->",
        )
    )
    vision: DocumentConfig = Field(
        default_factory=lambda: DocumentConfig(
            path="docs/vision-vs-implementation.md",
            start_marker="<!-- GENERATED:vision-status:start -->",
            end_marker="<!-- GENERATED:vision-status:end -->",
        )
    )


class DocSyncConfig(BaseModel):
    """
    Complete docsync configuration.

    Example:
        >>> config = DocSyncConfig()
        >>> config.tracker.command
        'bd'
        >>> config.documents.progress.path
        'docs/progress-tracker.md'
    """

    model_config = ConfigDict(extra="ignore")

    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    issues: TrackedIssuesConfig = Field(default_factory=TrackedIssuesConfig)
    documents: DocumentsConfig = Field(default_factory=DocumentsConfig)
    generator_command: str = Field(
        default="docsync sync",
        description="Command named in the generated banner line",
    )

    @field_validator("generator_command")
    @classmethod
    def _strip_command(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("generator_command cannot be empty")
        return v
