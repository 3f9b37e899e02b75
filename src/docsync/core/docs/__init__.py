"""
Dependency aggregation, Markdown rendering and generated-region patching.
"""

from .aggregate import DependencySummary, StatusCounts, completion_percent, summarize
from .patcher import MarkerNotFoundError, PatchResult, patch_document, replace_generated_section
from .render import (
    RenderContext,
    TrackedIssue,
    build_progress_block,
    build_vision_block,
    status_label,
)

__all__ = [
    "DependencySummary",
    "StatusCounts",
    "summarize",
    "completion_percent",
    "RenderContext",
    "TrackedIssue",
    "build_progress_block",
    "build_vision_block",
    "status_label",
    "MarkerNotFoundError",
    "PatchResult",
    "patch_document",
    "replace_generated_section",
]
