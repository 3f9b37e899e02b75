"""
docsync - keep project status docs in sync with beads.

Rewrites generated sections of hand-written Markdown documents from the
beads issue tracker, falling back to the local JSONL snapshot when the
`bd` CLI is unavailable.
"""

__version__ = "0.1.0"

# Re-export core models for convenience
from docsync.core.tracker.models import DataSource, Dependency, Issue, IssueStatus

__all__ = ["DataSource", "Dependency", "Issue", "IssueStatus", "__version__"]
