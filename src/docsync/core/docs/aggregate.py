"""
Reduce an issue's dependency list into status counts and remaining work.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from docsync.core.tracker.models import Dependency, Issue, IssueStatus

NOT_APPLICABLE = "n/a"


@dataclass(frozen=True)
class StatusCounts:
    """Dependency counts per status bucket; unrecognized statuses go to `other`."""

    total: int = 0
    closed: int = 0
    in_progress: int = 0
    open: int = 0
    blocked: int = 0
    deferred: int = 0
    other: int = 0

    def buckets(self) -> dict[str, int]:
        """All buckets except total, in display order."""
        return {
            "closed": self.closed,
            "in_progress": self.in_progress,
            "open": self.open,
            "blocked": self.blocked,
            "deferred": self.deferred,
            "other": self.other,
        }


@dataclass(frozen=True)
class DependencySummary:
    counts: StatusCounts = field(default_factory=StatusCounts)
    remaining: tuple[Dependency, ...] = ()

    @property
    def completion(self) -> str:
        return completion_percent(self.counts.closed, self.counts.total)


def completion_percent(value: int, total: int) -> str:
    """
    Format value/total as a whole percentage.

    Rounds halves up. Returns "n/a" when total is zero.

    Example:
        >>> completion_percent(1, 2)
        '50%'
        >>> completion_percent(0, 0)
        'n/a'
    """
    if total <= 0:
        return NOT_APPLICABLE
    return f"{(value * 200 + total) // (2 * total)}%"


def summarize(issue: Issue) -> DependencySummary:
    """
    Count an issue's dependencies by status and list those not yet closed.

    The remaining list keeps the tracker's order.
    """
    known = {status.value for status in IssueStatus}
    tally = dict.fromkeys(StatusCounts().buckets(), 0)

    for dep in issue.dependencies:
        if dep.status in known:
            tally[dep.status] += 1
        else:
            tally["other"] += 1

    counts = StatusCounts(total=len(issue.dependencies), **tally)
    remaining = tuple(dep for dep in issue.dependencies if not dep.is_closed)
    return DependencySummary(counts=counts, remaining=remaining)
