"""Formatting helpers and text report rendering for review timelines.

This module provides utilities for:
- Formatting unix-second timestamps as ``YYYY-MM-DD HH:MM UTC``.
- Counting reviewers per derived status within a revision.
- Building a human-readable report of an aggregated manuscript timeline.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from .aggregator import reviewer_status
from .models import AggregatedResult, ReviewerStatus, RevisionGroup
from .view_state import ViewState


def format_timestamp(timestamp: Optional[int]) -> str:
    """Format unix seconds as a UTC date and time.

    Args:
        timestamp: Seconds since the epoch, or ``None`` when unset.

    Returns:
        ``"n/a"`` when the timestamp is unset, the raw number when it falls
        outside the platform date range, otherwise ``YYYY-MM-DD HH:MM UTC``.
    """
    if timestamp is None:
        return "n/a"

    try:
        moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return str(timestamp)
    return moment.strftime("%Y-%m-%d %H:%M UTC")


def summarize_statuses(group: RevisionGroup) -> Dict[ReviewerStatus, int]:
    """Count the reviewers of a revision by derived status.

    Every status is present in the returned mapping, in display precedence
    order, including those with a count of zero.
    """
    counts = {status: 0 for status in ReviewerStatus}
    for reviewer in group.reviewers:
        counts[reviewer_status(reviewer)] += 1
    return counts


def _format_counts(counts: Dict[ReviewerStatus, int]) -> str:
    return ", ".join(f"{status.value}: {count}" for status, count in counts.items() if count)


def generate_report(result: AggregatedResult, view_state: Optional[ViewState] = None) -> str:
    """Generate a human-readable review timeline report.

    Collapsed revisions show only their header line; collapsed reviewers show
    only their id and status.

    Args:
        result: Aggregated manuscript timeline.
        view_state: Optional expand/collapse flags. Defaults to fully expanded.

    Returns:
        Formatted multi-line text report.
    """
    view_state = view_state or ViewState()
    meta = result.meta

    lines: List[str] = [
        f"Manuscript: {meta.manuscript_title or 'n/a'}",
        f"Journal: {meta.journal_name or 'n/a'}"
        + (f" ({meta.journal_acronym})" if meta.journal_acronym else ""),
        f"Corresponding author: {meta.corresponding_author or 'n/a'}",
        f"Submitted: {format_timestamp(meta.submission_date)}",
        f"Last updated: {format_timestamp(meta.last_updated)}",
    ]

    if not result.revisions:
        lines.extend(["", "No review events recorded."])
        return "\n".join(lines)

    for group in result.revisions:
        counts = _format_counts(summarize_statuses(group))
        lines.append("")
        lines.append(
            f"Revision {group.revision_number} - {len(group.reviewers)} reviewer(s)"
            + (f" [{counts}]" if counts else "")
        )
        if view_state.is_collapsed(group.revision_number):
            continue

        for reviewer in group.reviewers:
            status = reviewer_status(reviewer).value
            if view_state.is_collapsed(group.revision_number, reviewer.reviewer_id):
                lines.append(f"   Reviewer {reviewer.reviewer_id}: {status}")
                continue

            lines.append(
                f"   Reviewer {reviewer.reviewer_id}: {status}"
                f" | invited {format_timestamp(reviewer.invited_at)}"
                f" | accepted {format_timestamp(reviewer.accepted_at)}"
                f" | completed {format_timestamp(reviewer.completed_at)}"
            )

    return "\n".join(lines)
