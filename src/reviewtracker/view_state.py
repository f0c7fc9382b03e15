"""Expand/collapse presentation state for rendered review timelines.

The flags are keyed by the same identifiers as the aggregated model but live
beside it, so aggregation results stay free of display concerns.
"""

from __future__ import annotations

from typing import Optional, Set, Tuple

from .models import AggregatedResult

ReviewerKey = Tuple[int, int]


class ViewState:
    """Tracks which revisions and reviewers are collapsed. Everything starts expanded."""

    def __init__(self) -> None:
        self._collapsed_revisions: Set[int] = set()
        self._collapsed_reviewers: Set[ReviewerKey] = set()

    def is_collapsed(self, revision_number: int, reviewer_id: Optional[int] = None) -> bool:
        """Return whether a revision, or one reviewer within it, is collapsed."""
        if reviewer_id is None:
            return revision_number in self._collapsed_revisions
        return (revision_number, reviewer_id) in self._collapsed_reviewers

    def collapse(self, revision_number: int, reviewer_id: Optional[int] = None) -> None:
        if reviewer_id is None:
            self._collapsed_revisions.add(revision_number)
        else:
            self._collapsed_reviewers.add((revision_number, reviewer_id))

    def expand(self, revision_number: int, reviewer_id: Optional[int] = None) -> None:
        if reviewer_id is None:
            self._collapsed_revisions.discard(revision_number)
        else:
            self._collapsed_reviewers.discard((revision_number, reviewer_id))

    def toggle(self, revision_number: int, reviewer_id: Optional[int] = None) -> bool:
        """Flip the collapsed flag and return the new value."""
        if self.is_collapsed(revision_number, reviewer_id):
            self.expand(revision_number, reviewer_id)
            return False
        self.collapse(revision_number, reviewer_id)
        return True

    def collapse_all(self, result: AggregatedResult) -> None:
        """Collapse every revision and reviewer present in ``result``."""
        for group in result.revisions:
            self._collapsed_revisions.add(group.revision_number)
            for reviewer in group.reviewers:
                self._collapsed_reviewers.add((group.revision_number, reviewer.reviewer_id))
