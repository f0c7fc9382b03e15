"""Event aggregation for manuscript peer-review timelines.

This module turns a flat, unordered list of reviewer lifecycle events into the
nested structure shown to users:

- One :class:`RevisionGroup` per revision number, in ascending order.
- One :class:`ReviewerState` per ``(revision_number, reviewer_id)`` key, in
  ascending ``last_updated_at`` order within its revision.

Field values follow fold order: a later event in the input sequence overwrites
an earlier one of the same kind for the same key, even when its timestamp is
older. ``last_updated_at`` is independent of that rule and always tracks the
largest timestamp folded into the state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from typing import Dict

from .errors import InvalidInputError
from .models import (
    AggregatedResult,
    ManuscriptMeta,
    ReviewerState,
    ReviewerStatus,
    ReviewEvent,
    ReviewEventKind,
    RevisionGroup,
)

logger = logging.getLogger(__name__)

_FIELD_BY_KIND = {
    ReviewEventKind.INVITED: "invited_at",
    ReviewEventKind.ACCEPTED: "accepted_at",
    ReviewEventKind.COMPLETED: "completed_at",
}


def _is_integer(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _validate_event(event: object, index: int) -> None:
    """Check that ``event`` is a well-formed :class:`ReviewEvent`.

    Raises:
        InvalidInputError: If the element is not a ``ReviewEvent`` or any of its
            fields is missing or out of range.
    """
    if not isinstance(event, ReviewEvent):
        raise InvalidInputError(
            f"Review event #{index} is not a ReviewEvent: {type(event).__name__}"
        )

    timestamp = event.timestamp
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise InvalidInputError(f"Review event #{index} has a non-numeric timestamp: {timestamp!r}")
    if isinstance(timestamp, float) and not (math.isfinite(timestamp) and timestamp.is_integer()):
        raise InvalidInputError(
            f"Review event #{index} timestamp is not whole seconds: {timestamp!r}"
        )

    if not isinstance(event.kind, ReviewEventKind):
        raise InvalidInputError(f"Review event #{index} has an unknown kind: {event.kind!r}")

    if not _is_integer(event.revision_number) or event.revision_number < 0:
        raise InvalidInputError(
            f"Review event #{index} revision number must be a non-negative integer: "
            f"{event.revision_number!r}"
        )

    if not _is_integer(event.reviewer_id):
        raise InvalidInputError(
            f"Review event #{index} reviewer id must be an integer: {event.reviewer_id!r}"
        )


def fold_event(state: ReviewerState, event: ReviewEvent) -> None:
    """Fold one event into the cumulative state of its key.

    The field for the event kind is overwritten unconditionally;
    ``last_updated_at`` only moves forward.
    """
    timestamp = int(event.timestamp)
    setattr(state, _FIELD_BY_KIND[event.kind], timestamp)
    if state.last_updated_at is None or timestamp > state.last_updated_at:
        state.last_updated_at = timestamp


def aggregate(meta: ManuscriptMeta, events: Sequence[ReviewEvent]) -> AggregatedResult:
    """Group review events into sorted revisions and reviewers.

    Args:
        meta: Manuscript metadata, returned unchanged on the result.
        events: Review events in any order. May be empty.

    Returns:
        An :class:`AggregatedResult` with revision groups ascending by revision
        number and reviewers ascending by ``last_updated_at`` (stable with
        respect to the first appearance of each reviewer in ``events``).

    Raises:
        InvalidInputError: If ``events`` is not a sequence of well-formed
            ``ReviewEvent`` instances.
    """
    if (
        not isinstance(events, Sequence)
        or isinstance(events, (str, bytes, bytearray))
        or isinstance(events, Mapping)
    ):
        raise InvalidInputError(
            f"Review events must be a sequence of ReviewEvent, got {type(events).__name__}"
        )

    buckets: Dict[int, Dict[int, ReviewerState]] = {}

    for index, event in enumerate(events):
        _validate_event(event, index)

        reviewers = buckets.setdefault(event.revision_number, {})
        state = reviewers.get(event.reviewer_id)
        if state is None:
            state = ReviewerState(reviewer_id=event.reviewer_id)
            reviewers[event.reviewer_id] = state

        fold_event(state, event)

    revisions = [
        RevisionGroup(
            revision_number=revision_number,
            reviewers=sorted(
                buckets[revision_number].values(),
                key=lambda reviewer: reviewer.last_updated_at,
            ),
        )
        for revision_number in sorted(buckets)
    ]

    logger.debug(
        "Aggregated review events",
        extra={
            "manuscript_uuid": meta.uuid,
            "events_total": len(events),
            "revisions": len(revisions),
            "reviewers": sum(len(group.reviewers) for group in revisions),
        },
    )

    return AggregatedResult(meta=meta, revisions=revisions)


def reviewer_status(reviewer: ReviewerState) -> ReviewerStatus:
    """Derive a reviewer's display status.

    Strict precedence: Completed, then Accepted, then Invited. Timestamps are
    not compared, so a completed reviewer is reported as completed even when
    the earlier stages are missing.
    """
    if reviewer.completed_at is not None:
        return ReviewerStatus.COMPLETED
    if reviewer.accepted_at is not None:
        return ReviewerStatus.ACCEPTED
    if reviewer.invited_at is not None:
        return ReviewerStatus.INVITED
    return ReviewerStatus.UNKNOWN
