"""Domain models for manuscript peer-review tracking.

Events are immutable inputs; reviewer states and revision groups are derived
by :func:`reviewtracker.aggregator.aggregate` and owned top-down
(result -> revision group -> reviewer state) without back references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ReviewEventKind(str, Enum):
    """Lifecycle stage recorded by a review event, valued by its wire tag."""

    INVITED = "REVIEWER_INVITED"
    ACCEPTED = "REVIEWER_ACCEPTED"
    COMPLETED = "REVIEWER_COMPLETED"


class ReviewerStatus(str, Enum):
    """Derived display status of a reviewer."""

    COMPLETED = "Completed"
    ACCEPTED = "Accepted"
    INVITED = "Invited"
    UNKNOWN = "Unknown"


@dataclass(frozen=True, slots=True)
class ReviewEvent:
    """One reviewer lifecycle event for a manuscript revision."""

    timestamp: int
    kind: ReviewEventKind
    revision_number: int
    reviewer_id: int


@dataclass(frozen=True, slots=True)
class ManuscriptMeta:
    """Static manuscript fields, passed through aggregation unchanged."""

    uuid: str = ""
    corresponding_author: str = ""
    first_author: str = ""
    journal_acronym: str = ""
    journal_name: str = ""
    manuscript_title: str = ""
    pubd_number: str = ""
    document_id: Optional[int] = None
    latest_revision_number: Optional[int] = None
    status: Optional[int] = None
    submission_date: Optional[int] = None
    last_updated: Optional[int] = None


@dataclass(slots=True)
class ReviewerState:
    """Folded lifecycle timestamps of one reviewer within one revision.

    Timestamps are unix seconds; ``None`` means the stage has not happened.
    """

    reviewer_id: int
    invited_at: Optional[int] = None
    accepted_at: Optional[int] = None
    completed_at: Optional[int] = None
    last_updated_at: Optional[int] = None


@dataclass(slots=True)
class RevisionGroup:
    """Reviewers active during one review revision, in display order."""

    revision_number: int
    reviewers: List[ReviewerState] = field(default_factory=list)


@dataclass(slots=True)
class AggregatedResult:
    """Manuscript metadata plus its revision groups in ascending order."""

    meta: ManuscriptMeta
    revisions: List[RevisionGroup] = field(default_factory=list)
