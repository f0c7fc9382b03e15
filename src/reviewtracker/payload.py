"""Conversion between the review tracking JSON documents and domain models.

Input documents carry PascalCase manuscript fields and a ``ReviewEvents`` array
of ``{Date, Event, Revision, Id}`` records. Output documents mirror
:class:`AggregatedResult` with the same manuscript keys plus ``Revisions``;
unset timestamps are written as ``0``.
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .aggregator import reviewer_status
from .errors import InvalidInputError
from .models import AggregatedResult, ManuscriptMeta, ReviewerState, ReviewEvent, ReviewEventKind

_EVENT_FIELDS = ("Date", "Event", "Revision", "Id")


def _whole_number(value: Any, label: str) -> int:
    """Return ``value`` as an int, accepting floats only when they are whole."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{label} must be numeric, got {value!r}")
    if isinstance(value, float):
        if not (math.isfinite(value) and value.is_integer()):
            raise InvalidInputError(f"{label} must be a whole number, got {value!r}")
        return int(value)
    return value


def _parse_int(record: Mapping[str, Any], key: str, index: int) -> int:
    return _whole_number(record[key], f"Review event #{index} field '{key}'")


def _parse_kind(value: Any, index: int) -> ReviewEventKind:
    if isinstance(value, str):
        try:
            return ReviewEventKind(value)
        except ValueError:
            pass
        member = ReviewEventKind.__members__.get(value.upper())
        if member is not None:
            return member

    raise InvalidInputError(f"Review event #{index} has an unknown event kind: {value!r}")


def parse_review_event(record: Any, index: int = 0) -> ReviewEvent:
    """Convert one wire-format event record into a :class:`ReviewEvent`.

    Args:
        record: Mapping with ``Date``, ``Event``, ``Revision`` and ``Id`` keys.
        index: Position of the record in its array, used in error messages.

    Raises:
        InvalidInputError: If the record is not an object, misses a required
            key, or carries a value of the wrong type or range.
    """
    if not isinstance(record, Mapping):
        raise InvalidInputError(f"Review event #{index} must be an object, got {type(record).__name__}")

    missing = [key for key in _EVENT_FIELDS if record.get(key) is None]
    if missing:
        raise InvalidInputError(
            f"Review event #{index} is missing required fields: {', '.join(missing)}"
        )

    revision_number = _parse_int(record, "Revision", index)
    if revision_number < 0:
        raise InvalidInputError(
            f"Review event #{index} revision number must not be negative, got {revision_number}"
        )

    return ReviewEvent(
        timestamp=_parse_int(record, "Date", index),
        kind=_parse_kind(record["Event"], index),
        revision_number=revision_number,
        reviewer_id=_parse_int(record, "Id", index),
    )


def _optional_int(document: Mapping[str, Any], key: str) -> Optional[int]:
    value = document.get(key)
    if value is None:
        return None
    return _whole_number(value, f"Manuscript field '{key}'")


def parse_manuscript_meta(document: Mapping[str, Any]) -> ManuscriptMeta:
    """Read the pass-through manuscript fields of a review document."""
    return ManuscriptMeta(
        uuid=str(document.get("Uuid") or ""),
        corresponding_author=str(document.get("CorrespondingAuthor") or ""),
        first_author=str(document.get("FirstAuthor") or ""),
        journal_acronym=str(document.get("JournalAcronym") or ""),
        journal_name=str(document.get("JournalName") or ""),
        manuscript_title=str(document.get("ManuscriptTitle") or ""),
        pubd_number=str(document.get("PubdNumber") or ""),
        document_id=_optional_int(document, "DocumentId"),
        latest_revision_number=_optional_int(document, "LatestRevisionNumber"),
        status=_optional_int(document, "Status"),
        submission_date=_optional_int(document, "SubmissionDate"),
        last_updated=_optional_int(document, "LastUpdated"),
    )


def parse_review_data(document: Any) -> Tuple[ManuscriptMeta, List[ReviewEvent]]:
    """Split a review document into manuscript metadata and review events.

    A missing or ``null`` ``ReviewEvents`` field means no events yet.

    Raises:
        InvalidInputError: If the document is not an object, ``ReviewEvents``
            is not an array, or any event record is malformed.
    """
    if not isinstance(document, Mapping):
        raise InvalidInputError(
            f"Review document must be a JSON object, got {type(document).__name__}"
        )

    raw_events = document.get("ReviewEvents")
    if raw_events is None:
        raw_events = []
    if not isinstance(raw_events, list):
        raise InvalidInputError(
            f"Review document field 'ReviewEvents' must be an array, got {type(raw_events).__name__}"
        )

    events = [parse_review_event(record, index) for index, record in enumerate(raw_events)]
    return parse_manuscript_meta(document), events


def load_review_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a review document from a local JSON file.

    Raises:
        InvalidInputError: If the file cannot be read or is not valid JSON.
    """
    try:
        with open(path, encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise InvalidInputError(f"Could not read review document '{path}': {exc}") from exc
    except ValueError as exc:
        raise InvalidInputError(f"Review document '{path}' is not valid JSON: {exc}") from exc


def _reviewer_to_dict(reviewer: ReviewerState) -> Dict[str, Any]:
    return {
        "Id": reviewer.reviewer_id,
        "InvitedDate": reviewer.invited_at or 0,
        "AcceptedDate": reviewer.accepted_at or 0,
        "CompletedDate": reviewer.completed_at or 0,
        "LastUpdated": reviewer.last_updated_at or 0,
        "Status": reviewer_status(reviewer).value,
    }


def result_to_dict(result: AggregatedResult) -> Dict[str, Any]:
    """Serialize an aggregation result into the output document shape."""
    meta = result.meta
    return {
        "Uuid": meta.uuid,
        "CorrespondingAuthor": meta.corresponding_author,
        "FirstAuthor": meta.first_author,
        "JournalAcronym": meta.journal_acronym,
        "JournalName": meta.journal_name,
        "ManuscriptTitle": meta.manuscript_title,
        "PubdNumber": meta.pubd_number,
        "DocumentId": meta.document_id,
        "LatestRevisionNumber": meta.latest_revision_number,
        "Status": meta.status,
        "SubmissionDate": meta.submission_date,
        "LastUpdated": meta.last_updated,
        "Revisions": [
            {
                "Id": group.revision_number,
                "Reviewers": [_reviewer_to_dict(reviewer) for reviewer in group.reviewers],
            }
            for group in result.revisions
        ],
    }
