"""Command-line argument parsing for the review tracker."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence


def _positive_int(value: str) -> int:
    """Parse and validate a positive integer CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.
    """
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0")

    return parsed


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be an integer") from exc

    if parsed < 0:
        raise argparse.ArgumentTypeError("must not be negative")

    return parsed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for review tracking.

    Returns:
        Parsed CLI arguments containing the review document source (``uuid`` or
        ``file``), API settings, and output options.
    """
    parser = argparse.ArgumentParser(
        prog="review-tracker",
        description=(
            "Show the peer-review timeline of a manuscript, grouped by revision "
            "and reviewer."
        ),
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--uuid",
        help="Tracking identifier of the manuscript to fetch from the API.",
    )
    source.add_argument(
        "--file",
        help="Path to a review document JSON file to read instead of calling the API.",
    )

    parser.add_argument(
        "--api-url",
        default=None,
        help="Base URL of the review tracking API (default: $REVIEW_TRACKER_API_URL).",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=30,
        help="Per-request timeout in seconds (default: 30).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the aggregated timeline as JSON instead of a text report.",
    )
    parser.add_argument(
        "--collapse-revision",
        type=_non_negative_int,
        action="append",
        default=[],
        metavar="N",
        help="Only show the summary line for revision N (repeatable).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)
