"""Entry point orchestrating review document loading, aggregation and output."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from .aggregator import aggregate
from .cli import parse_args
from .client import ReviewTrackerClient
from .config import load_config
from .errors import ApiError, ConfigurationError, InvalidInputError
from .payload import load_review_file, parse_review_data, result_to_dict
from .report import generate_report
from .view_state import ViewState

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNEXPECTED_ERROR = 1
EXIT_CONFIGURATION_ERROR = 2
EXIT_INVALID_INPUT = 3
EXIT_API_ERROR = 4


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_document(args: Any) -> Dict[str, Any]:
    if args.file:
        logger.info("Reading review document", extra={"path": args.file})
        return load_review_file(args.file)

    config = load_config(
        manuscript_uuid=args.uuid,
        api_url=args.api_url,
        timeout_seconds=args.timeout,
    )
    logger.info("Fetching review events", extra={"manuscript_uuid": config.manuscript_uuid})
    client = ReviewTrackerClient(config=config)
    return client.fetch_review_data(config.manuscript_uuid)


def orchestrate_review_tracking(argv: Optional[Sequence[str]] = None) -> int:
    """Run the review tracker and return a process exit code.

    Exit codes:
        0: success
        1: unexpected error
        2: configuration error
        3: invalid review document
        4: review tracking API error
    """
    try:
        args = parse_args(argv)
        _configure_logging(args.verbose)

        document = _load_document(args)
        meta, events = parse_review_data(document)
        result = aggregate(meta, events)

        if args.json:
            print(json.dumps(result_to_dict(result), indent=2))
        else:
            view_state = ViewState()
            for revision_number in args.collapse_revision:
                view_state.collapse(revision_number)
            print(generate_report(result, view_state))

        return EXIT_OK
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIGURATION_ERROR
    except InvalidInputError as exc:
        logger.error("Invalid review document: %s", exc)
        return EXIT_INVALID_INPUT
    except ApiError as exc:
        logger.error("Review tracking API error: %s", exc)
        return EXIT_API_ERROR
    except Exception:
        logger.exception("Unexpected error while tracking reviews")
        return EXIT_UNEXPECTED_ERROR


def main(argv: Optional[Sequence[str]] = None) -> int:
    return orchestrate_review_tracking(argv)


if __name__ == "__main__":
    raise SystemExit(main())
