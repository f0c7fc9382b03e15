"""Tests for application orchestration in the main module."""

import json
import sys
from argparse import Namespace
from pathlib import Path
from unittest.mock import Mock, patch

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from reviewtracker.config import Config
from reviewtracker.errors import ApiError, ConfigurationError
from reviewtracker.main import orchestrate_review_tracking


def _args(**overrides) -> Namespace:
    values = dict(
        uuid="uuid-1",
        file=None,
        api_url="https://tracker.example.org/api",
        timeout=30,
        json=False,
        collapse_revision=[],
        verbose=False,
    )
    values.update(overrides)
    return Namespace(**values)


def _document() -> dict:
    return {
        "Uuid": "uuid-1",
        "ManuscriptTitle": "Timelines of Review",
        "ReviewEvents": [
            {"Date": 100, "Event": "REVIEWER_INVITED", "Revision": 1, "Id": 1},
            {"Date": 200, "Event": "REVIEWER_ACCEPTED", "Revision": 1, "Id": 1},
            {"Date": 50, "Event": "REVIEWER_INVITED", "Revision": 1, "Id": 2},
        ],
    }


def test_orchestrate_review_tracking_fetches_and_prints_report(capsys):
    """Verify orchestration returns 0 and wires config, client and report on success."""
    config = Config(manuscript_uuid="uuid-1", api_url="https://tracker.example.org/api")
    client = Mock()
    client.fetch_review_data.return_value = _document()

    with patch("reviewtracker.main.parse_args", return_value=_args()), patch(
        "reviewtracker.main.load_config", return_value=config
    ) as load_config_mock, patch(
        "reviewtracker.main.ReviewTrackerClient", return_value=client
    ) as client_ctor_mock, patch(
        "reviewtracker.main.generate_report", return_value="REPORT"
    ) as report_mock:
        exit_code = orchestrate_review_tracking()

    assert exit_code == 0
    load_config_mock.assert_called_once_with(
        manuscript_uuid="uuid-1",
        api_url="https://tracker.example.org/api",
        timeout_seconds=30,
    )
    client_ctor_mock.assert_called_once_with(config=config)
    client.fetch_review_data.assert_called_once_with("uuid-1")

    result = report_mock.call_args.args[0]
    assert result.meta.manuscript_title == "Timelines of Review"
    assert [reviewer.reviewer_id for reviewer in result.revisions[0].reviewers] == [2, 1]

    assert capsys.readouterr().out == "REPORT\n"


def test_orchestrate_review_tracking_from_file_prints_only_json(tmp_path, capsys):
    """Verify file input with --json writes nothing but the output document to stdout."""
    path = tmp_path / "review.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")

    exit_code = orchestrate_review_tracking(["--file", str(path), "--json"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["Uuid"] == "uuid-1"
    assert [reviewer["Id"] for reviewer in payload["Revisions"][0]["Reviewers"]] == [2, 1]
    assert payload["Revisions"][0]["Reviewers"][1]["Status"] == "Accepted"


def test_orchestrate_review_tracking_collapses_requested_revisions(tmp_path, capsys):
    """Verify --collapse-revision hides the reviewer lines of that revision."""
    path = tmp_path / "review.json"
    path.write_text(json.dumps(_document()), encoding="utf-8")

    exit_code = orchestrate_review_tracking(["--file", str(path), "--collapse-revision", "1"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "Revision 1 - 2 reviewer(s)" in output
    assert "Reviewer 1:" not in output


def test_orchestrate_review_tracking_configuration_error_returns_config_exit_code():
    """Verify configuration failures return the configuration exit code."""
    with patch("reviewtracker.main.parse_args", return_value=_args(api_url=None)), patch(
        "reviewtracker.main.load_config",
        side_effect=ConfigurationError("Missing review tracking API URL."),
    ):
        exit_code = orchestrate_review_tracking()

    assert exit_code == 2


def test_orchestrate_review_tracking_invalid_document_returns_invalid_input_exit_code(tmp_path):
    """Verify malformed review events return the invalid input exit code."""
    document = _document()
    document["ReviewEvents"].append({"Date": "later", "Event": "REVIEWER_INVITED", "Revision": 1, "Id": 3})
    path = tmp_path / "review.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    exit_code = orchestrate_review_tracking(["--file", str(path)])

    assert exit_code == 3


def test_orchestrate_review_tracking_api_error_returns_api_exit_code():
    """Verify review tracking API failures return the API error exit code."""
    config = Config(manuscript_uuid="uuid-1", api_url="https://tracker.example.org/api")
    client = Mock()
    client.fetch_review_data.side_effect = ApiError("GET returned 404")

    with patch("reviewtracker.main.parse_args", return_value=_args()), patch(
        "reviewtracker.main.load_config", return_value=config
    ), patch("reviewtracker.main.ReviewTrackerClient", return_value=client):
        exit_code = orchestrate_review_tracking()

    assert exit_code == 4


def test_orchestrate_review_tracking_unexpected_error_returns_generic_exit_code():
    """Verify unexpected exceptions are mapped to the generic non-zero exit code."""
    with patch("reviewtracker.main.parse_args", side_effect=RuntimeError("boom")):
        exit_code = orchestrate_review_tracking()

    assert exit_code == 1


def test_orchestrate_review_tracking_millisecond_timestamps_render_report(tmp_path, capsys):
    """Verify out-of-range timestamps accepted by aggregation still produce a report."""
    document = _document()
    document["ReviewEvents"].append(
        {"Date": 1_700_000_000_000, "Event": "REVIEWER_COMPLETED", "Revision": 1, "Id": 2}
    )
    path = tmp_path / "review.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    exit_code = orchestrate_review_tracking(["--file", str(path)])

    assert exit_code == 0
    assert "completed 1700000000000" in capsys.readouterr().out
