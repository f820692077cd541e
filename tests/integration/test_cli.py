"""Integration tests for the command line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.helpers.boards import (
    API,
    DB,
    DEGRADED,
    MAJOR,
    MINOR,
    WEB,
    make_board,
    make_card,
)
from trestus.board import dump_board_snapshot
from trestus.cli.main import cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep Trello credentials and .env files out of CLI runs."""
    for name in ("TRELLO_KEY", "TRELLO_TOKEN", "TRELLO_BOARD_ID"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def snapshot(tmp_path: Path) -> Path:
    """Write a board snapshot with open and resolved incidents."""
    board = make_board(
        {
            "Investigating": [
                make_card(card_id="a", name="API down", labels=[MAJOR, API]),
                make_card(
                    card_id="b", name="Slow DB", labels=[DEGRADED, DB], age_minutes=3
                ),
            ],
            "Monitoring": [
                make_card(card_id="c", name="API flaky", labels=[MINOR, API]),
            ],
            "Fixed": [
                make_card(card_id="d", name="Site outage", labels=[MAJOR, WEB]),
            ],
        }
    )
    path = tmp_path / "board.json"
    dump_board_snapshot(board, path)
    return path


class TestRunCommand:
    """Tests for `trestus run`."""

    def test_prints_html_to_stdout(self, snapshot: Path) -> None:
        """Without --output-path the page goes to stdout."""
        result = CliRunner().invoke(cli, ["run", "--snapshot", str(snapshot)])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("<!DOCTYPE html>")
        assert "API down" in result.output
        assert "Site outage" in result.output

    def test_writes_files(self, snapshot: Path, tmp_path: Path) -> None:
        """Output files, stylesheet and JSON are written."""
        out = tmp_path / "site" / "index.html"
        status = tmp_path / "status.json"

        result = CliRunner().invoke(
            cli,
            [
                "run",
                "--snapshot",
                str(snapshot),
                "--output-path",
                str(out),
                "--json-output",
                str(status),
            ],
        )

        assert result.exit_code == 0, result.output
        assert out.exists()
        assert (tmp_path / "site" / "trestus.css").exists()
        document = json.loads(status.read_text(encoding="utf-8"))
        assert document["panels"] == {
            "MajorOutage": ["API"],
            "MinorOutage": ["API"],
            "DegradedPerformance": ["Database"],
        }
        assert document["systems"]["API"]["status_label_text"] == "Investigating"

    def test_list_priority(self, snapshot: Path, tmp_path: Path) -> None:
        """--list-priority changes which list sets a service's status."""
        status = tmp_path / "status.json"

        result = CliRunner().invoke(
            cli,
            [
                "run",
                "--snapshot",
                str(snapshot),
                "--list-priority",
                "monitoring",
                "--json-output",
                str(status),
            ],
        )

        assert result.exit_code == 0, result.output
        document = json.loads(status.read_text(encoding="utf-8"))
        assert document["systems"]["API"] == {
            "severity": "MinorOutage",
            "status_label_text": "Monitoring",
        }

    def test_missing_board_id(self) -> None:
        """Without a snapshot or board id the command fails."""
        result = CliRunner().invoke(cli, ["run"])

        assert result.exit_code == 1
        assert "No board id configured" in result.output

    def test_save_snapshot_failure(self, snapshot: Path, tmp_path: Path) -> None:
        """An unwritable snapshot path fails with a message, not a traceback."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")

        result = CliRunner().invoke(
            cli,
            [
                "run",
                "--snapshot",
                str(snapshot),
                "--save-snapshot",
                str(blocker / "copy.json"),
            ],
        )

        assert result.exit_code == 1
        assert "Cannot save board snapshot" in result.output
        assert not isinstance(result.exception, OSError)


class TestSummaryCommand:
    """Tests for `trestus summary`."""

    def test_summary(self, snapshot: Path) -> None:
        """Each service is listed with its status, then incident counts."""
        result = CliRunner().invoke(cli, ["summary", "--snapshot", str(snapshot)])

        assert result.exit_code == 0, result.output
        assert result.output.splitlines() == [
            "API: Investigating (Major Outage)",
            "Database: Investigating (Degraded Performance)",
            "Website: Operational (Operational)",
            "Incidents: 3 open, 1 resolved",
        ]

    def test_highest_severity_policy(self, snapshot: Path) -> None:
        """The highest_severity policy keeps the worst open incident."""
        result = CliRunner().invoke(
            cli,
            [
                "summary",
                "--snapshot",
                str(snapshot),
                "--list-priority",
                "Monitoring",
                "--policy",
                "highest_severity",
            ],
        )

        assert result.exit_code == 0, result.output
        assert result.output.splitlines()[0] == "API: Investigating (Major Outage)"
