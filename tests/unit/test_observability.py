"""Unit tests for logging configuration."""

import io
import json
import logging

from trestus.observability import (
    bind_run_context,
    clear_run_context,
    configure_logging,
    get_logger,
)


class TestLogging:
    """Tests for structlog setup."""

    def teardown_method(self) -> None:
        """Drop bound context between tests."""
        clear_run_context()

    def test_json_output_with_run_context(self) -> None:
        """JSON lines carry the event, level and bound run id."""
        stream = io.StringIO()
        configure_logging(output=stream, json_format=True)
        bind_run_context("run-42")

        get_logger().info("board_fetched", cards=3)

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "board_fetched"
        assert record["level"] == "info"
        assert record["run_id"] == "run-42"
        assert record["cards"] == 3

    def test_level_filtering(self) -> None:
        """Messages below the configured level are dropped."""
        stream = io.StringIO()
        configure_logging(level=logging.WARNING, output=stream)

        get_logger().info("ignored")
        get_logger().warning("kept")

        assert "ignored" not in stream.getvalue()
        assert "kept" in stream.getvalue()

    def test_clear_run_context(self) -> None:
        """Cleared context no longer appears in records."""
        stream = io.StringIO()
        configure_logging(output=stream)
        bind_run_context("run-42")
        clear_run_context()

        get_logger().info("done")

        assert "run_id" not in json.loads(stream.getvalue().strip())
