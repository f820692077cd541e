"""Unit tests for application settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from trestus.config.constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from trestus.settings import AppSettings


ENV_NAMES = [
    "TRELLO_KEY",
    "TRELLO_TOKEN",
    "TRELLO_BOARD_ID",
    "TRESTUS_API_BASE_URL",
    "TRESTUS_TIMEOUT_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the caller's environment and .env file."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self) -> None:
        """Credentials are unset and API defaults apply."""
        settings = AppSettings()

        assert settings.trello_key is None
        assert settings.trello_token is None
        assert settings.trello_board_id is None
        assert settings.api_base_url == DEFAULT_API_BASE_URL
        assert settings.timeout_seconds == DEFAULT_TIMEOUT_SECONDS

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Values come from the documented variable names."""
        monkeypatch.setenv("TRELLO_KEY", "k")
        monkeypatch.setenv("TRELLO_TOKEN", "t")
        monkeypatch.setenv("TRELLO_BOARD_ID", "b")
        monkeypatch.setenv("TRESTUS_TIMEOUT_SECONDS", "5")

        settings = AppSettings()

        assert (settings.trello_key, settings.trello_token) == ("k", "t")
        assert settings.trello_board_id == "b"
        assert settings.timeout_seconds == 5.0

    def test_reads_env_file(self, tmp_path: Path) -> None:
        """A .env file in the working directory is honored."""
        (tmp_path / ".env").write_text("TRELLO_BOARD_ID=from-file\n", encoding="utf-8")

        assert AppSettings().trello_board_id == "from-file"

    def test_rejects_non_positive_timeout(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Timeouts must be positive."""
        monkeypatch.setenv("TRESTUS_TIMEOUT_SECONDS", "0")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_with_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Command-line values win; missing ones keep the environment value."""
        monkeypatch.setenv("TRELLO_KEY", "env-key")
        monkeypatch.setenv("TRELLO_BOARD_ID", "env-board")

        settings = AppSettings().with_overrides(
            key=None, token="cli-token", board_id="cli"
        )

        assert settings.trello_key == "env-key"
        assert settings.trello_token == "cli-token"
        assert settings.trello_board_id == "cli"
