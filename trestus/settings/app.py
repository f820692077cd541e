"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from trestus.config.constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_SECONDS


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    trello_key: str | None = Field(default=None, validation_alias="TRELLO_KEY")
    trello_token: str | None = Field(default=None, validation_alias="TRELLO_TOKEN")
    trello_board_id: str | None = Field(
        default=None, validation_alias="TRELLO_BOARD_ID"
    )
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL, validation_alias="TRESTUS_API_BASE_URL"
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        validation_alias="TRESTUS_TIMEOUT_SECONDS",
    )

    def with_overrides(
        self,
        key: str | None = None,
        token: str | None = None,
        board_id: str | None = None,
    ) -> "AppSettings":
        """Return a copy with command-line values taking precedence."""
        updates: dict[str, str] = {}
        if key:
            updates["trello_key"] = key
        if token:
            updates["trello_token"] = token
        if board_id:
            updates["trello_board_id"] = board_id
        return self.model_copy(update=updates)


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
