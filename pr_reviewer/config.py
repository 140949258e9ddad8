"""Configuration for the AI PR Reviewer action."""

from typing import Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pr_reviewer.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Run settings, read from action inputs (``INPUT_*``) or plain env variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # App
    environment: str = Field(default="production", validation_alias="ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # GitHub
    github_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    github_api_url: str = Field(default="https://api.github.com", validation_alias="GITHUB_API_URL")
    github_event_path: Optional[str] = Field(default=None, validation_alias="GITHUB_EVENT_PATH")
    github_event_name: Optional[str] = Field(default=None, validation_alias="GITHUB_EVENT_NAME")

    # LLM - Lab45 completion skill
    lab45_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_LAB45_API_KEY", "LAB45_API_KEY"),
    )
    lab45_api_model: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("INPUT_LAB45_API_MODEL", "LAB45_API_MODEL"),
    )
    lab45_api_url: str = Field(
        default="https://api.lab45.ai/v1.1/skills/completion/query",
        validation_alias="LAB45_API_URL",
    )

    # Review Configuration
    exclude: str = Field(default="", validation_alias=AliasChoices("INPUT_EXCLUDE", "EXCLUDE"))
    review_prompt: Literal["standard", "senior"] = Field(
        default="standard",
        validation_alias=AliasChoices("INPUT_REVIEW_PROMPT", "REVIEW_PROMPT"),
    )
    max_concurrency: int = Field(default=1, ge=1, validation_alias="MAX_CONCURRENCY")

    def require_credentials(self) -> None:
        """Raise if any credential needed for a review run is missing."""
        missing = [
            name
            for name, value in (
                ("GITHUB_TOKEN", self.github_token),
                ("LAB45_API_KEY", self.lab45_api_key),
                ("LAB45_API_MODEL", self.lab45_api_model),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}",
                details={"missing": missing},
            )
