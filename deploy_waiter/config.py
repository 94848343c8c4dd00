"""Waiter configuration using pydantic-settings.

Values come from the environment (GitHub Actions exposes action inputs as
``INPUT_<NAME>`` variables), an optional ``.env`` file, or keyword overrides
supplied by the command line.
"""

from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file without clobbering variables set by the runner
load_dotenv(override=False)


def _aliases(input_name: str, vercel_name: str | None = None) -> AliasChoices:
    choices = [f"INPUT_{input_name.upper()}"]
    if vercel_name:
        choices.append(vercel_name)
    return AliasChoices(*choices)


class Settings(BaseSettings):
    """Waiter settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        extra="ignore",
        loc_by_alias=False,
    )

    # Vercel access
    token: str = Field(validation_alias=_aliases("token", "VERCEL_TOKEN"))
    project_id: str = Field(
        validation_alias=_aliases("project-id", "VERCEL_PROJECT_ID")
    )
    team_id: str = Field(
        validation_alias=_aliases("team-id", "VERCEL_TEAM_ID")
    )
    api_base_url: str = Field(
        default="https://api.vercel.com",
        validation_alias=_aliases("api-base-url", "VERCEL_API_BASE_URL"),
    )

    # Target commit
    sha: str = Field(validation_alias=_aliases("sha", "GITHUB_SHA"))

    # Timing, in seconds
    timeout: int = Field(default=600, validation_alias=_aliases("timeout"))
    delay: int = Field(default=10, ge=0, validation_alias=_aliases("delay"))
    initial_delay: int = Field(
        default=5, ge=0, validation_alias=_aliases("initial-delay")
    )
    request_timeout: float = Field(
        default=30.0, gt=0, validation_alias=_aliases("request-timeout")
    )

    canceled_as_ready: bool = Field(
        default=True,
        validation_alias=_aliases("canceled-as-ready"),
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", validation_alias=_aliases("log-level")
    )
    log_format: Literal["console", "json"] = Field(
        default="console", validation_alias=_aliases("log-format")
    )

    @classmethod
    def from_overrides(cls, **overrides: Any) -> "Settings":
        """Build settings with values given by field name taking precedence.

        The environment is only read through the prefixed names, so a stray
        `TOKEN` or `TIMEOUT` on the runner is never picked up; explicit
        overrides are keyed by the first of those names instead.
        """
        values: dict[str, Any] = {}
        for name, value in overrides.items():
            field = cls.model_fields.get(name)
            alias = field.validation_alias if field else None
            key = alias.choices[0] if isinstance(alias, AliasChoices) else name
            values[key] = value
        return cls(**values)

    @property
    def api_root(self) -> str:
        """API base URL without a trailing slash."""
        return self.api_base_url.rstrip("/")
