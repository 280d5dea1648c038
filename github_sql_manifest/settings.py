"""Application settings loaded from environment variables, .env file and CLI overrides."""

import json
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_PLATFORMS = ["leetcode", "hackerrank", "codechef", "codewars", "lintcode", "datalemur"]


class Settings(BaseSettings):
    """Settings for one manifest run.

    Built once at startup and handed to every component; never mutated.
    """

    model_config = SettingsConfigDict(
        env_prefix="MANIFEST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("github_token", "GITHUB_TOKEN"),
    )
    require_token: bool = True

    # What to scan
    owner: str | None = None
    repository: str | None = None
    root_path: str = ""
    platforms: Annotated[list[str], NoDecode] = Field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    keywords: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["sql"])
    platform: str | None = None

    # What to look for in each directory
    code_extension: str = ".sql"
    description_names: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["readme.md", "read.me"])

    # What to write
    mode: Literal["links", "content"] = "content"
    title_style: Literal["folder", "title"] | None = None
    sort_by: Literal["platform", "title"] = "platform"
    output: str = "problems.json"
    records_key: str = "problems"
    tags: Annotated[list[str], NoDecode] = Field(default_factory=list)

    # Pacing: seconds between directory listings, directories per batch,
    # seconds paused after each batch
    request_delay: float = 0.1
    batch_size: int = Field(default=10, ge=1)
    batch_pause: float = 0.5

    # HTTP
    api_base: str = "https://api.github.com"
    user_agent: str = "github-sql-manifest"
    request_timeout: float = 30.0
    retries: int = Field(default=3, ge=1)
    retry_delay: float = 1.0

    @field_validator("platforms", "keywords", "description_names", "tags", mode="before")
    @classmethod
    def _split_list(cls, value):
        """Accept "a,b" as well as a JSON list for list settings read from the environment."""
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def resolved_title_style(self) -> str:
        """Title style, defaulting to folder titles for link manifests."""
        if self.title_style:
            return self.title_style
        return "folder" if self.mode == "links" else "title"


def load_settings(**overrides) -> Settings:
    """Build settings, letting non-None overrides win over the environment."""
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def validate_settings(settings: Settings) -> None:
    """Fail before any network call when the run cannot succeed."""
    if settings.require_token and not settings.github_token:
        raise ConfigurationError("GITHUB_TOKEN environment variable is not set")
    if not settings.owner:
        raise ConfigurationError("No owner configured (set MANIFEST_OWNER or pass --owner)")
