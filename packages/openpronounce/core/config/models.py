"""Configuration models for openpronounce."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResolutionPolicy(str, Enum):
    """What to do when a single project directory cannot be listed.

    Values:
        SKIP: Drop the directory and record a warning on the snapshot
        ABORT: Fail the whole aggregation run
    """

    SKIP = "skip"
    ABORT = "abort"


class ContentSourceConfig(BaseModel):
    """Where the project directories live.

    Either ``owner`` and ``repo`` are set, or ``pages_url`` points at the
    repository's GitHub Pages site so they can be inferred.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    owner: str | None = Field(default="platypython", description="Repository owner")
    repo: str | None = Field(default="openPronounce", description="Repository name")
    branch: str = Field(default="main", min_length=1, description="Git ref to read")
    projects_path: str = Field(
        default="projects", description="Directory holding one sub-directory per project"
    )
    pages_url: str | None = Field(
        default=None, description="GitHub Pages URL used to infer owner/repo"
    )
    api_base_url: str = Field(default="https://api.github.com", description="Contents API base")


class AggregationConfig(BaseModel):
    """Aggregation pipeline behaviour."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    on_directory_failure: ResolutionPolicy = Field(
        default=ResolutionPolicy.SKIP,
        description="Policy for a project directory whose listing fails",
    )
    max_concurrency: int | None = Field(
        default=None,
        gt=0,
        description="Cap on concurrent project resolutions (None = all at once)",
    )


class HttpSettings(BaseModel):
    """HTTP client settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timeout_s: float = Field(default=10.0, gt=0)
    connect_timeout_s: float = Field(default=5.0, gt=0)
    user_agent: str = Field(default="openpronounce/0.1")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )
    structured: bool = Field(default=False, description="Emit JSON log lines")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    filename: str | None = Field(default=None, description="Log file (None = stdout)")


class AppConfig(BaseModel):
    """Application configuration.

    Example:
        >>> config = AppConfig.model_validate({"content": {"owner": "me", "repo": "names"}})
        >>> config.content.branch
        'main'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    content: ContentSourceConfig = Field(default_factory=ContentSourceConfig)
    aggregation: AggregationConfig = Field(default_factory=AggregationConfig)
    http: HttpSettings = Field(default_factory=HttpSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
