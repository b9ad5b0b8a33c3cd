"""Configuration management for openpronounce."""

from openpronounce.core.config.loader import (
    apply_env_overrides,
    detect_format,
    load_app_config,
    load_config,
)
from openpronounce.core.config.models import (
    AggregationConfig,
    AppConfig,
    ContentSourceConfig,
    HttpSettings,
    LoggingConfig,
    ResolutionPolicy,
)
from openpronounce.core.config.repo import (
    ConfigurationError,
    RepoSpec,
    infer_repo_from_pages_url,
    repo_url,
    resolve_repo_spec,
)

__all__ = [
    "AggregationConfig",
    "AppConfig",
    "ConfigurationError",
    "ContentSourceConfig",
    "HttpSettings",
    "LoggingConfig",
    "RepoSpec",
    "ResolutionPolicy",
    "apply_env_overrides",
    "detect_format",
    "infer_repo_from_pages_url",
    "load_app_config",
    "load_config",
    "repo_url",
    "resolve_repo_spec",
]
