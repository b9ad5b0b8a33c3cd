"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openpronounce.core.config.models import AppConfig
from openpronounce.core.config.repo import ConfigurationError

logger = logging.getLogger(__name__)

_DEFAULT_APP_CONFIG_PATH = Path("openpronounce.yaml")

# Environment variable -> content source field
_ENV_OVERRIDES = {
    "OPENPRONOUNCE_OWNER": "owner",
    "OPENPRONOUNCE_REPO": "repo",
    "OPENPRONOUNCE_BRANCH": "branch",
    "OPENPRONOUNCE_PROJECTS_PATH": "projects_path",
    "OPENPRONOUNCE_PAGES_URL": "pages_url",
}


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Raises:
        ConfigurationError: If format cannot be determined

    Example:
        >>> detect_format("openpronounce.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    raise ConfigurationError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary (empty for an empty YAML file)

    Raises:
        ConfigurationError: If the file is missing, unsupported or malformed
    """
    path = Path(path)

    if not path.exists():
        raise ConfigurationError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    try:
        with path.open("r", encoding="utf-8") as f:
            content = json.load(f) if fmt == "json" else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid {fmt.upper()} in {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")
    return content


def apply_env_overrides(
    raw: dict[str, Any], environ: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Overlay OPENPRONOUNCE_* environment variables onto a raw config dict.

    Args:
        raw: Raw configuration dictionary (not modified)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New dictionary with overrides applied

    Raises:
        ConfigurationError: If the ``content`` section is present but not a mapping
    """
    env = os.environ if environ is None else environ
    section = raw.get("content")
    if section is None:
        section = {}
    elif not isinstance(section, Mapping):
        raise ConfigurationError(
            f"'content' must be a mapping, got {type(section).__name__}: {section!r}"
        )
    content = dict(section)

    for var, field in _ENV_OVERRIDES.items():
        value = env.get(var)
        if value:
            logger.debug(f"Config override from {var}")
            content[field] = value

    merged = dict(raw)
    if content:
        merged["content"] = content
    return merged


def load_app_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> AppConfig:
    """Load and validate application configuration.

    Uses the file when it exists (an explicit path must exist), defaults
    otherwise, then applies environment overrides.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to openpronounce.yaml in the working directory.
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    if path is None:
        raw = load_config(_DEFAULT_APP_CONFIG_PATH) if _DEFAULT_APP_CONFIG_PATH.exists() else {}
    else:
        raw = load_config(path)

    raw = apply_env_overrides(raw, environ)

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
