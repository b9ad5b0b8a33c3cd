"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from openpronounce.core.config.loader import (
    apply_env_overrides,
    detect_format,
    load_app_config,
    load_config,
)
from openpronounce.core.config.models import AppConfig, ResolutionPolicy
from openpronounce.core.config.repo import ConfigurationError


class TestDetectFormat:
    """Tests for detect_format()."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known(self, name: str, expected: str) -> None:
        assert detect_format(name) == expected

    def test_unknown(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported"):
            detect_format("a.toml")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "openpronounce.yaml"
        path.write_text("content:\n  owner: alice\n  repo: names\n")
        assert load_config(path) == {"content": {"owner": "alice", "repo": "names"}}

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"aggregation": {"on_directory_failure": "abort"}}))
        assert load_config(path) == {"aggregation": {"on_directory_failure": "abort"}}

    def test_empty_yaml_is_empty_dict(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="does not exist"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("content: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)


class TestEnvOverrides:
    """Tests for apply_env_overrides()."""

    def test_overrides_content_fields(self) -> None:
        raw = {"content": {"owner": "alice", "branch": "main"}}
        merged = apply_env_overrides(
            raw, {"OPENPRONOUNCE_OWNER": "bob", "OPENPRONOUNCE_PROJECTS_PATH": "names"}
        )
        assert merged["content"] == {"owner": "bob", "branch": "main", "projects_path": "names"}
        assert raw["content"]["owner"] == "alice"

    def test_empty_values_ignored(self) -> None:
        assert apply_env_overrides({}, {"OPENPRONOUNCE_REPO": ""}) == {}

    @pytest.mark.parametrize("section", ["platypython", ["owner", "repo"], 3])
    def test_non_mapping_content_section(self, section: object) -> None:
        with pytest.raises(ConfigurationError, match="'content' must be a mapping"):
            apply_env_overrides({"content": section}, {})


class TestLoadAppConfig:
    """Tests for load_app_config()."""

    def test_defaults_without_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_app_config(environ={})
        assert config == AppConfig()
        assert config.content.owner == "platypython"
        assert config.content.repo == "openPronounce"
        assert config.aggregation.on_directory_failure is ResolutionPolicy.SKIP

    def test_default_file_is_picked_up(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "openpronounce.yaml").write_text("content:\n  branch: gh-pages\n")
        monkeypatch.chdir(tmp_path)
        assert load_app_config(environ={}).content.branch == "gh-pages"

    def test_explicit_path_must_exist(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            load_app_config(tmp_path / "missing.yaml", environ={})

    def test_env_beats_file(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("content:\n  owner: alice\n  repo: names\n")
        config = load_app_config(path, environ={"OPENPRONOUNCE_REPO": "words"})
        assert (config.content.owner, config.content.repo) == ("alice", "words")

    def test_validation_error_is_configuration_error(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("aggregation:\n  on_directory_failure: explode\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_app_config(path, environ={})

    def test_unknown_keys_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("content:\n  colour: blue\n")
        with pytest.raises(ConfigurationError):
            load_app_config(path, environ={})

    def test_scalar_content_section(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("content: platypython/openPronounce\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_app_config(path, environ={})
