"""Tests for rollup configuration loading and merging."""

import tempfile
from pathlib import Path

import pytest
import yaml

from rollup.workitem.config import (
    DEFAULT_API_VERSION,
    DEFAULT_SOURCE_FIELD,
    DEFAULT_TAG,
    build_settings,
    expand_env_vars,
    load_rollup_config,
)
from rollup.workitem.errors import ConfigurationError

REQUIRED = {
    "organization": "org",
    "project": "proj",
    "iteration_path": "proj\\R1",
    "release_id": 9000,
    "target_field": "Custom.Total",
}


def create_test_config(content: dict) -> Path:
    """Create a temporary config file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(content, f)
        return Path(f.name)


class TestBuildSettings:

    def test_defaults_applied(self):
        settings = build_settings(cli_values=REQUIRED, environ={})
        assert settings.source_field == DEFAULT_SOURCE_FIELD
        assert settings.tag == DEFAULT_TAG
        assert settings.api_version == DEFAULT_API_VERSION
        assert settings.release_id == 9000
        assert settings.dry_run is False

    def test_cli_beats_env_beats_file(self):
        settings = build_settings(
            cli_values={**REQUIRED, "tag": "cli"},
            environ={"ROLLUP_TAG": "env", "ROLLUP_API_VERSION": "7.0"},
            file_values={"tag": "file", "api_version": "6.0", "source_field": "Custom.Points"},
        )
        assert settings.tag == "cli"
        assert settings.api_version == "7.0"
        assert settings.source_field == "Custom.Points"

    def test_env_only(self):
        environ = {f"ROLLUP_{k.upper()}": str(v) for k, v in REQUIRED.items()}
        settings = build_settings(environ=environ)
        assert settings.organization == "org"
        assert settings.release_id == 9000

    def test_empty_values_count_as_unset(self):
        settings = build_settings(cli_values={**REQUIRED, "tag": ""}, environ={"ROLLUP_TAG": ""})
        assert settings.tag == DEFAULT_TAG

    def test_missing_required_listed(self):
        with pytest.raises(ConfigurationError) as excinfo:
            build_settings(cli_values={"organization": "org"}, environ={})
        message = str(excinfo.value)
        assert "project" in message
        assert "release_id" in message
        assert "--target-field" in message

    def test_release_id_must_be_integer(self):
        with pytest.raises(ConfigurationError, match="integer"):
            build_settings(cli_values={**REQUIRED, "release_id": "abc"}, environ={})

    def test_project_url_encodes_segments(self):
        settings = build_settings(
            cli_values={**REQUIRED, "organization": "my org", "base_url": "https://ado.local/"},
            environ={},
        )
        assert settings.project_url == "https://ado.local/my%20org/proj"


class TestLoadRollupConfig:

    def test_loads_rollup_section_with_env_expansion(self):
        path = create_test_config({"rollup": {"project": "${PROJ_NAME}", "tag": "Q3"}})
        try:
            values = load_rollup_config(path, environ={"PROJ_NAME": "Web"})
            assert values == {"project": "Web", "tag": "Q3"}
        finally:
            path.unlink()

    def test_missing_section_is_empty(self):
        path = create_test_config({"other": {}})
        try:
            assert load_rollup_config(path) == {}
        finally:
            path.unlink()

    def test_explicit_missing_file_raises(self):
        with pytest.raises(ConfigurationError, match="not found"):
            load_rollup_config("/nonexistent/rollup.yaml")

    def test_non_mapping_section_raises(self):
        path = create_test_config({"rollup": ["a", "b"]})
        try:
            with pytest.raises(ConfigurationError, match="mapping"):
                load_rollup_config(path)
        finally:
            path.unlink()


def test_expand_env_vars_nested():
    value = {"a": "${X}", "b": ["$Y", 3], "c": "plain"}
    assert expand_env_vars(value, {"X": "1", "Y": "2"}) == {"a": "1", "b": ["2", 3], "c": "plain"}
