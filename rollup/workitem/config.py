"""
Rollup configuration loading.

Settings come from CLI flags, ROLLUP_* environment variables and an
optional YAML file (with ${VAR} expansion), in that order of precedence.
"""

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import quote

import yaml

from rollup.workitem.errors import ConfigurationError


DEFAULT_SOURCE_FIELD = "Microsoft.VSTS.Scheduling.Effort"
DEFAULT_TAG = "Release"
DEFAULT_API_VERSION = "7.1"
DEFAULT_BASE_URL = "https://dev.azure.com"
ENV_PREFIX = "ROLLUP_"

REQUIRED_KEYS = (
    "organization",
    "project",
    "iteration_path",
    "release_id",
    "target_field",
)

DEFAULTS = {
    "source_field": DEFAULT_SOURCE_FIELD,
    "tag": DEFAULT_TAG,
    "api_version": DEFAULT_API_VERSION,
    "base_url": DEFAULT_BASE_URL,
}

SETTING_KEYS = REQUIRED_KEYS + tuple(DEFAULTS)


@dataclass(frozen=True)
class RollupSettings:
    """Inputs for one rollup run."""

    organization: str
    project: str
    iteration_path: str
    release_id: int
    target_field: str
    source_field: str = DEFAULT_SOURCE_FIELD
    tag: str = DEFAULT_TAG
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_BASE_URL
    dry_run: bool = False

    @property
    def project_url(self) -> str:
        """Base URL for project-scoped API calls."""
        org = quote(self.organization, safe="")
        project = quote(self.project, safe="")
        return f"{self.base_url.rstrip('/')}/{org}/{project}"


def expand_env_vars(value: Any, environ: Mapping[str, str] | None = None) -> Any:
    """
    Recursively expand ${VAR} environment variables in config values.

    Args:
        value: Config value (string, dict, list, or other)
        environ: Mapping to read variables from (defaults to os.environ)

    Returns:
        Value with env vars expanded
    """
    if environ is None:
        environ = os.environ

    if isinstance(value, str):
        # Match ${VAR} or $VAR patterns
        pattern = r'\$\{([^}]+)\}|\$([A-Z_][A-Z0-9_]*)'

        def replace(match):
            var_name = match.group(1) or match.group(2)
            return environ.get(var_name, "")

        return re.sub(pattern, replace, value)

    elif isinstance(value, dict):
        return {k: expand_env_vars(v, environ) for k, v in value.items()}

    elif isinstance(value, list):
        return [expand_env_vars(item, environ) for item in value]

    return value


def load_rollup_config(
    config_path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict:
    """
    Load the `rollup` section of a YAML config file.

    Looks for config in this order:
    1. Explicitly provided path (must exist)
    2. config/rollup.yaml relative to the project root
    3. Returns an empty mapping

    Args:
        config_path: Optional path to config file
        environ: Mapping used for ${VAR} expansion

    Returns:
        Dict of setting name to value

    Raises:
        ConfigurationError: If an explicit path is missing or the file is malformed
    """
    if config_path is None:
        # rollup/workitem/config.py -> project root is ../../..
        project_root = Path(__file__).parent.parent.parent
        default_path = project_root / "config" / "rollup.yaml"
        if not default_path.exists():
            return {}
        config_path = default_path

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    with open(config_path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    section = data.get("rollup") if isinstance(data, dict) else None
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"'rollup' section in {config_path} must be a mapping")

    return expand_env_vars(section, environ)


def _env_key(key: str) -> str:
    return ENV_PREFIX + key.upper()


def build_settings(
    cli_values: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
    file_values: Mapping[str, Any] | None = None,
    dry_run: bool = False,
) -> RollupSettings:
    """
    Merge setting sources into a RollupSettings.

    Precedence: CLI value, then ROLLUP_<KEY> environment variable, then
    config file value, then built-in default. Empty strings count as unset.

    Raises:
        ConfigurationError: If required settings are missing or release_id
            is not an integer
    """
    cli_values = cli_values or {}
    environ = os.environ if environ is None else environ
    file_values = file_values or {}

    resolved: dict[str, Any] = {}
    for key in SETTING_KEYS:
        for candidate in (
            cli_values.get(key),
            environ.get(_env_key(key)),
            file_values.get(key),
            DEFAULTS.get(key),
        ):
            if candidate is not None and str(candidate).strip() != "":
                resolved[key] = candidate
                break

    missing = [key for key in REQUIRED_KEYS if key not in resolved]
    if missing:
        names = ", ".join(f"{k} (--{k.replace('_', '-')} / {_env_key(k)})" for k in missing)
        raise ConfigurationError(f"Missing required settings: {names}")

    try:
        release_id = int(resolved["release_id"])
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"release_id must be an integer, got {resolved['release_id']!r}"
        ) from e

    return RollupSettings(
        organization=str(resolved["organization"]),
        project=str(resolved["project"]),
        iteration_path=str(resolved["iteration_path"]),
        release_id=release_id,
        target_field=str(resolved["target_field"]),
        source_field=str(resolved["source_field"]),
        tag=str(resolved["tag"]),
        api_version=str(resolved["api_version"]),
        base_url=str(resolved["base_url"]),
        dry_run=dry_run,
    )
