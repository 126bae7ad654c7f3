"""Configuration loader with merge logic and precedence handling."""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from claude_config.config.defaults import DEFAULT_CONFIG
from claude_config.config.schema import InstallerConfig
from claude_config.utils.errors import ConfigError
from claude_config.utils.paths import expand_path

PROJECT_CONFIG_NAME = ".claude-config.yaml"
USER_CONFIG_PATH = "~/.config/claude-config/config.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "CLAUDE_GITHUB_USER": ("source", "user"),
    "CLAUDE_GITHUB_REPO": ("source", "repo"),
    "CLAUDE_GITHUB_BRANCH": ("source", "branch"),
}


def find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Searches for configuration files in order of precedence (lowest to highest):
    1. Project config (./.claude-config.yaml in current directory)
    2. User config (~/.config/claude-config/config.yaml)

    Returns:
        List of Path objects for existing config files, ordered from lowest
        to highest precedence (so later configs override earlier ones)
    """
    config_files = []

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        config_files.append(project_config)

    user_config = expand_path(USER_CONFIG_PATH)
    if user_config.exists():
        config_files.append(user_config)

    return config_files


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Dictionary containing the parsed YAML content

    Raises:
        yaml.YAMLError: If the file contains invalid YAML
        FileNotFoundError: If the file doesn't exist
        ValueError: If the top level of the document is not a mapping
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top level of {file_path}")
    return content


def merge_configs(configs: list[dict[str, Any]]) -> dict[str, Any]:
    """Deep merge multiple configuration dictionaries.

    Merges configs from lowest to highest precedence, where later configs
    override earlier ones. Nested dictionaries are merged recursively; lists
    from a later config replace the earlier one entirely.

    Args:
        configs: List of configuration dictionaries in order from lowest to
                highest precedence

    Returns:
        Merged configuration dictionary
    """
    result: dict[str, Any] = {}

    for config in configs:
        result = _deep_merge(result, config)

    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two dictionaries, with override taking precedence."""
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    Supports the following environment variables:
    - CLAUDE_GITHUB_USER: Override source.user
    - CLAUDE_GITHUB_REPO: Override source.repo
    - CLAUDE_GITHUB_BRANCH: Override source.branch
    - CLAUDE_CONFIG_TRANSPORTS: Override settings.transports (comma-separated)

    Args:
        config: Configuration dictionary to apply overrides to

    Returns:
        New configuration dictionary with environment overrides applied
    """
    result = copy.deepcopy(config)

    for env_var, (section, key) in ENV_OVERRIDES.items():
        if value := os.getenv(env_var):
            result.setdefault(section, {})[key] = value

    if transports := os.getenv("CLAUDE_CONFIG_TRANSPORTS"):
        result.setdefault("settings", {})["transports"] = [
            t.strip().lower() for t in transports.split(",") if t.strip()
        ]

    return result


def load_config(config_path: Optional[Path] = None) -> InstallerConfig:
    """Load and merge configuration from all sources.

    Configuration precedence (lowest to highest):
    1. Built-in defaults
    2. Project config (./.claude-config.yaml)
    3. User config (~/.config/claude-config/config.yaml)
    4. Environment variables
    5. Explicitly provided config_path (if given)
    6. CLI flags (handled by caller)

    Args:
        config_path: Optional explicit path to a config file, merged on top
                    of everything except CLI flags.

    Returns:
        Validated InstallerConfig instance

    Raises:
        ConfigError: If a file is missing or unreadable, or the merged
                     configuration is invalid
    """
    configs_to_merge = [DEFAULT_CONFIG]

    for config_file in find_config_files():
        configs_to_merge.append(_read_config_file(config_file))

    merged_config = apply_env_overrides(merge_configs(configs_to_merge))

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")
        merged_config = merge_configs([merged_config, _read_config_file(config_path)])

    try:
        return InstallerConfig(**merged_config)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed:\n{e}") from e


def _read_config_file(config_file: Path) -> dict[str, Any]:
    try:
        return load_yaml_file(config_file)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Error loading {config_file}: {e}") from e
