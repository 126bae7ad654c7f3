"""Configuration loading and management."""

from claude_config.config.loader import (
    find_config_files,
    load_config,
    merge_configs,
)
from claude_config.config.schema import (
    InstallerConfig,
    SettingsConfig,
    SourceConfig,
    TransportKind,
)

__all__ = [
    # Loader functions
    "find_config_files",
    "load_config",
    "merge_configs",
    # Schema classes
    "InstallerConfig",
    "SettingsConfig",
    "SourceConfig",
    "TransportKind",
]
