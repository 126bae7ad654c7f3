"""Manifest, installer and .gitignore handling."""

from claude_config.core.installer import InstallResult, install
from claude_config.core.manifest import (
    MANIFEST,
    InstallMode,
    ManifestEntry,
    destination_root,
    get_manifest,
)

__all__ = [
    "MANIFEST",
    "InstallMode",
    "InstallResult",
    "ManifestEntry",
    "destination_root",
    "get_manifest",
    "install",
]
