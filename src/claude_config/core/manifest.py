"""The fixed list of files claude-config installs, per install mode.

The table is written out literally: nothing is discovered or computed at
runtime. Each entry pairs the path under the published repository with the
path under the destination root of its mode.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Optional


class InstallMode(str, Enum):
    """Where the files are installed."""

    PROJECT = "project"
    GLOBAL = "global"


@dataclass(frozen=True)
class ManifestEntry:
    """A single file to install.

    Attributes:
        remote: Path relative to the source base URL
        local: Path relative to the destination root
    """

    remote: str
    local: str

    def url(self, base_url: str) -> str:
        """Full URL of the remote file."""
        return f"{base_url.rstrip('/')}/{self.remote}"

    def destination(self, root: Path) -> Path:
        """Local path the file is written to under root."""
        return root.joinpath(*PurePosixPath(self.local).parts)


MANIFEST: dict[InstallMode, tuple[ManifestEntry, ...]] = {
    InstallMode.PROJECT: (
        ManifestEntry("CLAUDE.md", "CLAUDE.md"),
        ManifestEntry(".claude/security.md", ".claude/security.md"),
        ManifestEntry(".claude/security-review.md", ".claude/security-review.md"),
        ManifestEntry(".claude/testing.md", ".claude/testing.md"),
        ManifestEntry(".claude/api-design.md", ".claude/api-design.md"),
        ManifestEntry(".claude/structure.md", ".claude/structure.md"),
        ManifestEntry(".claude/database.md", ".claude/database.md"),
        ManifestEntry(".claude/standards.md", ".claude/standards.md"),
        ManifestEntry(".claude/skills/commit/SKILL.md", ".claude/skills/commit/SKILL.md"),
        ManifestEntry(".claude/skills/merge/SKILL.md", ".claude/skills/merge/SKILL.md"),
        ManifestEntry(".claude/skills/issue/SKILL.md", ".claude/skills/issue/SKILL.md"),
    ),
    # Rooted at ~/.claude: guidelines go one level deeper, skills sit beside them
    InstallMode.GLOBAL: (
        ManifestEntry("CLAUDE.md", "CLAUDE.md"),
        ManifestEntry(".claude/security.md", ".claude/security.md"),
        ManifestEntry(".claude/security-review.md", ".claude/security-review.md"),
        ManifestEntry(".claude/testing.md", ".claude/testing.md"),
        ManifestEntry(".claude/api-design.md", ".claude/api-design.md"),
        ManifestEntry(".claude/structure.md", ".claude/structure.md"),
        ManifestEntry(".claude/database.md", ".claude/database.md"),
        ManifestEntry(".claude/standards.md", ".claude/standards.md"),
        ManifestEntry(".claude/skills/commit/SKILL.md", "skills/commit/SKILL.md"),
        ManifestEntry(".claude/skills/merge/SKILL.md", "skills/merge/SKILL.md"),
        ManifestEntry(".claude/skills/issue/SKILL.md", "skills/issue/SKILL.md"),
    ),
}

GLOBAL_DIR_NAME = ".claude"


def get_manifest(mode: InstallMode) -> tuple[ManifestEntry, ...]:
    """Return the ordered entries installed in the given mode."""
    return MANIFEST[InstallMode(mode)]


def destination_root(
    mode: InstallMode, cwd: Optional[Path] = None, home: Optional[Path] = None
) -> Path:
    """Resolve the directory the manifest's local paths are relative to.

    Args:
        mode: Install mode
        cwd: Project directory (defaults to the current working directory)
        home: User home directory (defaults to Path.home())

    Returns:
        The project directory in project mode, ~/.claude in global mode
    """
    if InstallMode(mode) is InstallMode.GLOBAL:
        return (home or Path.home()) / GLOBAL_DIR_NAME
    return cwd or Path.cwd()
