"""Keep Claude Code's local settings file out of version control."""

from pathlib import Path

LOCAL_SETTINGS_ENTRY = ".claude/settings.local.json"
LOCAL_SETTINGS_COMMENT = "# Claude Code local settings"


def has_entry(content: str, entry: str) -> bool:
    """Check whether a .gitignore body already lists entry on its own line."""
    return any(line.strip() == entry for line in content.splitlines())


def update_gitignore(
    project_root: Path,
    entry: str = LOCAL_SETTINGS_ENTRY,
    comment: str = LOCAL_SETTINGS_COMMENT,
) -> bool:
    """Append entry to an existing .gitignore unless it is already listed.

    A missing .gitignore is left alone; the file is only ever appended to.

    Args:
        project_root: Directory holding the .gitignore
        entry: Pattern to ignore
        comment: Comment line written above the pattern

    Returns:
        True if the file was modified, False otherwise
    """
    gitignore = project_root / ".gitignore"
    if not gitignore.is_file():
        return False

    content = gitignore.read_text(encoding="utf-8")
    if has_entry(content, entry):
        return False

    lines = []
    if content and not content.endswith("\n"):
        lines.append("")
    lines.extend(["", comment, entry, ""])

    with open(gitignore, "a", encoding="utf-8") as f:
        f.write("\n".join(lines))

    return True
