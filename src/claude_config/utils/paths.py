"""Path utilities for expanding paths and preparing directories."""

import os
from pathlib import Path


def expand_path(path: str) -> Path:
    """Expand and normalize a path, resolving ~ and relative paths.

    Args:
        path: Path string that may contain ~ or be relative

    Returns:
        Absolute Path object
    """
    return Path(path).expanduser().resolve()


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path that was ensured
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def is_within(path: Path, root: Path) -> bool:
    """Check whether path lies inside root.

    The comparison is lexical: ``..`` segments are collapsed but symlinks are
    not followed, so a root whose subdirectories link elsewhere still
    contains them.
    """
    path = Path(os.path.normpath(path.absolute()))
    root = Path(os.path.normpath(root.absolute()))
    return path == root or root in path.parents
