"""Shared pytest fixtures for claude-config tests."""

import pytest

from claude_config.utils.errors import FetchError

BASE_URL = "https://raw.githubusercontent.com/MrKnights1/claude-config/main"

PROJECT_FILES = [
    "CLAUDE.md",
    ".claude/security.md",
    ".claude/security-review.md",
    ".claude/testing.md",
    ".claude/api-design.md",
    ".claude/structure.md",
    ".claude/database.md",
    ".claude/standards.md",
    ".claude/skills/commit/SKILL.md",
    ".claude/skills/merge/SKILL.md",
    ".claude/skills/issue/SKILL.md",
]

GLOBAL_FILES = [
    "CLAUDE.md",
    ".claude/security.md",
    ".claude/security-review.md",
    ".claude/testing.md",
    ".claude/api-design.md",
    ".claude/structure.md",
    ".claude/database.md",
    ".claude/standards.md",
    "skills/commit/SKILL.md",
    "skills/merge/SKILL.md",
    "skills/issue/SKILL.md",
]


class FakeTransport:
    """Transport returning fixed content, failing for chosen URL suffixes."""

    name = "fake"

    def __init__(self, content=b"X", failures=None):
        self.content = content
        self.failures = failures or {}
        self.requested = []

    async def fetch(self, url):
        self.requested.append(url)
        for suffix, reason in self.failures.items():
            if url.endswith(suffix):
                raise FetchError(url, reason)
        return self.content


def snapshot(root):
    """Map every file under root to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's overrides and token out of every test."""
    for name in (
        "CLAUDE_GITHUB_USER",
        "CLAUDE_GITHUB_REPO",
        "CLAUDE_GITHUB_BRANCH",
        "CLAUDE_CONFIG_TRANSPORTS",
        "GITHUB_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def project_dir(tmp_path, monkeypatch):
    """Provide an empty project directory as the working directory."""
    work_dir = tmp_path / "project"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    return work_dir


@pytest.fixture
def home_dir(tmp_path, monkeypatch):
    """Provide an isolated home directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def no_tools(monkeypatch):
    """Pretend neither curl nor wget is installed."""
    monkeypatch.setattr("claude_config.fetch.selector.shutil.which", lambda name: None)
