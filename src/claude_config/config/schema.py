"""Pydantic models for claude-config configuration."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Hosts a GITHUB_TOKEN may be sent to
TOKEN_HOSTS = frozenset({"raw.githubusercontent.com"})


class TransportKind(str, Enum):
    """Backends able to download manifest files."""

    CURL = "curl"
    WGET = "wget"
    HTTPX = "httpx"


class SourceConfig(BaseModel):
    """Where the guideline files are published."""

    host: str = Field(
        default="raw.githubusercontent.com",
        description="Host serving raw repository files",
    )
    user: str = Field(default="MrKnights1", description="GitHub account or organization")
    repo: str = Field(default="claude-config", description="Repository name")
    branch: str = Field(default="main", description="Branch to install from")

    @field_validator("host", "user", "repo", "branch")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty components, which would produce a broken URL."""
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("host", "user", "repo")
    @classmethod
    def validate_single_segment(cls, v: str) -> str:
        """Validate that the component is a single URL path segment."""
        if "/" in v:
            raise ValueError("must not contain '/'")
        return v

    @property
    def base_url(self) -> str:
        """URL prefix every manifest path is appended to."""
        return f"https://{self.host}/{self.user}/{self.repo}/{self.branch}"

    @property
    def accepts_token(self) -> bool:
        """Whether the host is trusted with the user's GitHub token."""
        return self.host.lower() in TOKEN_HOSTS


class SettingsConfig(BaseModel):
    """Installer behaviour settings."""

    transports: list[TransportKind] = Field(
        default=[TransportKind.CURL, TransportKind.WGET],
        description="Transport backends in order of preference",
    )
    timeout: float = Field(
        default=30.0, gt=0, description="Request timeout in seconds (httpx backend)"
    )
    update_gitignore: bool = Field(
        default=True,
        description="Append the local settings file to an existing .gitignore",
    )
    keep_going: bool = Field(
        default=False,
        description="Attempt every file and report failures at the end",
    )

    @field_validator("transports")
    @classmethod
    def validate_transports(cls, v: list[TransportKind]) -> list[TransportKind]:
        """Require at least one transport, dropping duplicates in order."""
        if not v:
            raise ValueError("at least one transport is required")
        return list(dict.fromkeys(v))


class InstallerConfig(BaseModel):
    """Root configuration for claude-config."""

    version: str = Field(description="Config schema version")
    source: SourceConfig = Field(default_factory=SourceConfig)
    settings: SettingsConfig = Field(default_factory=SettingsConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        if not v.startswith("1."):
            raise ValueError(
                f"Unsupported config version: {v}. Only version 1.x is supported."
            )
        return v
