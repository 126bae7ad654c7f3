"""Built-in default configuration for claude-config."""

# Base for every merged config; the source block mirrors the published repository
DEFAULT_CONFIG = {
    "version": "1.0",
    "source": {
        "host": "raw.githubusercontent.com",
        "user": "MrKnights1",
        "repo": "claude-config",
        "branch": "main",
    },
    "settings": {
        "transports": ["curl", "wget"],
        "timeout": 30.0,
        "update_gitignore": True,
        "keep_going": False,
    },
}
