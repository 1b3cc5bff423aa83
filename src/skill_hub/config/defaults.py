"""Built-in default configuration for skill-hub."""

# Default configuration that serves as the base for all other configs
DEFAULT_CONFIG = {
    "version": "1.0",
    "registry": {
        "root": ".",
        "manifest": "skills.json",
        "mode": "auto",
    },
    "cache": {
        "dir": "~/.cache/skill-hub",
        "ttl_seconds": 86400,
        "enabled": True,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
        "api_token": None,
    },
    "logging": {
        "level": "INFO",
    },
}
