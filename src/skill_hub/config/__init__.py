"""Configuration loading and management."""

from skill_hub.config.loader import (
    find_config_files,
    load_config,
    merge_configs,
)
from skill_hub.config.schema import (
    CacheConfig,
    ContentMode,
    LoggingConfig,
    RegistryConfig,
    ServerConfig,
    SkillHubConfig,
)

__all__ = [
    # Loader functions
    "find_config_files",
    "load_config",
    "merge_configs",
    # Schema classes
    "CacheConfig",
    "ContentMode",
    "LoggingConfig",
    "RegistryConfig",
    "ServerConfig",
    "SkillHubConfig",
]
