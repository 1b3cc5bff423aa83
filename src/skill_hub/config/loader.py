"""Configuration loader with merge logic and precedence handling."""

import copy
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from skill_hub.config.defaults import DEFAULT_CONFIG
from skill_hub.config.schema import SkillHubConfig
from skill_hub.utils.paths import expand_path

PROJECT_CONFIG_NAME = "skill-hub.yaml"
USER_CONFIG_PATH = "~/.config/skill-hub/config.yaml"

# Environment variable -> (section, key)
ENV_OVERRIDES = {
    "SKILL_HUB_ROOT": ("registry", "root"),
    "SKILL_HUB_MODE": ("registry", "mode"),
    "SKILL_HUB_CACHE_DIR": ("cache", "dir"),
    "SKILL_HUB_CACHE_TTL": ("cache", "ttl_seconds"),
    "SKILL_HUB_API_TOKEN": ("server", "api_token"),
    "SKILL_HUB_LOG_LEVEL": ("logging", "level"),
}


def find_config_files() -> list[Path]:
    """Find configuration files in standard locations.

    Searches for configuration files in order of precedence (lowest to highest):
    1. Project config (./skill-hub.yaml in current directory)
    2. User config (~/.config/skill-hub/config.yaml)

    Returns:
        List of Path objects for existing config files, ordered from lowest
        to highest precedence (so later configs override earlier ones)
    """
    config_files = []

    project_config = Path.cwd() / PROJECT_CONFIG_NAME
    if project_config.exists():
        config_files.append(project_config)

    user_config = expand_path(USER_CONFIG_PATH)
    if user_config.exists():
        config_files.append(user_config)

    return config_files


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """Load and parse a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Dictionary containing the parsed YAML content

    Raises:
        yaml.YAMLError: If the file contains invalid YAML
        FileNotFoundError: If the file doesn't exist
        ValueError: If the top level is not a mapping
    """
    with open(file_path, "r", encoding="utf-8") as f:
        content = yaml.safe_load(f)

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top of {file_path}")
    return content


def merge_configs(configs: list[dict[str, Any]]) -> dict[str, Any]:
    """Deep merge multiple configuration dictionaries.

    Merges configs from lowest to highest precedence, where later configs
    override earlier ones. For nested dictionaries, performs a recursive
    deep merge. For lists, the later config completely replaces the earlier one.

    Args:
        configs: List of configuration dictionaries in order from lowest to
                highest precedence

    Returns:
        Merged configuration dictionary
    """
    result: dict[str, Any] = {}

    for config in configs:
        result = _deep_merge(result, config)

    return result


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(base)

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply SKILL_HUB_* environment variable overrides to configuration.

    Args:
        config: Configuration dictionary to apply overrides to

    Returns:
        New configuration dictionary with environment overrides applied
    """
    result = copy.deepcopy(config)

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if not value:
            continue
        if not isinstance(result.get(section), dict):
            result[section] = {}
        result[section][key] = value

    return result


def load_config(config_path: Optional[Path] = None) -> SkillHubConfig:
    """Load and merge configuration from all sources.

    Configuration precedence (lowest to highest):
    1. Built-in defaults
    2. Project config (./skill-hub.yaml)
    3. User config (~/.config/skill-hub/config.yaml)
    4. Explicitly provided config_path (if given)
    5. Environment variables
    6. CLI flags (handled by caller)

    Args:
        config_path: Optional explicit path to a config file

    Returns:
        Validated SkillHubConfig instance

    Raises:
        ValidationError: If the merged configuration is invalid
        yaml.YAMLError: If a config file contains invalid YAML
        FileNotFoundError: If config_path is provided but doesn't exist
    """
    configs_to_merge = [DEFAULT_CONFIG]

    for config_file in find_config_files():
        try:
            configs_to_merge.append(load_yaml_file(config_file))
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error loading {config_file}: {e}") from e

    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        configs_to_merge.append(load_yaml_file(config_path))

    merged_config = apply_env_overrides(merge_configs(configs_to_merge))

    return SkillHubConfig(**merged_config)
