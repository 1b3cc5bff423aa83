"""Pydantic models for skill-hub configuration."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ContentMode(str, Enum):
    """Where skill content is read from."""

    AUTO = "auto"
    LOCAL = "local"
    REMOTE = "remote"


class RegistryConfig(BaseModel):
    """Location of the manifest and skill documents."""

    root: str = Field(
        default=".", description="Directory containing the manifest and skills/"
    )
    manifest: str = Field(
        default="skills.json", description="Manifest file name within root"
    )
    mode: ContentMode = Field(
        default=ContentMode.AUTO,
        description="auto prefers local files, local never fetches, remote always fetches",
    )


class CacheConfig(BaseModel):
    """Settings for the remote content cache."""

    dir: str = Field(
        default="~/.cache/skill-hub",
        description="Directory for caching fetched skill documents",
    )
    ttl_seconds: int = Field(
        default=86400, ge=0, description="Time-to-live for cached documents"
    )
    enabled: bool = Field(default=True, description="Cache remote fetches")


class ServerConfig(BaseModel):
    """HTTP API settings."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1, le=65535)
    api_token: Optional[str] = Field(
        default=None, description="Bearer token required by POST /api/v1/task"
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate the level is a standard logging level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


class SkillHubConfig(BaseModel):
    """Root configuration for skill-hub."""

    version: str = Field(description="Config schema version")
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        if not v.startswith("1."):
            raise ValueError(
                f"Unsupported config version: {v}. Only version 1.x is supported."
            )
        return v
