"""Core skill models, manifest and registry."""

from skill_hub.core.exceptions import (
    ContentNotFoundError,
    DuplicateSkillError,
    FetchError,
    ManifestError,
    SkillHubError,
    SkillNotFoundError,
)
from skill_hub.core.manifest import SkillEntry, SkillManifest
from skill_hub.core.registry import SkillRegistry, ValidationIssue, ValidationReport
from skill_hub.core.skill import SkillDocument, SkillMetadata

__all__ = [
    "ContentNotFoundError",
    "DuplicateSkillError",
    "FetchError",
    "ManifestError",
    "SkillDocument",
    "SkillEntry",
    "SkillHubError",
    "SkillManifest",
    "SkillMetadata",
    "SkillNotFoundError",
    "SkillRegistry",
    "ValidationIssue",
    "ValidationReport",
]
