"""Pydantic models for the skills.json manifest."""

import json
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    field_validator,
    model_validator,
)

from skill_hub.core.exceptions import ManifestError
from skill_hub.utils.paths import ensure_dir

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
URL_SCHEMES = ("http", "https", "file")


def _today() -> date:
    return datetime.now(timezone.utc).date()


class SkillEntry(BaseModel):
    """A single skill listed in the manifest."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique slug, primary key")
    name: str = Field(min_length=1, description="Display name")
    description: str = Field(description="One-line summary")
    url: str = Field(description="Location of the full SKILL.md")
    author: str = Field(description="Attribution")
    verified: StrictBool = Field(description="Whether the skill passed human review")
    tags: list[str] = Field(default_factory=list, description="Categorization")
    added_at: date = Field(alias="addedAt", description="Date the skill was added")

    @classmethod
    def create(cls, **fields: Any) -> "SkillEntry":
        """Build a new entry for the manifest: unverified, added today (UTC).

        Entries read from skills.json must carry verified and addedAt
        themselves; only freshly added skills get these defaults.
        """
        fields.setdefault("verified", False)
        fields.setdefault("added_at", _today())
        return cls(**fields)

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate the id is a lower-case hyphenated slug."""
        if not SLUG_PATTERN.match(v):
            raise ValueError(
                f"Invalid skill id '{v}': use lower-case letters, digits and hyphens"
            )
        return v

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate the url is an absolute http(s) or file URI."""
        parsed = urlparse(v)
        if parsed.scheme not in URL_SCHEMES:
            raise ValueError(f"Unsupported URL scheme in '{v}'")
        if parsed.scheme != "file" and not parsed.netloc:
            raise ValueError(f"URL has no host: '{v}'")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Lower-case and de-duplicate tags, keeping their order."""
        seen: list[str] = []
        for tag in v:
            tag = tag.strip().lower()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the manifest's camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class SkillManifest(BaseModel):
    """Root of the skills.json manifest."""

    version: str = Field(default="1.0", description="Manifest format version")
    skills: list[SkillEntry] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Validate version format."""
        if not v.startswith("1."):
            raise ValueError(
                f"Unsupported manifest version: {v}. Only version 1.x is supported."
            )
        return v

    @model_validator(mode="after")
    def check_unique_ids(self) -> "SkillManifest":
        """Reject manifests that list the same id twice."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for entry in self.skills:
            if entry.id in seen and entry.id not in duplicates:
                duplicates.append(entry.id)
            seen.add(entry.id)
        if duplicates:
            raise ValueError(f"Duplicate skill ids: {', '.join(duplicates)}")
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "skills": [entry.to_dict() for entry in self.skills],
        }


def _format_errors(error: ValidationError) -> str:
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"  {location}: {err['msg']}")
    return "\n".join(lines)


def parse_manifest(data: Any, source: str = "manifest") -> SkillManifest:
    """Validate decoded JSON as a manifest.

    Accepts either a bare list of entries or an object with a "skills" list.

    Args:
        data: Decoded JSON content
        source: Name used in error messages

    Returns:
        Validated SkillManifest

    Raises:
        ManifestError: If the data does not describe a valid manifest
    """
    if isinstance(data, list):
        data = {"skills": data}
    if not isinstance(data, dict):
        raise ManifestError(
            f"{source}: expected a JSON array or object, got {type(data).__name__}"
        )

    try:
        return SkillManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"{source} failed validation:\n{_format_errors(e)}") from e


def load_manifest(path: Path) -> SkillManifest:
    """Load and validate a manifest file.

    Args:
        path: Path to skills.json

    Returns:
        Validated SkillManifest

    Raises:
        ManifestError: If the file is missing, not JSON, or invalid
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Manifest not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    return parse_manifest(data, source=str(path))


def dump_manifest(manifest: SkillManifest, path: Path) -> None:
    """Write a manifest to disk in object form.

    Args:
        manifest: Manifest to write
        path: Destination file
    """
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest.to_dict(), f, indent=2, ensure_ascii=False)
        f.write("\n")
