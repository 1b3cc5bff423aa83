"""Skill document models and SKILL.md parsing."""

import re
from dataclasses import dataclass, field
from typing import Any, Optional

import yaml

FRONT_MATTER_PATTERN = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)


@dataclass
class SkillMetadata:
    """Metadata parsed from a skill's SKILL.md frontmatter."""

    name: str
    description: Optional[str] = None
    version: Optional[str] = None
    author: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, data: dict[str, Any]) -> "SkillMetadata":
        """Create metadata from parsed YAML."""
        data = dict(data)
        name = str(data.pop("name"))
        description = data.pop("description", None)
        version = data.pop("version", None)
        author = data.pop("author", None)
        return cls(
            name=name,
            description=description,
            version=str(version) if version is not None else None,
            author=author,
            extra=data,
        )


def parse_front_matter(content: str) -> tuple[Optional[SkillMetadata], str]:
    """Split SKILL.md content into frontmatter metadata and markdown body.

    Malformed or missing frontmatter is not an error: metadata is None and
    the body is whatever follows a recognizable frontmatter block (or the
    whole content when there is none).

    Args:
        content: Raw SKILL.md text

    Returns:
        Tuple of (metadata or None, body text)
    """
    match = FRONT_MATTER_PATTERN.match(content)
    if not match:
        return None, content

    body = content[match.end():]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError:
        return None, body

    if not isinstance(data, dict) or "name" not in data:
        return None, body

    return SkillMetadata.from_yaml(data), body


@dataclass
class SkillDocument:
    """The markdown content of a skill, as fetched from disk or a URL."""

    id: str
    content: str
    origin: str
    metadata: Optional[SkillMetadata] = None
    from_cache: bool = False

    def __post_init__(self):
        if self.metadata is None:
            self.metadata, _ = parse_front_matter(self.content)

    @property
    def body(self) -> str:
        """Markdown content without the frontmatter block."""
        _, body = parse_front_matter(self.content)
        return body
