"""Exceptions raised by the skill registry, fetchers and service."""


class SkillHubError(Exception):
    """Base class for all skill-hub errors."""


class ManifestError(SkillHubError, ValueError):
    """The manifest file is missing, unreadable or fails validation."""


class SkillNotFoundError(SkillHubError, LookupError):
    """No manifest entry exists for the requested skill id."""

    def __init__(self, skill_id: str):
        self.skill_id = skill_id
        super().__init__(f"Skill '{skill_id}' not found")


class DuplicateSkillError(SkillHubError, ValueError):
    """A skill with the same id is already in the manifest."""

    def __init__(self, skill_id: str):
        self.skill_id = skill_id
        super().__init__(f"Skill '{skill_id}' already exists in the manifest")


class FetchError(SkillHubError):
    """Skill content could not be retrieved."""


class ContentNotFoundError(FetchError):
    """The skill's SKILL.md does not exist at its location."""
