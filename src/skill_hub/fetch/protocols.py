"""Abstract interface for fetching skill content."""

from typing import Protocol

from skill_hub.core.manifest import SkillEntry
from skill_hub.core.skill import SkillDocument


class ContentFetcher(Protocol):
    """Abstract interface for fetching skill content from various sources."""

    async def fetch(self, entry: SkillEntry) -> SkillDocument:
        """Fetch a skill's SKILL.md and return it as a SkillDocument.

        Args:
            entry: Manifest entry of the skill to fetch

        Returns:
            SkillDocument with the raw markdown

        Raises:
            ContentNotFoundError: If the document does not exist
            FetchError: If the document cannot be retrieved
        """
        ...
