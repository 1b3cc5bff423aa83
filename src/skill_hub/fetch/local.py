"""Fetcher reading skill documents from the registry's skills/ directory."""

import logging
from pathlib import Path

import anyio

from skill_hub.core.exceptions import ContentNotFoundError, FetchError
from skill_hub.core.manifest import SkillEntry
from skill_hub.core.skill import SkillDocument

logger = logging.getLogger(__name__)


class LocalFetcher:
    """Reads skills/<id>/SKILL.md beneath a registry root."""

    SKILL_FILENAME = "SKILL.md"

    def __init__(self, root: Path):
        """Initialize local fetcher.

        Args:
            root: Registry root containing the skills/ directory
        """
        self.root = Path(root)
        self.skills_dir = self.root / "skills"

    def path_for(self, skill_id: str) -> Path:
        return self.skills_dir / skill_id / self.SKILL_FILENAME

    def exists(self, entry: SkillEntry) -> bool:
        """Check whether the skill has a local SKILL.md."""
        return self.path_for(entry.id).is_file()

    async def fetch(self, entry: SkillEntry) -> SkillDocument:
        """Read the skill's local SKILL.md.

        Args:
            entry: Manifest entry of the skill

        Returns:
            SkillDocument with the file contents

        Raises:
            ContentNotFoundError: If the file does not exist
            FetchError: If the file cannot be read
        """
        return await self.read_path(entry.id, self.path_for(entry.id))

    async def read_path(self, skill_id: str, path: Path) -> SkillDocument:
        """Read a SKILL.md at an arbitrary path (used for file:// URLs)."""
        if not path.is_file():
            raise ContentNotFoundError(f"No SKILL.md for '{skill_id}' at {path}")

        try:
            content = await anyio.Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FetchError(f"Failed to read {path}: {e}") from e

        logger.debug("Read %s (%d bytes)", path, len(content))
        return SkillDocument(id=skill_id, content=content, origin=str(path))
