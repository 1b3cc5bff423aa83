"""Skill registry backed by a skills.json manifest and a skills/ directory."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from skill_hub.core.exceptions import (
    DuplicateSkillError,
    ManifestError,
    SkillNotFoundError,
)
from skill_hub.core.manifest import (
    SkillEntry,
    SkillManifest,
    dump_manifest,
    load_manifest,
)
from skill_hub.core.skill import parse_front_matter

logger = logging.getLogger(__name__)


@dataclass
class ValidationIssue:
    """A single problem found while validating a registry."""

    severity: Literal["error", "warning"]
    message: str
    skill_id: Optional[str] = None


@dataclass
class ValidationReport:
    """Collected results of SkillRegistry.validate()."""

    checked: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)

    def error(self, message: str, skill_id: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue("error", message, skill_id))

    def warning(self, message: str, skill_id: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue("warning", message, skill_id))

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == "warning"]

    @property
    def ok(self) -> bool:
        return not self.errors


class SkillRegistry:
    """Manages the skill manifest and the skill documents stored beside it.

    The registry root holds skills.json and a skills/<id>/SKILL.md file for
    each entry. Entries are looked up by id; lookups against an unloaded
    registry see an empty manifest.
    """

    MANIFEST_FILENAME = "skills.json"
    SKILLS_DIRNAME = "skills"
    SKILL_FILENAME = "SKILL.md"

    def __init__(self, root: Path, manifest_name: str = MANIFEST_FILENAME):
        """Initialize the registry for a root directory.

        Args:
            root: Directory containing the manifest and skills/ directory
            manifest_name: File name of the manifest within root
        """
        self.root = Path(root)
        self.manifest_path = self.root / manifest_name
        self.skills_dir = self.root / self.SKILLS_DIRNAME
        self._manifest = SkillManifest()
        self._index: dict[str, SkillEntry] = {}

    def load(self) -> SkillManifest:
        """Load the manifest from disk.

        A missing manifest yields an empty one. A corrupt manifest is an
        error and is never silently replaced.

        Returns:
            The loaded manifest

        Raises:
            ManifestError: If the manifest exists but is invalid
        """
        if not self.manifest_path.exists():
            logger.debug("No manifest at %s, starting empty", self.manifest_path)
            self._manifest = SkillManifest()
        else:
            self._manifest = load_manifest(self.manifest_path)
            logger.debug(
                "Loaded %d skill(s) from %s",
                len(self._manifest.skills),
                self.manifest_path,
            )
        self._reindex()
        return self._manifest

    def save(self) -> None:
        """Save the manifest to disk.

        Creates the root directory if it doesn't exist.
        """
        dump_manifest(self._manifest, self.manifest_path)
        logger.debug("Saved manifest to %s", self.manifest_path)

    def _reindex(self) -> None:
        self._index = {entry.id: entry for entry in self._manifest.skills}

    @property
    def manifest(self) -> SkillManifest:
        return self._manifest

    def __len__(self) -> int:
        return len(self._manifest.skills)

    def list_skills(
        self, tag: Optional[str] = None, verified_only: bool = False
    ) -> list[SkillEntry]:
        """Get the manifest entries in manifest order.

        Args:
            tag: Only return entries carrying this tag (case-insensitive)
            verified_only: Only return entries that passed review

        Returns:
            A list of matching entries
        """
        entries = self._manifest.skills
        if tag:
            wanted = tag.strip().lower()
            entries = [e for e in entries if wanted in e.tags]
        if verified_only:
            entries = [e for e in entries if e.verified]
        return list(entries)

    def get_skill(self, skill_id: str) -> SkillEntry:
        """Get a skill's manifest entry.

        Args:
            skill_id: The id of the skill to retrieve

        Returns:
            The manifest entry

        Raises:
            SkillNotFoundError: If no entry has this id
        """
        try:
            return self._index[skill_id]
        except KeyError:
            raise SkillNotFoundError(skill_id) from None

    def has_skill(self, skill_id: str) -> bool:
        """Check if a skill id is in the manifest."""
        return skill_id in self._index

    def add_skill(self, entry: SkillEntry) -> None:
        """Append a new entry to the manifest.

        Args:
            entry: The entry to append

        Raises:
            DuplicateSkillError: If the id is already in the manifest
        """
        if entry.id in self._index:
            raise DuplicateSkillError(entry.id)
        self._manifest.skills.append(entry)
        self._index[entry.id] = entry
        logger.info("Added skill '%s'", entry.id)

    def verify_skill(self, skill_id: str) -> SkillEntry:
        """Mark a skill as verified after review.

        Args:
            skill_id: The id of the skill to verify

        Returns:
            The updated entry

        Raises:
            SkillNotFoundError: If no entry has this id
        """
        entry = self.get_skill(skill_id)
        if not entry.verified:
            entry.verified = True
            logger.info("Verified skill '%s'", skill_id)
        return entry

    def skill_path(self, skill_id: str) -> Path:
        """Get the local SKILL.md path for a skill id."""
        return self.skills_dir / skill_id / self.SKILL_FILENAME

    def search(self, query: str) -> list[SkillEntry]:
        """Find entries whose id, name, description or tags contain query.

        Args:
            query: Case-insensitive substring

        Returns:
            Matching entries in manifest order
        """
        needle = query.strip().lower()
        if not needle:
            return self.list_skills()

        results = []
        for entry in self._manifest.skills:
            haystack = [entry.id, entry.name, entry.description, *entry.tags]
            if any(needle in text.lower() for text in haystack):
                results.append(entry)
        return results

    def validate(self, check_content: bool = True) -> ValidationReport:
        """Check the registry on disk without raising.

        Re-reads the manifest, so duplicate ids and schema problems are
        reported rather than raised. With check_content, every entry must
        have a local SKILL.md whose frontmatter name (if any) matches its
        id, and directories under skills/ must belong to an entry.

        Args:
            check_content: Also check the skills/ directory

        Returns:
            ValidationReport listing every problem found
        """
        report = ValidationReport()

        if not self.manifest_path.exists():
            report.error(f"Manifest not found: {self.manifest_path}")
            return report

        try:
            manifest = load_manifest(self.manifest_path)
        except ManifestError as e:
            report.error(str(e))
            return report

        report.checked = len(manifest.skills)
        if not check_content:
            return report

        for entry in manifest.skills:
            path = self.skill_path(entry.id)
            if not path.is_file():
                report.error(f"Missing {path.relative_to(self.root)}", entry.id)
                continue

            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                report.error(f"Unreadable {path.name}: {e}", entry.id)
                continue

            if not content.strip():
                report.error(f"{path.name} is empty", entry.id)
                continue

            metadata, _ = parse_front_matter(content)
            if metadata is not None and metadata.name != entry.id:
                report.warning(
                    f"Frontmatter name '{metadata.name}' does not match id",
                    entry.id,
                )

        if self.skills_dir.is_dir():
            known = {entry.id for entry in manifest.skills}
            for child in sorted(self.skills_dir.iterdir()):
                if child.is_dir() and child.name not in known:
                    report.warning(
                        f"Directory skills/{child.name} has no manifest entry"
                    )

        return report
