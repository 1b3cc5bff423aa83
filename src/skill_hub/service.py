"""Skill lookup service shared by the CLI, HTTP API and MCP server.

For each lookup it:
1. Finds the manifest entry (unknown ids raise SkillNotFoundError)
2. Picks a content source according to the configured mode
3. Reads the local SKILL.md, or fetches the entry URL through the cache
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

from skill_hub.compose.context import compose_task_prompt
from skill_hub.config.schema import ContentMode, SkillHubConfig
from skill_hub.core.exceptions import ContentNotFoundError, FetchError
from skill_hub.core.manifest import SkillEntry
from skill_hub.core.registry import SkillRegistry
from skill_hub.core.resolver import resolve_content_url
from skill_hub.core.skill import SkillDocument
from skill_hub.fetch.cache import ContentCache
from skill_hub.fetch.local import LocalFetcher
from skill_hub.fetch.protocols import ContentFetcher
from skill_hub.fetch.remote import RemoteFetcher
from skill_hub.utils.paths import expand_path

logger = logging.getLogger(__name__)


class SkillService:
    """Lists manifest entries and retrieves skill markdown by id."""

    def __init__(
        self,
        registry: SkillRegistry,
        local: Optional[LocalFetcher] = None,
        remote: Optional[ContentFetcher] = None,
        cache: Optional[ContentCache] = None,
        mode: ContentMode = ContentMode.AUTO,
    ):
        """Initialize the service.

        Args:
            registry: Loaded skill registry
            local: Fetcher for skills/<id>/SKILL.md (defaults to the registry root)
            remote: Fetcher for entry URLs (defaults to RemoteFetcher)
            cache: Optional cache for remote fetches
            mode: Content source selection
        """
        self.registry = registry
        self.local = local or LocalFetcher(registry.root)
        self.remote = remote or RemoteFetcher()
        self.cache = cache
        self.mode = ContentMode(mode)

    @classmethod
    def from_config(
        cls,
        config: SkillHubConfig,
        root: Optional[Path] = None,
        github_token: Optional[str] = None,
    ) -> "SkillService":
        """Build a service from configuration and load the manifest.

        Args:
            config: Validated configuration
            root: Registry root overriding config.registry.root
            github_token: Optional token for GitHub-hosted content

        Returns:
            Ready-to-use SkillService

        Raises:
            ManifestError: If the manifest is invalid
        """
        registry_root = root if root is not None else expand_path(config.registry.root)
        registry = SkillRegistry(registry_root, manifest_name=config.registry.manifest)
        registry.load()

        cache = None
        if config.cache.enabled:
            cache = ContentCache(
                expand_path(config.cache.dir), ttl_seconds=config.cache.ttl_seconds
            )

        return cls(
            registry,
            remote=RemoteFetcher(token=github_token),
            cache=cache,
            mode=config.registry.mode,
        )

    def reload(self) -> None:
        """Re-read the manifest from disk."""
        self.registry.load()

    def list_skills(
        self, tag: Optional[str] = None, verified_only: bool = False
    ) -> list[dict[str, Any]]:
        """List manifest entries as JSON-ready dicts (camelCase keys)."""
        return [
            entry.to_dict()
            for entry in self.registry.list_skills(tag=tag, verified_only=verified_only)
        ]

    def manifest(self) -> dict[str, Any]:
        """Return the whole manifest as a JSON-ready dict."""
        return self.registry.manifest.to_dict()

    async def get_document(
        self, skill_id: str, force_refresh: bool = False
    ) -> SkillDocument:
        """Retrieve the SKILL.md of a skill.

        Args:
            skill_id: Manifest id
            force_refresh: Bypass the cache for remote content

        Returns:
            SkillDocument with the raw markdown

        Raises:
            SkillNotFoundError: If the id is not in the manifest
            ContentNotFoundError: If the document does not exist
            FetchError: If the document cannot be retrieved
        """
        entry = self.registry.get_skill(skill_id)
        return await self._fetch_entry(entry, force_refresh)

    async def get_skill(self, skill_id: str, force_refresh: bool = False) -> str:
        """Retrieve the raw markdown of a skill."""
        document = await self.get_document(skill_id, force_refresh=force_refresh)
        return document.content

    async def get_skills(
        self, skill_ids: list[str], force_refresh: bool = False
    ) -> list[SkillDocument]:
        """Retrieve several skills concurrently, in the order requested.

        Every id is looked up before anything is fetched, so an unknown id
        fails the whole call without network traffic. Repeated ids are
        fetched once.

        Raises:
            SkillNotFoundError: If any id is not in the manifest
        """
        unique_ids = list(dict.fromkeys(skill_ids))
        entries = [self.registry.get_skill(skill_id) for skill_id in unique_ids]

        return list(
            await asyncio.gather(
                *(self._fetch_entry(entry, force_refresh) for entry in entries)
            )
        )

    async def compose_task(self, prompt: str, skill_ids: list[str]) -> str:
        """Build a task prompt with the requested skills injected ahead of it."""
        documents = await self.get_skills(skill_ids)
        return compose_task_prompt(prompt, documents)

    async def _fetch_entry(
        self, entry: SkillEntry, force_refresh: bool
    ) -> SkillDocument:
        if self.mode == ContentMode.REMOTE:
            return await self._fetch_url(entry, force_refresh)

        if self.local.exists(entry):
            return await self.local.fetch(entry)

        if self.mode == ContentMode.LOCAL:
            if entry.url.startswith("file:"):
                return await self._fetch_url(entry, force_refresh)
            raise ContentNotFoundError(
                f"No local SKILL.md for '{entry.id}' at {self.local.path_for(entry.id)}"
            )

        logger.debug("No local copy of '%s', falling back to %s", entry.id, entry.url)
        return await self._fetch_url(entry, force_refresh)

    async def _fetch_url(self, entry: SkillEntry, force_refresh: bool) -> SkillDocument:
        try:
            location = resolve_content_url(entry.url)
        except ValueError as e:
            raise FetchError(str(e)) from e

        if location.type == "local" and location.local_path is not None:
            return await self.local.read_path(entry.id, location.local_path)

        if self.cache is not None and not force_refresh:
            cached = self.cache.get(entry.id, entry.url)
            if cached:
                logger.debug("Using cached copy of '%s'", entry.id)
                return cached

        logger.info("Fetching '%s' from %s", entry.id, location.url)
        document = await self.remote.fetch(entry)

        if self.cache is not None:
            try:
                self.cache.put(document, entry.url)
            except OSError as e:
                # Caching failed - log but don't fail the lookup
                logger.warning("Failed to cache '%s': %s", entry.id, e)

        return document
