"""Cache for fetched skill documents with TTL-based expiration."""

import hashlib
import json
import logging
import shutil
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

from skill_hub.core.skill import SkillDocument
from skill_hub.utils.paths import ensure_dir, expand_path

logger = logging.getLogger(__name__)


class ContentCache:
    """Cache for fetched skill documents with TTL-based expiration.

    Documents are cached by (id, url) and stored in individual directories
    under the cache root. Each cached document includes metadata about when
    it was cached and where it came from, so a manifest URL change is a
    cache miss.
    """

    METADATA_FILE = ".cache-metadata.json"
    CONTENT_FILE = "SKILL.md"

    def __init__(self, cache_dir: Path, ttl_seconds: int = 86400):
        """Initialize content cache.

        Args:
            cache_dir: Root directory for the cache (e.g., ~/.cache/skill-hub)
            ttl_seconds: Time-to-live in seconds for cached documents (default: 24 hours)
        """
        self.cache_dir = expand_path(str(cache_dir))
        self.ttl_seconds = ttl_seconds
        ensure_dir(self.cache_dir)

    def get_cache_key(self, skill_id: str, url: str) -> str:
        """Generate a unique cache key for a skill document.

        Args:
            skill_id: Manifest id of the skill
            url: URL the document was fetched from

        Returns:
            Unique cache key string (readable id prefix plus hash)
        """
        identifier = f"{skill_id}@{url}"
        hash_digest = hashlib.sha256(identifier.encode()).hexdigest()[:16]
        return f"{skill_id}-{hash_digest}"

    def get(self, skill_id: str, url: str) -> Optional[SkillDocument]:
        """Retrieve a cached document if it exists and hasn't expired.

        Args:
            skill_id: Manifest id of the skill
            url: URL of the document

        Returns:
            SkillDocument if cached and valid, None otherwise
        """
        cache_path = self.cache_dir / self.get_cache_key(skill_id, url)

        if not cache_path.is_dir():
            return None

        if self.is_expired(cache_path):
            logger.debug("Cache entry for '%s' expired", skill_id)
            shutil.rmtree(cache_path, ignore_errors=True)
            return None

        try:
            metadata = json.loads((cache_path / self.METADATA_FILE).read_text())
            if metadata.get("id") != skill_id or metadata.get("url") != url:
                logger.debug("Cache entry for '%s' does not match its key", skill_id)
                shutil.rmtree(cache_path, ignore_errors=True)
                return None
            content = (cache_path / self.CONTENT_FILE).read_text(encoding="utf-8")
        except (json.JSONDecodeError, OSError, UnicodeDecodeError):
            return None

        return SkillDocument(id=skill_id, content=content, origin=url, from_cache=True)

    def put(self, document: SkillDocument, url: str) -> None:
        """Cache a fetched document.

        Args:
            document: The document to cache
            url: URL it was fetched from

        Raises:
            OSError: If caching fails
        """
        cache_path = self.cache_dir / self.get_cache_key(document.id, url)

        if cache_path.exists():
            shutil.rmtree(cache_path, ignore_errors=True)
        ensure_dir(cache_path)

        (cache_path / self.CONTENT_FILE).write_text(document.content, encoding="utf-8")

        metadata = {
            "cached_at": datetime.now(timezone.utc).isoformat(),
            "id": document.id,
            "url": url,
        }
        (cache_path / self.METADATA_FILE).write_text(json.dumps(metadata, indent=2))

    def is_expired(self, cache_path: Path) -> bool:
        """Check if a cached document has expired.

        Args:
            cache_path: Path to the cached document directory

        Returns:
            True if expired or invalid, False otherwise
        """
        metadata_path = cache_path / self.METADATA_FILE
        if not metadata_path.exists():
            return True

        try:
            metadata = json.loads(metadata_path.read_text())
            cached_at_str = metadata.get("cached_at")
            if not cached_at_str:
                return True

            cached_at = datetime.fromisoformat(cached_at_str)

            # Handle naive datetimes by assuming UTC
            if cached_at.tzinfo is None:
                cached_at = cached_at.replace(tzinfo=timezone.utc)

            age = datetime.now(timezone.utc) - cached_at
            return age > timedelta(seconds=self.ttl_seconds)

        except (json.JSONDecodeError, ValueError, OSError):
            return True

    def clear(self) -> int:
        """Remove all cached documents.

        Returns:
            Number of entries removed
        """
        removed = 0
        if self.cache_dir.exists():
            for item in self.cache_dir.iterdir():
                if item.is_dir():
                    shutil.rmtree(item, ignore_errors=True)
                    removed += 1
                elif item.is_file():
                    item.unlink(missing_ok=True)
        return removed
