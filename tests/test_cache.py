"""Tests for the content cache."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from skill_hub.core.skill import SkillDocument
from skill_hub.fetch.cache import ContentCache

URL = "https://example.com/skills/caching/SKILL.md"


@pytest.fixture
def document():
    return SkillDocument(id="caching", content="# Caching\n", origin=URL)


class TestContentCache:
    """Test ContentCache functionality."""

    def test_init(self, cache_dir):
        cache = ContentCache(cache_dir)
        assert cache.cache_dir == cache_dir
        assert cache.ttl_seconds == 86400
        assert cache_dir.exists()

    def test_cache_key(self, cache_dir):
        cache = ContentCache(cache_dir)
        key = cache.get_cache_key("caching", URL)
        assert key.startswith("caching-")
        assert key == cache.get_cache_key("caching", URL)
        assert key != cache.get_cache_key("caching", URL + "?v=2")

    def test_miss(self, cache_dir):
        assert ContentCache(cache_dir).get("caching", URL) is None

    def test_put_and_get(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)

        cached = cache.get("caching", URL)
        assert cached is not None
        assert cached.content == "# Caching\n"
        assert cached.from_cache is True
        assert cached.origin == URL

    def test_url_change_is_miss(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)
        assert cache.get("caching", "https://example.com/other/SKILL.md") is None

    def test_mismatched_entry_removed(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)

        entry_dir = cache_dir / cache.get_cache_key("caching", URL)
        metadata_path = entry_dir / ContentCache.METADATA_FILE
        metadata = json.loads(metadata_path.read_text())
        metadata["url"] = "https://example.com/other/SKILL.md"
        metadata_path.write_text(json.dumps(metadata))

        assert cache.get("caching", URL) is None
        assert not entry_dir.exists()

    def test_expired_entry_removed(self, cache_dir, document):
        cache = ContentCache(cache_dir, ttl_seconds=60)
        cache.put(document, URL)

        entry_dir = cache_dir / cache.get_cache_key("caching", URL)
        metadata_path = entry_dir / ContentCache.METADATA_FILE
        metadata = json.loads(metadata_path.read_text())
        metadata["cached_at"] = (
            datetime.now(timezone.utc) - timedelta(seconds=120)
        ).isoformat()
        metadata_path.write_text(json.dumps(metadata))

        assert cache.get("caching", URL) is None
        assert not entry_dir.exists()

    def test_naive_timestamp_treated_as_utc(self, cache_dir, document):
        cache = ContentCache(cache_dir, ttl_seconds=3600)
        cache.put(document, URL)

        entry_dir = cache_dir / cache.get_cache_key("caching", URL)
        metadata_path = entry_dir / ContentCache.METADATA_FILE
        metadata = json.loads(metadata_path.read_text())
        metadata["cached_at"] = datetime.now(timezone.utc).replace(tzinfo=None).isoformat()
        metadata_path.write_text(json.dumps(metadata))

        assert cache.get("caching", URL) is not None

    def test_corrupt_metadata_is_miss(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)
        entry_dir = cache_dir / cache.get_cache_key("caching", URL)
        (entry_dir / ContentCache.METADATA_FILE).write_text("{broken")

        assert cache.is_expired(entry_dir)
        assert cache.get("caching", URL) is None

    def test_put_overwrites(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)
        cache.put(SkillDocument(id="caching", content="# New\n", origin=URL), URL)
        assert cache.get("caching", URL).content == "# New\n"

    def test_clear(self, cache_dir, document):
        cache = ContentCache(cache_dir)
        cache.put(document, URL)
        cache.put(SkillDocument(id="docker", content="# Docker\n", origin=URL), URL)

        assert cache.clear() == 2
        assert list(cache_dir.iterdir()) == []
