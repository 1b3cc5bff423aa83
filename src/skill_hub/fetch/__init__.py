"""Skill content fetching from disk and remote URLs."""

from skill_hub.fetch.cache import ContentCache
from skill_hub.fetch.local import LocalFetcher
from skill_hub.fetch.protocols import ContentFetcher
from skill_hub.fetch.remote import RemoteFetcher

__all__ = ["ContentCache", "ContentFetcher", "LocalFetcher", "RemoteFetcher"]
