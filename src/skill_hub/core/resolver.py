"""Resolver for skill content URLs.

This module provides functionality to:
- Rewrite GitHub page URLs (blob/tree) into raw content URLs
- Turn file:// URLs into local paths
- Pass other http(s) URLs through unchanged
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import unquote, urlparse

GITHUB_HOSTS = ("github.com", "www.github.com")
GITHUB_RAW_HOST = "raw.githubusercontent.com"
SKILL_FILENAME = "SKILL.md"


@dataclass
class ResolvedLocation:
    """A skill document location ready for fetching.

    Attributes:
        type: "http" for network locations, "local" for file:// URLs
        url: Fetchable URL (for http locations)
        local_path: Filesystem path (for local locations)
        github: Whether the URL is served by GitHub
    """
    type: Literal["http", "local"]
    url: Optional[str] = None
    local_path: Optional[Path] = None
    github: bool = False


def parse_github_url(url: str) -> str:
    """Rewrite a github.com page URL into a raw.githubusercontent.com URL.

    Handles these GitHub URL formats:
    - https://github.com/owner/repo/blob/main/skills/docker/SKILL.md
    - https://github.com/owner/repo/tree/main/skills/docker (SKILL.md appended)
    - https://github.com/owner/repo (SKILL.md at the default branch root)

    Args:
        url: GitHub URL to rewrite

    Returns:
        Raw content URL for the SKILL.md

    Raises:
        ValueError: If URL is not a valid GitHub URL
    """
    parsed = urlparse(url)

    if parsed.netloc not in GITHUB_HOSTS:
        raise ValueError(f"Not a GitHub URL: {url}")

    path_parts = [p for p in parsed.path.split("/") if p]

    if len(path_parts) < 2:
        raise ValueError(f"Invalid GitHub URL format: {url}. Expected owner/repo at minimum")

    owner, repo = path_parts[0], path_parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]

    ref = "HEAD"
    rest: list[str] = []
    if len(path_parts) >= 4 and path_parts[2] in ("blob", "tree", "raw"):
        ref = path_parts[3]
        rest = path_parts[4:]
    elif len(path_parts) > 2:
        raise ValueError(f"Unsupported GitHub URL format: {url}")

    if not rest or not rest[-1].lower().endswith(".md"):
        rest.append(SKILL_FILENAME)

    return f"https://{GITHUB_RAW_HOST}/{owner}/{repo}/{ref}/{'/'.join(rest)}"


def resolve_content_url(url: str) -> ResolvedLocation:
    """Resolve a manifest URL to a fetchable location.

    Args:
        url: The url field of a manifest entry

    Returns:
        ResolvedLocation with location details

    Raises:
        ValueError: If the URL cannot be resolved
    """
    parsed = urlparse(url)

    if parsed.scheme == "file":
        return ResolvedLocation(type="local", local_path=Path(unquote(parsed.path)))

    if parsed.scheme not in ("http", "https"):
        raise ValueError(f"Unsupported URL scheme: {url}")

    if parsed.netloc in GITHUB_HOSTS:
        return ResolvedLocation(type="http", url=parse_github_url(url), github=True)

    return ResolvedLocation(
        type="http", url=url, github=parsed.netloc == GITHUB_RAW_HOST
    )
