"""Shared pytest fixtures for skill-hub tests."""

import json

import pytest


DOCKER_SKILL = """---
name: docker
description: Docker best practices
---

# Docker

Use multi-stage builds and pin base image digests.
"""

CACHING_SKILL = """# Caching

Set explicit TTLs and never cache authenticated responses publicly.
"""


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def manifest_entries():
    """Provide raw manifest entries as they appear in skills.json."""
    return [
        {
            "id": "docker",
            "name": "Docker",
            "description": "Docker best practices",
            "url": "https://github.com/acme/skills/blob/main/skills/docker/SKILL.md",
            "author": "acme",
            "verified": True,
            "tags": ["devops", "containers"],
            "addedAt": "2024-05-01",
        },
        {
            "id": "caching",
            "name": "Caching",
            "description": "HTTP and application caching",
            "url": "https://example.com/skills/caching/SKILL.md",
            "author": "jdoe",
            "verified": False,
            "tags": ["performance"],
            "addedAt": "2024-06-12",
        },
        {
            "id": "rate-limiting",
            "name": "Rate Limiting",
            "description": "Token buckets and sliding windows",
            "url": "https://example.com/skills/rate-limiting/SKILL.md",
            "author": "jdoe",
            "verified": False,
            "tags": ["performance", "api"],
            "addedAt": "2024-07-03",
        },
    ]


@pytest.fixture
def registry_root(tmp_path, manifest_entries):
    """Create a registry root with skills.json and local SKILL.md files.

    docker and caching have local documents; rate-limiting is remote only.
    """
    root = tmp_path / "registry"
    root.mkdir()
    (root / "skills.json").write_text(
        json.dumps({"version": "1.0", "skills": manifest_entries}, indent=2)
    )

    docker_dir = root / "skills" / "docker"
    docker_dir.mkdir(parents=True)
    (docker_dir / "SKILL.md").write_text(DOCKER_SKILL)

    caching_dir = root / "skills" / "caching"
    caching_dir.mkdir(parents=True)
    (caching_dir / "SKILL.md").write_text(CACHING_SKILL)

    return root


@pytest.fixture
def cache_dir(tmp_path):
    """Provide a temporary cache directory."""
    return tmp_path / "cache"
