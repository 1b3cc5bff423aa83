"""Tests for the skill lookup service."""

import httpx
import pytest
import respx

from skill_hub.config.schema import ContentMode, SkillHubConfig
from skill_hub.core.exceptions import ContentNotFoundError, SkillNotFoundError
from skill_hub.core.manifest import SkillEntry
from skill_hub.core.registry import SkillRegistry
from skill_hub.fetch.cache import ContentCache
from skill_hub.service import SkillService

RATE_LIMITING_URL = "https://example.com/skills/rate-limiting/SKILL.md"
RAW_DOCKER_URL = "https://raw.githubusercontent.com/acme/skills/main/skills/docker/SKILL.md"


@pytest.fixture
def registry(registry_root):
    registry = SkillRegistry(registry_root)
    registry.load()
    return registry


@pytest.fixture
def service(registry, cache_dir):
    return SkillService(registry, cache=ContentCache(cache_dir))


class TestListing:
    """Test manifest listing."""

    def test_list_skills(self, service):
        skills = service.list_skills()
        assert [s["id"] for s in skills] == ["docker", "caching", "rate-limiting"]
        assert skills[0]["addedAt"] == "2024-05-01"
        assert skills[0]["verified"] is True

    def test_list_filters(self, service):
        assert [s["id"] for s in service.list_skills(tag="api")] == ["rate-limiting"]
        assert [s["id"] for s in service.list_skills(verified_only=True)] == ["docker"]

    def test_manifest(self, service):
        manifest = service.manifest()
        assert manifest["version"] == "1.0"
        assert len(manifest["skills"]) == 3


@pytest.mark.anyio
class TestGetSkill:
    """Test content retrieval."""

    async def test_local_preferred(self, service):
        with respx.mock(assert_all_called=False) as router:
            route = router.get(RAW_DOCKER_URL)
            content = await service.get_skill("docker")
        assert "multi-stage builds" in content
        assert not route.called

    async def test_unknown_id(self, service):
        with pytest.raises(SkillNotFoundError):
            await service.get_skill("kubernetes")

    @respx.mock
    async def test_remote_fallback_and_cache(self, service):
        route = respx.get(RATE_LIMITING_URL).mock(
            return_value=httpx.Response(200, text="# Rate limiting\n")
        )

        first = await service.get_document("rate-limiting")
        second = await service.get_document("rate-limiting")

        assert first.content == "# Rate limiting\n"
        assert first.from_cache is False
        assert second.from_cache is True
        assert route.call_count == 1

    @respx.mock
    async def test_force_refresh_bypasses_cache(self, service):
        route = respx.get(RATE_LIMITING_URL).mock(
            return_value=httpx.Response(200, text="# Rate limiting\n")
        )

        await service.get_skill("rate-limiting")
        await service.get_skill("rate-limiting", force_refresh=True)

        assert route.call_count == 2

    @respx.mock
    async def test_without_cache(self, registry):
        route = respx.get(RATE_LIMITING_URL).mock(
            return_value=httpx.Response(200, text="# Rate limiting\n")
        )
        service = SkillService(registry)

        await service.get_skill("rate-limiting")
        await service.get_skill("rate-limiting")

        assert route.call_count == 2

    async def test_local_mode_never_fetches(self, registry):
        service = SkillService(registry, mode=ContentMode.LOCAL)
        with pytest.raises(ContentNotFoundError, match="No local SKILL.md"):
            await service.get_skill("rate-limiting")

    async def test_local_mode_reads_file_url(self, registry, tmp_path):
        doc = tmp_path / "outside" / "SKILL.md"
        doc.parent.mkdir()
        doc.write_text("# Outside\n")
        registry.add_skill(
            SkillEntry.create(
                id="outside",
                name="Outside",
                description="d",
                url=doc.as_uri(),
                author="acme",
            )
        )
        service = SkillService(registry, mode=ContentMode.LOCAL)

        assert await service.get_skill("outside") == "# Outside\n"

    @respx.mock
    async def test_remote_mode_ignores_local_copy(self, registry, cache_dir):
        respx.get(RAW_DOCKER_URL).mock(
            return_value=httpx.Response(200, text="# Docker upstream\n")
        )
        service = SkillService(registry, cache=ContentCache(cache_dir), mode="remote")

        assert await service.get_skill("docker") == "# Docker upstream\n"


@pytest.mark.anyio
class TestGetSkills:
    """Test multi-skill retrieval."""

    @respx.mock
    async def test_order_kept_and_deduplicated(self, service):
        respx.get(RATE_LIMITING_URL).mock(
            return_value=httpx.Response(200, text="# Rate limiting\n")
        )

        documents = await service.get_skills(["rate-limiting", "docker", "rate-limiting"])
        assert [d.id for d in documents] == ["rate-limiting", "docker"]

    @respx.mock
    async def test_unknown_id_fails_before_fetching(self, service):
        route = respx.get(RATE_LIMITING_URL).mock(
            return_value=httpx.Response(200, text="# Rate limiting\n")
        )

        with pytest.raises(SkillNotFoundError):
            await service.get_skills(["rate-limiting", "nope"])
        assert not route.called

    async def test_compose_task(self, service):
        prompt = await service.compose_task("Write a Dockerfile", ["docker"])
        assert "<!-- SKILL: docker -->" in prompt
        assert "name: docker" not in prompt
        assert prompt.endswith("Write a Dockerfile")


class TestFromConfig:
    """Test building the service from configuration."""

    def test_from_config(self, registry_root, cache_dir):
        config = SkillHubConfig(
            version="1.0",
            registry={"root": str(registry_root), "mode": "local"},
            cache={"dir": str(cache_dir), "ttl_seconds": 60},
        )

        service = SkillService.from_config(config, github_token="ghp_test")

        assert len(service.registry) == 3
        assert service.mode == ContentMode.LOCAL
        assert service.cache.ttl_seconds == 60
        assert service.remote.token == "ghp_test"

    def test_cache_disabled(self, registry_root, tmp_path):
        config = SkillHubConfig(version="1.0", cache={"enabled": False})
        service = SkillService.from_config(config, root=registry_root)
        assert service.cache is None
        assert service.registry.root == registry_root
