"""Tests for content URL resolution."""

from pathlib import Path

import pytest

from skill_hub.core.resolver import parse_github_url, resolve_content_url


class TestParseGithubUrl:
    """Test GitHub URL rewriting."""

    def test_blob_url(self):
        url = "https://github.com/acme/skills/blob/main/skills/docker/SKILL.md"
        assert parse_github_url(url) == (
            "https://raw.githubusercontent.com/acme/skills/main/skills/docker/SKILL.md"
        )

    def test_tree_url_appends_skill_file(self):
        url = "https://github.com/acme/skills/tree/v1.0/skills/docker"
        assert parse_github_url(url) == (
            "https://raw.githubusercontent.com/acme/skills/v1.0/skills/docker/SKILL.md"
        )

    def test_repo_url(self):
        assert parse_github_url("https://github.com/acme/docker-skill.git") == (
            "https://raw.githubusercontent.com/acme/docker-skill/HEAD/SKILL.md"
        )

    def test_trailing_slash(self):
        url = "https://github.com/acme/skills/tree/main/skills/docker/"
        assert parse_github_url(url).endswith("/main/skills/docker/SKILL.md")

    def test_not_github(self):
        with pytest.raises(ValueError, match="Not a GitHub URL"):
            parse_github_url("https://gitlab.com/acme/skills")

    def test_missing_repo(self):
        with pytest.raises(ValueError, match="owner/repo"):
            parse_github_url("https://github.com/acme")

    def test_unsupported_layout(self):
        with pytest.raises(ValueError, match="Unsupported"):
            parse_github_url("https://github.com/acme/skills/issues/1")


class TestResolveContentUrl:
    """Test resolve_content_url."""

    def test_github_page(self):
        location = resolve_content_url("https://github.com/acme/skills/blob/main/SKILL.md")
        assert location.type == "http"
        assert location.github is True
        assert location.url == "https://raw.githubusercontent.com/acme/skills/main/SKILL.md"

    def test_raw_github(self):
        url = "https://raw.githubusercontent.com/acme/skills/main/SKILL.md"
        location = resolve_content_url(url)
        assert location.url == url
        assert location.github is True

    def test_plain_https(self):
        url = "https://example.com/skills/caching/SKILL.md"
        location = resolve_content_url(url)
        assert location.url == url
        assert location.github is False

    def test_file_url(self):
        location = resolve_content_url("file:///srv/skills/my%20skill/SKILL.md")
        assert location.type == "local"
        assert location.local_path == Path("/srv/skills/my skill/SKILL.md")

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError):
            resolve_content_url("ftp://example.com/SKILL.md")
