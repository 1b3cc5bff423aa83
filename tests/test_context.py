"""Tests for task prompt composition."""

from skill_hub.compose.context import compose_skill_context, compose_task_prompt
from skill_hub.core.skill import SkillDocument


def doc(skill_id, content):
    return SkillDocument(id=skill_id, content=content, origin="test")


class TestComposeSkillContext:
    """Test compose_skill_context."""

    def test_markers_and_order(self):
        context = compose_skill_context(
            [doc("caching", "# Caching\n"), doc("docker", "# Docker\n")]
        )
        assert context == (
            "<!-- SKILL: caching -->\n# Caching\n<!-- END SKILL: caching -->\n\n"
            "<!-- SKILL: docker -->\n# Docker\n<!-- END SKILL: docker -->"
        )

    def test_frontmatter_stripped(self):
        context = compose_skill_context(
            [doc("docker", "---\nname: docker\n---\n\n# Docker\n")]
        )
        assert "name: docker" not in context
        assert "# Docker" in context

    def test_empty_documents_skipped(self):
        assert compose_skill_context([doc("empty", "---\nname: empty\n---\n\n")]) == ""


class TestComposeTaskPrompt:
    """Test compose_task_prompt."""

    def test_no_skills(self):
        assert compose_task_prompt("Add rate limiting", []) == "Add rate limiting"

    def test_with_skills(self):
        prompt = compose_task_prompt("Add rate limiting", [doc("rate-limiting", "# RL\n")])
        assert prompt.startswith("<!-- SKILLS:")
        assert prompt.index("<!-- SKILL: rate-limiting -->") < prompt.index("<!-- TASK -->")
        assert prompt.endswith("<!-- TASK -->\n\nAdd rate limiting")
