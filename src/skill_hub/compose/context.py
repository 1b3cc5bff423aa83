"""Task prompt composition with skill markers."""

from skill_hub.core.skill import SkillDocument


def compose_skill_context(documents: list[SkillDocument]) -> str:
    """Concatenate skill documents, each wrapped in id markers.

    Frontmatter is stripped; documents keep the order given.

    Args:
        documents: Skill documents to inject

    Returns:
        The composed context block, or an empty string when there are none
    """
    parts = []

    for document in documents:
        body = document.body.strip()
        if not body:
            continue
        parts.append(
            "\n".join(
                [
                    _create_skill_start_marker(document.id),
                    body,
                    _create_skill_end_marker(document.id),
                ]
            )
        )

    return "\n\n".join(parts)


def compose_task_prompt(prompt: str, documents: list[SkillDocument]) -> str:
    """Build the full prompt for a task: skill context first, then the prompt.

    Args:
        prompt: The user's task prompt
        documents: Skill documents requested for the task

    Returns:
        The prompt unchanged when no skill has content, else context + prompt
    """
    context = compose_skill_context(documents)
    if not context:
        return prompt

    return "\n\n".join(
        [
            "<!-- SKILLS: follow these guidelines when completing the task below -->",
            context,
            "<!-- TASK -->",
            prompt,
        ]
    )


def _create_skill_start_marker(skill_id: str) -> str:
    return f"<!-- SKILL: {skill_id} -->"


def _create_skill_end_marker(skill_id: str) -> str:
    return f"<!-- END SKILL: {skill_id} -->"
