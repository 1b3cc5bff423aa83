"""Composition of skill documents into task prompts."""

from skill_hub.compose.context import compose_skill_context, compose_task_prompt

__all__ = ["compose_skill_context", "compose_task_prompt"]
