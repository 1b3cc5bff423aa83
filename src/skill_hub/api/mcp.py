"""MCP server exposing list_skills and get_skill tools.

Agents connected over the Model Context Protocol can discover the skill
catalog and pull a skill's markdown into their context on demand. The
server runs over stdio by default, so nothing but protocol traffic may be
written to stdout; logging goes to stderr.
"""

import logging
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from skill_hub.core.exceptions import FetchError, SkillNotFoundError
from skill_hub.service import SkillService

logger = logging.getLogger(__name__)

SERVER_NAME = "skill-hub"

INSTRUCTIONS = (
    "Curated Markdown skills encoding domain best practices for code generation.\n"
    "- list_skills(tag?, verified_only?): manifest entries (id, name, description, "
    "url, author, verified, tags, addedAt)\n"
    "- get_skill(id): raw SKILL.md markdown for one skill id\n"
    "Call list_skills first, then load only the skills relevant to the task."
)


def create_mcp_server(service: SkillService) -> FastMCP:
    """Create the MCP server backed by a SkillService.

    Args:
        service: Service used to answer tool calls

    Returns:
        FastMCP server with the list_skills and get_skill tools registered
    """
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool
    def list_skills(
        tag: Optional[str] = None, verified_only: bool = False
    ) -> list[dict[str, Any]]:
        """List available skills from the manifest.

        Args:
            tag: Only return skills with this tag
            verified_only: Only return skills that passed human review
        """
        return service.list_skills(tag=tag, verified_only=verified_only)

    @mcp.tool
    async def get_skill(id: str) -> str:
        """Return the raw SKILL.md markdown for a skill id."""
        try:
            return await service.get_skill(id)
        except SkillNotFoundError as e:
            raise ToolError(str(e)) from e
        except FetchError as e:
            logger.error("Failed to load skill '%s': %s", id, e)
            raise ToolError(str(e)) from e

    return mcp


def run_mcp_server(service: SkillService, transport: str = "stdio") -> None:
    """Run the MCP server until the client disconnects."""
    logger.info(
        "Starting MCP server with %d skill(s) from %s",
        len(service.registry),
        service.registry.root,
    )
    create_mcp_server(service).run(transport=transport)
