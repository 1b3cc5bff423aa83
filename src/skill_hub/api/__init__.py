"""HTTP and MCP facades over the skill service."""

from skill_hub.api.http import create_app
from skill_hub.api.mcp import create_mcp_server

__all__ = ["create_app", "create_mcp_server"]
