"""Logging setup shared by the CLI, HTTP server and MCP server."""

import logging

from rich.logging import RichHandler

from skill_hub.utils.output import err_console

LOG_FORMAT = "%(name)s: %(message)s"

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Attach a RichHandler writing to stderr to the package logger.

    Calling this again only adjusts the level.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
    """
    global _configured

    logger = logging.getLogger("skill_hub")
    logger.setLevel(level.upper())

    if _configured:
        return

    handler = RichHandler(
        console=err_console,
        rich_tracebacks=True,
        show_time=True,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _configured = True
