"""FastMCP server initialization for Synaptik MCP."""

import logging

from mcp.server.fastmcp import FastMCP

from synaptik_mcp.config import configure_logging, get_settings

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("synaptik_mcp")


def run() -> None:
    """Run the MCP server."""
    settings = get_settings()
    configure_logging(settings.log_level)

    # Importing the tools registers them with the server
    import synaptik_mcp.tools  # noqa: F401

    logger.info("Starting synaptik_mcp with task store %s", settings.store_path)
    mcp.run()
