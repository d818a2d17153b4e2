"""Local WordPress MCP Server entry point."""

from __future__ import annotations

import signal
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.types import TextContent

from .config import logger
from .errors import UnknownToolError
from .lifespan import app_lifespan
from .tools import register_all_tools
from .utils import handle_exception


class LocalWPServer(FastMCP):
    """FastMCP server that answers unknown tool names with an error result."""

    async def call_tool(self, name: str, arguments: dict[str, Any]):
        if self._tool_manager.get_tool(name) is None:
            text = handle_exception(UnknownToolError(f"Unknown tool: {name}"))
            return [TextContent(type="text", text=text)]
        logger.debug("Calling tool %s", name)
        return await super().call_tool(name, arguments)


# Create the MCP server
mcp = LocalWPServer("mcp-local-wp", lifespan=app_lifespan)

# Register all tools
register_all_tools(mcp)


def _terminate(signum, frame):
    # Unwind like Ctrl-C so the lifespan closes the database connection
    raise KeyboardInterrupt


def main():
    """Run the MCP server over stdio."""
    signal.signal(signal.SIGTERM, _terminate)
    logger.info("WordPress Local MCP Server running...")
    try:
        mcp.run()
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
