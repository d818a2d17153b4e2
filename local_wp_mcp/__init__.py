"""Local WordPress MCP Server.

Exposes a Local (by Flywheel) WordPress site to MCP clients: read-only
MySQL querying and schema inspection, plus WP-CLI for posts and menus.
"""

from .server import main, mcp

__all__ = ["mcp", "main"]
__version__ = "1.0.0"
