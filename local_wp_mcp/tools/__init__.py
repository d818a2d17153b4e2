"""MCP tool implementations for the Local WordPress site."""

from .mysql import register_mysql_tools
from .wp import register_wp_tools

__all__ = [
    "register_mysql_tools",
    "register_wp_tools",
]


def register_all_tools(mcp):
    """Register all tools with the MCP server."""
    register_mysql_tools(mcp)
    register_wp_tools(mcp)
