"""Process-wide resources shared by all tool calls."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server.fastmcp import Context

from .config import logger
from .db import MySQLClient
from .local_detector import resolve_site_environment
from .models import SiteEnvironment
from .wp_cli import WpCli


@dataclass
class AppContext:
    """Resources owned by the server for its whole lifetime."""

    environment: SiteEnvironment
    mysql: MySQLClient
    wp: WpCli


def build_app_context(environment: SiteEnvironment | None = None) -> AppContext:
    """Create (unconnected) clients for the resolved site environment."""
    env = environment or resolve_site_environment()
    return AppContext(
        environment=env,
        mysql=MySQLClient(env.mysql),
        wp=WpCli(env.site_root, env.socket_path),
    )


def get_app(ctx: Context) -> AppContext:
    """Fetch the AppContext from a tool call's request context."""
    return ctx.request_context.lifespan_context


@asynccontextmanager
async def app_lifespan(app):
    """Own the MySQL connection for the lifetime of the server.

    The connection is opened lazily by the first query and always closed on
    shutdown, including shutdowns triggered by SIGINT/SIGTERM.

    Args:
        app: The FastMCP application instance (required by lifespan protocol).
    """
    context = build_app_context()
    try:
        yield context
    finally:
        await context.mysql.disconnect()
        logger.info("Shutdown complete")
