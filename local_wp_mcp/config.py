"""Configuration and constants for the Local WordPress MCP Server."""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Fallback MySQL configuration (used when no Local site is detected)
# ---------------------------------------------------------------------------

MYSQL_HOST = os.getenv("MYSQL_HOST", "localhost")
MYSQL_PORT = int(os.getenv("MYSQL_PORT", "3306"))
MYSQL_USER = os.getenv("MYSQL_USER", "root")
MYSQL_PASS = os.getenv("MYSQL_PASS", "root")
MYSQL_DB = os.getenv("MYSQL_DB", "")  # empty = detect any running Local site
MYSQL_SOCKET_PATH = os.getenv("MYSQL_SOCKET_PATH", "")
MYSQL_QUERY_TIMEOUT = int(os.getenv("MYSQL_QUERY_TIMEOUT", "30"))

# ---------------------------------------------------------------------------
# WP-CLI
# ---------------------------------------------------------------------------

WP_PATH = os.getenv("WP_PATH", "")  # site root when Local detection fails
WP_CLI_BIN = os.getenv("WP_CLI_BIN", "wp")
WP_CLI_TIMEOUT = int(os.getenv("WP_CLI_TIMEOUT", "300"))  # 0 = no timeout
WP_CLI_MAX_BUFFER = int(os.getenv("WP_CLI_MAX_BUFFER", str(50 * 1024 * 1024)))

# ---------------------------------------------------------------------------
# Local (by Flywheel) detection
# ---------------------------------------------------------------------------

LOCAL_DATA_DIR = os.getenv("LOCAL_DATA_DIR", "")

DEFAULT_DATABASE = "local"
DEFAULT_TIMEZONE = "Z"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

DEBUG_NAMESPACE = "mcp-local-wp"
DEBUG = DEBUG_NAMESPACE in os.getenv("DEBUG", "")

logger = logging.getLogger("local_wp_mcp")
logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO, stream=sys.stderr)
