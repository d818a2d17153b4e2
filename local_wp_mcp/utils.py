"""Utility functions for serialization, placeholders and error formatting."""

from __future__ import annotations

import asyncio
import re
from decimal import Decimal
from typing import Any, Sequence

from pydantic import ValidationError

from .config import logger
from .errors import LocalWPError, QueryValidationError, ToolInputError

_PLACEHOLDER_RE = re.compile(
    r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|`[^`]*`"
    r"|/\*.*?\*/|--[^\n]*|#[^\n]*|\?|%",
    re.DOTALL,
)


def serialize(value: Any) -> Any:
    """Make values JSON-serializable."""
    if isinstance(value, (bytes, bytearray)):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary {len(value)} bytes>"
    if isinstance(value, Decimal):
        return float(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if isinstance(value, set):
        return list(value)
    return value


def clean_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Make all row values JSON-serializable."""
    return [{k: serialize(v) for k, v in row.items()} for row in rows]


def convert_placeholders(sql: str, params: Sequence[Any]) -> str:
    """Rewrite ``?`` placeholders into the driver's ``%s`` paramstyle.

    Literal ``%`` characters are doubled so the driver does not treat them as
    format markers. Quoted strings, identifiers and comments are left
    untouched apart from that doubling.

    Raises:
        QueryValidationError: If the placeholder count differs from len(params).
    """
    count = 0

    def _replace(match: re.Match) -> str:
        nonlocal count
        token = match.group(0)
        if token == "?":
            count += 1
            return "%s"
        return token.replace("%", "%%")

    converted = _PLACEHOLDER_RE.sub(_replace, sql)
    if count != len(params):
        raise QueryValidationError(
            f"Query has {count} placeholder(s) but {len(params)} parameter(s) were given."
        )
    return converted


def split_command(command: str) -> tuple[str, list[str]]:
    """Split a WP-CLI command line on whitespace into (subcommand, args)."""
    parts = command.split()
    if not parts:
        raise ToolInputError("WP-CLI command is empty.")
    return parts[0], parts[1:]


def error_text(message: str) -> str:
    """Render an error message as tool output."""
    return f"Error: {message}"


def format_validation_error(e: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    messages = []
    for err in e.errors():
        msg = err["msg"].removeprefix("Value error, ")
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages)


def handle_exception(e: Exception) -> str:
    """Convert any failure raised while serving a tool into error output.

    Logs detailed error information while returning readable messages to the
    client. Never raises.

    Args:
        e: The exception to handle.

    Returns:
        Text of the form ``Error: <message>``.
    """
    if isinstance(e, ValidationError):
        message = format_validation_error(e)
        logger.warning("Invalid tool input: %s", message)
        return error_text(message)
    if isinstance(e, ToolInputError):
        logger.warning("Invalid tool input: %s", e)
        return error_text(str(e))
    if isinstance(e, asyncio.TimeoutError):
        logger.error("Timed out: %s", e)
        return error_text("Operation timed out.")
    if isinstance(e, LocalWPError):
        logger.error("%s: %s", type(e).__name__, e)
        return error_text(str(e))
    # Unknown exception - log full details, return generic message
    logger.exception("Unexpected error: %s", e)
    return error_text("An unexpected error occurred.")
