"""Exception types raised by the detector, database client and WP-CLI invoker."""

from __future__ import annotations


class LocalWPError(Exception):
    """Base class for all errors reported back to MCP clients."""


class LocalDetectionError(LocalWPError, LookupError):
    """No Local site (or more than one) matched the requested database."""


class ToolInputError(LocalWPError, ValueError):
    """Tool arguments failed validation."""


class QueryValidationError(ToolInputError):
    """SQL statement is not a single read-only statement."""


class DatabaseConnectionError(LocalWPError, ConnectionError):
    """The database could not be reached or rejected the credentials."""


class DatabaseError(LocalWPError, RuntimeError):
    """The database rejected or failed a query."""


class TableNotFoundError(LocalWPError, LookupError):
    """The requested table does not exist in the connected database."""


class WpCliError(LocalWPError, RuntimeError):
    """WP-CLI failed without producing usable output."""


class UnknownToolError(LocalWPError, LookupError):
    """The requested tool is not registered."""
