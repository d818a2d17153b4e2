"""Read-only MySQL tools for the Local WordPress database."""

from __future__ import annotations

import json

from mcp.server.fastmcp import Context

from ..config import logger
from ..db import MySQLClient
from ..lifespan import get_app
from ..models import MySQLQueryInput, MySQLSchemaInput
from ..utils import clean_rows, handle_exception


async def run_query(mysql: MySQLClient, sql: str, params: list | None = None) -> str:
    """Validate and run a read-only query, returning rows as JSON."""
    try:
        request = MySQLQueryInput(sql=sql, params=params)
        logger.debug("Executing mysql_query")
        rows = await mysql.execute_read_only_query(request.sql, request.params)
        return json.dumps(clean_rows(rows), indent=2)
    except Exception as e:
        return handle_exception(e)


async def inspect_schema(mysql: MySQLClient, table: str | None = None) -> str:
    """List tables, or describe one table's columns and indexes."""
    try:
        request = MySQLSchemaInput(table=table)
        if not request.table:
            return json.dumps(await mysql.list_tables(), indent=2)

        columns = await mysql.get_table_columns(request.table)
        indexes = await mysql.get_table_indexes(request.table)
        return json.dumps(
            {
                "table": request.table,
                "columns": clean_rows(columns),
                "indexes": indexes,
            },
            indent=2,
        )
    except Exception as e:
        return handle_exception(e)


def register_mysql_tools(mcp):
    """Register MySQL tools with the MCP server."""

    @mcp.tool(
        name="mysql_query",
        annotations={
            "title": "Execute Read-Only SQL Query",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": False,
        },
    )
    async def mysql_query(
        sql: str,
        params: list[str | int | float] | None = None,
        ctx: Context = None,
    ) -> str:
        """Execute a read-only SQL query against the Local WordPress database.

        Only a single SELECT, SHOW, DESCRIBE or EXPLAIN statement is allowed.

        Args:
            sql: Single read-only SQL statement (SELECT/SHOW/DESCRIBE/EXPLAIN).
            params: Optional parameter values for placeholders (?).

        Returns:
            str: JSON array of result rows.
        """
        return await run_query(get_app(ctx).mysql, sql, params)

    @mcp.tool(
        name="mysql_schema",
        annotations={
            "title": "Inspect Database Schema",
            "readOnlyHint": True,
            "destructiveHint": False,
            "idempotentHint": True,
            "openWorldHint": False,
        },
    )
    async def mysql_schema(table: str | None = None, ctx: Context = None) -> str:
        """Inspect database schema.

        Without arguments lists tables. With a table name shows its columns
        and indexes.

        Args:
            table: Optional table name to inspect.

        Returns:
            str: JSON list of tables, or {table, columns, indexes}.
        """
        return await inspect_schema(get_app(ctx).mysql, table)
