"""Single-connection MySQL client and read-only query execution."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import aiomysql
from pymysql.constants import CLIENT, CR

from .config import MYSQL_QUERY_TIMEOUT, logger
from .errors import DatabaseConnectionError, DatabaseError, TableNotFoundError
from .models import MySQLConfig
from .utils import convert_placeholders
from .validation import validate_read_only


def _time_zone(tz: str) -> str:
    """Translate a driver-style timezone ('Z', '+02:00') into a MySQL value."""
    return "+00:00" if tz in ("Z", "z", "UTC") else tz


def _is_connection_error(e: Exception) -> bool:
    """True for client-side (CR_*) errors, which leave the connection unusable.

    PyMySQL raises OperationalError for many server errors too, such as an
    unknown column (1054); those keep the connection.
    """
    if isinstance(e, aiomysql.InterfaceError):
        return True
    code = e.args[0] if e.args else None
    return isinstance(code, int) and code >= CR.CR_ERROR_FIRST


class MySQLClient:
    """Owns the one database connection used by the server.

    The connection is opened lazily on first use, reused for every call and
    released by disconnect().
    """

    def __init__(self, config: MySQLConfig, query_timeout: int = MYSQL_QUERY_TIMEOUT):
        self.config = config
        self.query_timeout = query_timeout
        self._conn: aiomysql.Connection | None = None

    @property
    def connected(self) -> bool:
        return self._conn is not None and not self._conn.closed

    def _connect_kwargs(self) -> dict[str, Any]:
        cfg = self.config
        kwargs: dict[str, Any] = {
            "user": cfg.user,
            "password": cfg.password,
            "db": cfg.database,
            "autocommit": True,
            "connect_timeout": 10,
            "charset": "utf8mb4",
            "init_command": f"SET time_zone = '{_time_zone(cfg.timezone)}'",
        }
        if cfg.multiple_statements:
            kwargs["client_flag"] = CLIENT.MULTI_STATEMENTS
        if cfg.socket_path:
            kwargs["unix_socket"] = cfg.socket_path
        else:
            kwargs["host"] = cfg.host
            kwargs["port"] = cfg.port
        return kwargs

    async def connect(self) -> None:
        """Open the connection if it is not already open.

        Raises:
            DatabaseConnectionError: On network or authentication failure.
        """
        if self.connected:
            return

        cfg = self.config
        try:
            self._conn = await aiomysql.connect(**self._connect_kwargs())
        except (aiomysql.MySQLError, OSError) as e:
            logger.error("Failed to connect to database: %s", e)
            raise DatabaseConnectionError(f"Database connection failed: {e}") from e

        if cfg.socket_path:
            logger.info("Connected to %s@%s (socket) db=%s", cfg.user, cfg.socket_path, cfg.database)
        else:
            logger.info("Connected to %s@%s:%s/%s", cfg.user, cfg.host, cfg.port, cfg.database)

    async def disconnect(self) -> None:
        """Close the connection. Safe to call when never connected."""
        conn, self._conn = self._conn, None
        if conn is None or conn.closed:
            return
        try:
            await conn.ensure_closed()
        except (aiomysql.MySQLError, OSError) as e:
            logger.debug("Error during graceful close, closing forcibly: %s", e)
            conn.close()
        logger.info("Database connection closed")

    async def _fetch(self, sql: str, args: Sequence[Any] | None = None) -> list[dict[str, Any]]:
        await self.connect()
        try:
            async with self._conn.cursor(aiomysql.DictCursor) as cur:
                await asyncio.wait_for(cur.execute(sql, args), timeout=self.query_timeout)
                return list(await cur.fetchall())
        except asyncio.TimeoutError as e:
            # The server may still be running the statement; start fresh next time
            self._conn.close()
            self._conn = None
            raise DatabaseError(f"Query timed out after {self.query_timeout}s.") from e
        except aiomysql.MySQLError as e:
            if _is_connection_error(e):
                await self.disconnect()
                raise DatabaseConnectionError(f"Database connection error: {e}") from e
            raise DatabaseError(f"Database error: {e}") from e

    async def execute_read_only_query(
        self, sql: str, params: Sequence[Any] | None = None
    ) -> list[dict[str, Any]]:
        """Execute a single read-only statement and return its rows.

        Args:
            sql: SELECT/SHOW/DESCRIBE/EXPLAIN statement, ``?`` placeholders.
            params: Positional values for the placeholders.

        Raises:
            QueryValidationError: If the statement is not read-only or the
                placeholder count does not match. Nothing is sent to the server.
        """
        validate_read_only(sql)
        if params:
            return await self._fetch(convert_placeholders(sql, params), list(params))
        # Unbound '?' is an error; without args the driver leaves '%' alone
        convert_placeholders(sql, [])
        return await self._fetch(sql)

    async def list_tables(self) -> list[str]:
        """Return table names in catalog order."""
        rows = await self._fetch("SHOW TABLES")
        return [next(iter(row.values())) for row in rows]

    async def _ensure_table(self, table: str) -> None:
        rows = await self._fetch(
            "SELECT 1 FROM information_schema.TABLES "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s",
            (table,),
        )
        if not rows:
            raise TableNotFoundError(f"Table '{table}' not found.")

    async def get_table_columns(self, table: str) -> list[dict[str, Any]]:
        """Column definitions for a table.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        rows = await self._fetch(
            "SELECT COLUMN_NAME AS name, COLUMN_TYPE AS type, "
            "IS_NULLABLE AS nullable, COLUMN_KEY AS `key`, "
            "COLUMN_DEFAULT AS `default`, EXTRA AS extra "
            "FROM information_schema.COLUMNS "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s "
            "ORDER BY ORDINAL_POSITION",
            (table,),
        )
        if not rows:
            raise TableNotFoundError(f"Table '{table}' not found.")
        return [{**row, "nullable": row["nullable"] == "YES"} for row in rows]

    async def get_table_indexes(self, table: str) -> list[dict[str, Any]]:
        """Indexes of a table, one entry per index with its ordered columns.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        await self._ensure_table(table)
        rows = await self._fetch(
            "SELECT INDEX_NAME, COLUMN_NAME, NON_UNIQUE "
            "FROM information_schema.STATISTICS "
            "WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s "
            "ORDER BY INDEX_NAME, SEQ_IN_INDEX",
            (table,),
        )
        indexes: dict[str, dict[str, Any]] = {}
        for row in rows:
            index = indexes.setdefault(
                row["INDEX_NAME"],
                {
                    "name": row["INDEX_NAME"],
                    "columns": [],
                    "unique": not int(row["NON_UNIQUE"]),
                },
            )
            index["columns"].append(row["COLUMN_NAME"])
        return list(indexes.values())
