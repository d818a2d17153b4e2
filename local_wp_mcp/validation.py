"""SQL validation logic for read-only query enforcement."""

from __future__ import annotations

import re

from .errors import QueryValidationError

ALLOWED_STATEMENTS = ("SELECT", "SHOW", "DESCRIBE", "DESC", "EXPLAIN")

_ALLOWED_RE = re.compile(rf"(?i)^({'|'.join(ALLOWED_STATEMENTS)})\b")
_DANGEROUS_RE = re.compile(
    r"(?i)\b(INSERT|UPDATE|DELETE|DROP|ALTER|CREATE|TRUNCATE|REPLACE(?!\s*\()|"
    r"GRANT|REVOKE|LOAD|HANDLER|INTO\s+OUTFILE|INTO\s+DUMPFILE)\b"
)
_QUOTED_RE = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|`[^`]*`", re.DOTALL)


def strip_comments(sql: str) -> str:
    """Remove block, line and hash comments."""
    sql = re.sub(r"/\*.*?\*/", " ", sql, flags=re.DOTALL)
    sql = re.sub(r"--.*?$", " ", sql, flags=re.MULTILINE)
    return re.sub(r"#.*?$", " ", sql, flags=re.MULTILINE)


def validate_read_only(sql: str) -> None:
    """Raise if the SQL is not exactly one read-only statement.

    1. Rejects any statement separator, including a trailing one
    2. Strips comments so they cannot hide the leading keyword
    3. Requires SELECT/SHOW/DESCRIBE/EXPLAIN as the first keyword
    4. Blocks DDL/DML keywords outside of quoted literals

    Raises:
        QueryValidationError: If any check fails.
    """
    if not sql or not sql.strip():
        raise QueryValidationError("SQL statement is empty.")

    if ";" in sql:
        raise QueryValidationError("Multiple SQL statements are not allowed.")

    sql_clean = strip_comments(sql)

    stripped = sql_clean.strip().lstrip("(")
    match = _ALLOWED_RE.match(stripped)
    if not match:
        raise QueryValidationError(
            "Only SELECT, SHOW, DESCRIBE and EXPLAIN statements are allowed."
        )

    # SHOW CREATE TABLE and friends are read-only; string literals may
    # legitimately mention these words (e.g. post content)
    if match.group(1).upper() == "SHOW":
        return
    if _DANGEROUS_RE.search(_QUOTED_RE.sub("''", sql_clean)):
        raise QueryValidationError(
            "Write/DDL operations are not allowed. Read-only access only."
        )
