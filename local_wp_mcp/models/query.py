"""Input models for the MySQL tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..validation import validate_read_only


class MySQLQueryInput(BaseModel):
    """Input for a read-only SQL query."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    sql: str = Field(
        ...,
        description="Single read-only SQL statement (SELECT/SHOW/DESCRIBE/EXPLAIN).",
        min_length=1,
    )
    params: list[str | int | float] | None = Field(
        default=None,
        description="Optional parameter values for placeholders (?).",
    )

    @field_validator("sql")
    @classmethod
    def validate_sql(cls, v: str) -> str:
        validate_read_only(v)
        return v


class MySQLSchemaInput(BaseModel):
    """Input for schema inspection."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    table: str | None = Field(
        default=None,
        description="Optional table name to inspect.",
        max_length=64,
    )
