"""Connection and site records produced by Local detection."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..config import DEFAULT_DATABASE, DEFAULT_TIMEZONE


class MySQLConfig(BaseModel):
    """Parameters for the single MySQL connection."""

    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = DEFAULT_DATABASE
    socket_path: str | None = None
    timezone: str = DEFAULT_TIMEZONE
    multiple_statements: Literal[False] = False


class LocalSite(BaseModel):
    """A running site managed by Local."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    path: Path
    socket_path: Path
    mysql: MySQLConfig

    @property
    def site_root(self) -> Path:
        """WordPress root (where wp-config.php lives)."""
        return self.path / "app" / "public"


class SiteEnvironment(BaseModel):
    """Resolved database and filesystem settings for this process."""

    model_config = ConfigDict(frozen=True)

    mysql: MySQLConfig
    site_root: Path | None = Field(
        default=None, description="Directory WP-CLI runs in."
    )
    socket_path: str | None = None
    source: Literal["local", "environment"] = "local"
