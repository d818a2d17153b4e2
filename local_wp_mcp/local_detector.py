"""Detection of running Local (by Flywheel) sites.

Local keeps a ``sites.json`` registry in its data directory and exposes each
running site's MySQL server through a unix socket at
``<data dir>/run/<site id>/mysql/mysqld.sock``. A site whose socket exists is
considered running and is a candidate for this server.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Iterable

from .config import (
    DEFAULT_DATABASE,
    LOCAL_DATA_DIR,
    MYSQL_DB,
    MYSQL_HOST,
    MYSQL_PASS,
    MYSQL_PORT,
    MYSQL_SOCKET_PATH,
    MYSQL_USER,
    WP_PATH,
    logger,
)
from .errors import LocalDetectionError
from .models import LocalSite, MySQLConfig, SiteEnvironment


def default_data_dirs() -> list[Path]:
    """Return the directories Local may store its data in, most likely first."""
    if LOCAL_DATA_DIR:
        return [Path(LOCAL_DATA_DIR).expanduser()]

    home = Path.home()
    dirs = []
    if sys.platform == "darwin":
        dirs.append(home / "Library" / "Application Support" / "Local")
    elif sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if appdata:
            dirs.append(Path(appdata) / "Local")
    else:
        dirs.append(Path(os.getenv("XDG_CONFIG_HOME", home / ".config")) / "Local")
    return dirs


def _mysql_port(site: dict[str, Any]) -> int:
    ports = site.get("services", {}).get("mysql", {}).get("ports", {}).get("MYSQL")
    if ports:
        try:
            return int(ports[0])
        except (TypeError, ValueError):
            pass
    return 3306


def _load_sites(data_dir: Path) -> dict[str, Any]:
    sites_file = data_dir / "sites.json"
    if not sites_file.is_file():
        return {}
    try:
        sites = json.loads(sites_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", sites_file, e)
        return {}
    if not isinstance(sites, dict):
        logger.warning("Unexpected format in %s, skipping", sites_file)
        return {}
    return sites


def find_local_sites(data_dirs: Iterable[Path] | None = None) -> list[LocalSite]:
    """List running Local sites found in the given data directories.

    Args:
        data_dirs: Directories to search. Defaults to default_data_dirs().

    Returns:
        Running sites, in sites.json order.
    """
    found = []
    for data_dir in data_dirs if data_dirs is not None else default_data_dirs():
        for site_id, site in _load_sites(data_dir).items():
            if not isinstance(site, dict) or not site.get("path"):
                continue
            socket_path = data_dir / "run" / site_id / "mysql" / "mysqld.sock"
            if not socket_path.exists():
                logger.debug("Skipping Local site %s: not running", site_id)
                continue
            mysql = site.get("mysql") or {}
            found.append(
                LocalSite(
                    id=site_id,
                    name=site.get("name", ""),
                    path=Path(site["path"]).expanduser(),
                    socket_path=socket_path,
                    mysql=MySQLConfig(
                        host="localhost",
                        port=_mysql_port(site),
                        user=mysql.get("user") or "root",
                        password=mysql.get("password") or "root",
                        database=mysql.get("database") or DEFAULT_DATABASE,
                        socket_path=str(socket_path),
                    ),
                )
            )
    return found


def detect_local_site(
    database: str | None = None, data_dirs: Iterable[Path] | None = None
) -> LocalSite:
    """Pick the single running Local site, optionally matching a database name.

    Raises:
        LocalDetectionError: If zero or several sites match.
    """
    sites = find_local_sites(data_dirs)
    if not sites:
        raise LocalDetectionError("No running Local sites found.")

    if database:
        sites = [s for s in sites if s.mysql.database == database]
        if not sites:
            raise LocalDetectionError(
                f"No running Local site uses database '{database}'."
            )

    if len(sites) > 1:
        names = ", ".join(s.name or s.id for s in sites)
        raise LocalDetectionError(
            f"Multiple running Local sites match ({names}); stop the others "
            "or set MYSQL_DB."
        )
    return sites[0]


def get_local_mysql_config(
    database: str | None = None, data_dirs: Iterable[Path] | None = None
) -> MySQLConfig:
    """Return connection parameters for the detected Local site."""
    return detect_local_site(database, data_dirs).mysql


def environment_mysql_config() -> MySQLConfig:
    """Build connection parameters from MYSQL_* environment variables."""
    return MySQLConfig(
        host=MYSQL_HOST,
        port=MYSQL_PORT,
        user=MYSQL_USER,
        password=MYSQL_PASS,
        database=MYSQL_DB or DEFAULT_DATABASE,
        socket_path=MYSQL_SOCKET_PATH or None,
    )


def resolve_site_environment(
    database: str | None = MYSQL_DB or None,
    data_dirs: Iterable[Path] | None = None,
) -> SiteEnvironment:
    """Detect the Local site, falling back to explicit configuration.

    Returns:
        The settings used for both the MySQL connection and WP-CLI.
    """
    try:
        site = detect_local_site(database, data_dirs)
    except LocalDetectionError as e:
        logger.warning("Failed to detect Local configuration: %s", e)
        logger.warning("Falling back to environment variables...")
        mysql = environment_mysql_config()
        return SiteEnvironment(
            mysql=mysql,
            site_root=Path(WP_PATH).expanduser() if WP_PATH else None,
            socket_path=mysql.socket_path,
            source="environment",
        )

    logger.info("Detected Local site '%s' at %s", site.name or site.id, site.path)
    return SiteEnvironment(
        mysql=site.mysql,
        site_root=site.site_root,
        socket_path=str(site.socket_path),
        source="local",
    )
