"""Pytest configuration and shared fixtures."""

import json

import pytest

from local_wp_mcp.db import MySQLClient
from local_wp_mcp.models import MySQLConfig
from local_wp_mcp.wp_cli import WpCli


class FakeCursor:
    """Stands in for an aiomysql DictCursor."""

    def __init__(self, conn):
        self.conn = conn
        self._rows = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, sql, args=None):
        self.conn.executed.append((sql, args))
        self._rows = self.conn.responder(sql, args)

    async def fetchall(self):
        return self._rows


class FakeConnection:
    """Records executed statements; rows come from ``responder(sql, args)``."""

    def __init__(self, responder=None):
        self.responder = responder or (lambda sql, args: [])
        self.executed = []
        self.closed = False

    def cursor(self, cursor_class=None):
        return FakeCursor(self)

    async def ensure_closed(self):
        self.closed = True

    def close(self):
        self.closed = True


class RecordingWpCli(WpCli):
    """WpCli whose run() records invocations instead of spawning processes."""

    def __init__(self, outputs=None):
        super().__init__("/srv/site/app/public", "/tmp/mysqld.sock")
        self.calls = []
        self.outputs = list(outputs or [])

    async def run(self, command, args=(), input=None):
        self.calls.append((command, list(args), input))
        return self.outputs.pop(0) if self.outputs else ""


@pytest.fixture
def fake_connection():
    """A fake connection with no rows for any query."""
    return FakeConnection()


@pytest.fixture
def mysql_client(monkeypatch, fake_connection):
    """MySQLClient wired to fake_connection instead of a real server."""
    connects = []

    async def fake_connect(**kwargs):
        connects.append(kwargs)
        return fake_connection

    monkeypatch.setattr("local_wp_mcp.db.aiomysql.connect", fake_connect)
    client = MySQLClient(MySQLConfig(database="local", socket_path="/tmp/mysqld.sock"))
    client.connect_calls = connects
    return client


@pytest.fixture
def recording_wp():
    """Factory for RecordingWpCli with scripted outputs."""
    return RecordingWpCli


@pytest.fixture
def sample_rows():
    """Sample database rows for testing."""
    return [
        {"ID": 1, "post_title": "Hello World", "post_status": "publish"},
        {"ID": 2, "post_title": "Test Post", "post_status": "draft"},
    ]


@pytest.fixture
def local_data_dir(tmp_path):
    """Factory building a Local data directory with the given sites.

    Each site is (site_id, database, running).
    """

    def _make(*sites):
        registry = {}
        for site_id, database, running in sites:
            site_path = tmp_path / "Local Sites" / site_id
            registry[site_id] = {
                "id": site_id,
                "name": f"Site {site_id}",
                "path": str(site_path),
                "mysql": {"database": database, "user": "root", "password": "root"},
                "services": {"mysql": {"ports": {"MYSQL": [10011]}}},
            }
            if running:
                sock_dir = tmp_path / "run" / site_id / "mysql"
                sock_dir.mkdir(parents=True)
                (sock_dir / "mysqld.sock").touch()
        (tmp_path / "sites.json").write_text(json.dumps(registry))
        return tmp_path

    return _make
