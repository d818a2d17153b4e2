"""Tests for Local site detection."""

import pytest

from local_wp_mcp import local_detector
from local_wp_mcp.errors import LocalDetectionError
from local_wp_mcp.local_detector import (
    detect_local_site,
    find_local_sites,
    get_local_mysql_config,
    resolve_site_environment,
)


class TestFindLocalSites:
    """Tests for find_local_sites function."""

    def test_only_running_sites(self, local_data_dir):
        """Sites without a MySQL socket are not running and are skipped."""
        data_dir = local_data_dir(("abc", "local", True), ("def", "local", False))
        sites = find_local_sites([data_dir])
        assert [s.id for s in sites] == ["abc"]

    def test_site_details(self, local_data_dir):
        data_dir = local_data_dir(("abc", "shop", True))
        site = find_local_sites([data_dir])[0]
        assert site.socket_path == data_dir / "run" / "abc" / "mysql" / "mysqld.sock"
        assert site.site_root == data_dir / "Local Sites" / "abc" / "app" / "public"
        assert site.mysql.database == "shop"
        assert site.mysql.port == 10011
        assert site.mysql.socket_path == str(site.socket_path)
        assert site.mysql.multiple_statements is False

    def test_missing_registry(self, tmp_path):
        assert find_local_sites([tmp_path]) == []

    def test_malformed_registry(self, tmp_path):
        (tmp_path / "sites.json").write_text("{not json")
        assert find_local_sites([tmp_path]) == []


class TestDetectLocalSite:
    """Tests for detect_local_site function."""

    def test_single_running_site(self, local_data_dir):
        data_dir = local_data_dir(("abc", "local", True))
        assert detect_local_site(None, [data_dir]).id == "abc"

    def test_match_by_database(self, local_data_dir):
        """Exactly one match returns that site's socket and root."""
        data_dir = local_data_dir(("abc", "blog", True), ("def", "shop", True))
        site = detect_local_site("shop", [data_dir])
        assert site.id == "def"
        assert site.socket_path == data_dir / "run" / "def" / "mysql" / "mysqld.sock"
        assert site.site_root == data_dir / "Local Sites" / "def" / "app" / "public"

    def test_no_match(self, local_data_dir):
        data_dir = local_data_dir(("abc", "blog", True))
        with pytest.raises(LocalDetectionError, match="shop"):
            detect_local_site("shop", [data_dir])

    def test_ambiguous_match(self, local_data_dir):
        data_dir = local_data_dir(("abc", "local", True), ("def", "local", True))
        with pytest.raises(LocalDetectionError, match="Multiple"):
            detect_local_site("local", [data_dir])

    def test_ambiguous_without_database(self, local_data_dir):
        data_dir = local_data_dir(("abc", "blog", True), ("def", "shop", True))
        with pytest.raises(LocalDetectionError):
            detect_local_site(None, [data_dir])

    def test_nothing_installed(self, tmp_path):
        with pytest.raises(LocalDetectionError, match="No running Local sites"):
            detect_local_site(None, [tmp_path])

    def test_get_local_mysql_config(self, local_data_dir):
        data_dir = local_data_dir(("abc", "local", True))
        config = get_local_mysql_config("local", [data_dir])
        assert config.user == "root"
        assert config.timezone == "Z"


class TestResolveSiteEnvironment:
    """Tests for resolve_site_environment function."""

    def test_uses_local_site(self, local_data_dir):
        data_dir = local_data_dir(("abc", "local", True))
        env = resolve_site_environment("local", [data_dir])
        assert env.source == "local"
        assert env.site_root == data_dir / "Local Sites" / "abc" / "app" / "public"
        assert env.socket_path.endswith("mysqld.sock")

    def test_falls_back_to_environment(self, tmp_path, monkeypatch):
        monkeypatch.setattr(local_detector, "MYSQL_HOST", "db.example")
        monkeypatch.setattr(local_detector, "MYSQL_PORT", 3307)
        monkeypatch.setattr(local_detector, "MYSQL_DB", "")
        monkeypatch.setattr(local_detector, "MYSQL_SOCKET_PATH", "")
        monkeypatch.setattr(local_detector, "WP_PATH", str(tmp_path))

        env = resolve_site_environment(None, [tmp_path])

        assert env.source == "environment"
        assert env.mysql.host == "db.example"
        assert env.mysql.port == 3307
        assert env.mysql.database == "local"
        assert env.mysql.socket_path is None
        assert env.mysql.multiple_statements is False
        assert env.site_root == tmp_path
