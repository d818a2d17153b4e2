"""Tests for SQL validation logic."""

import pytest

from local_wp_mcp.errors import QueryValidationError
from local_wp_mcp.validation import strip_comments, validate_read_only


class TestValidateReadOnly:
    """Tests for validate_read_only function."""

    def test_valid_select(self):
        """Valid SELECT statements should pass."""
        valid_queries = [
            "SELECT * FROM wp_posts",
            "SELECT id, name FROM users WHERE id = 1",
            "SELECT COUNT(*) FROM wp_posts",
            "select * from wp_posts",  # lowercase
            "  SELECT * FROM wp_posts  ",  # whitespace
            "(SELECT ID FROM wp_posts)",
        ]
        for query in valid_queries:
            validate_read_only(query)  # Should not raise

    def test_valid_show(self):
        """Valid SHOW statements should pass, including SHOW CREATE."""
        for query in ["SHOW TABLES", "show tables", "SHOW CREATE TABLE wp_posts"]:
            validate_read_only(query)

    def test_valid_describe_and_explain(self):
        """DESCRIBE, DESC and EXPLAIN should pass."""
        for query in [
            "DESCRIBE wp_posts",
            "desc wp_posts",
            "EXPLAIN SELECT * FROM wp_posts",
            "explain select * from wp_posts",
        ]:
            validate_read_only(query)

    @pytest.mark.parametrize(
        "sql",
        [
            "INSERT INTO wp_posts (title) VALUES ('test')",
            "UPDATE wp_posts SET title = 'test'",
            "DELETE FROM wp_posts",
            "DROP TABLE wp_posts",
            "TRUNCATE TABLE wp_posts",
            "CREATE TABLE test (id INT)",
            "ALTER TABLE wp_posts ADD COLUMN test INT",
            "CALL some_procedure()",
            "SET @a = 1",
            "/* SELECT */ DELETE FROM wp_posts",
        ],
    )
    def test_reject_non_read_only_start(self, sql):
        """Statements not led by an allowed keyword should be rejected."""
        with pytest.raises(QueryValidationError, match="Only SELECT"):
            validate_read_only(sql)

    def test_reject_multiple_statements(self):
        """Multiple statements (semicolon injection) should be rejected."""
        with pytest.raises(QueryValidationError, match="Multiple SQL statements"):
            validate_read_only("SELECT * FROM wp_posts; DROP TABLE wp_posts")

    def test_reject_trailing_semicolon(self):
        """Any separator is rejected, even a trailing one."""
        with pytest.raises(QueryValidationError, match="Multiple SQL statements"):
            validate_read_only("SELECT * FROM wp_posts;")

    def test_reject_into_outfile(self):
        """INTO OUTFILE / DUMPFILE should be rejected."""
        with pytest.raises(QueryValidationError, match="Write/DDL operations"):
            validate_read_only("SELECT * FROM wp_posts INTO OUTFILE '/tmp/test'")
        with pytest.raises(QueryValidationError, match="Write/DDL operations"):
            validate_read_only("SELECT * FROM wp_posts INTO DUMPFILE '/tmp/test'")

    def test_string_functions_named_like_statements_allowed(self):
        """REPLACE() and a column aliased LOCK are reads, not writes."""
        for query in [
            "SELECT REPLACE(post_title, 'a', 'b') FROM wp_posts",
            "SELECT replace (guid, 'http:', 'https:') FROM wp_posts",
            "SELECT option_name AS lock FROM wp_options",
        ]:
            validate_read_only(query)

    def test_replace_statement_still_rejected(self):
        with pytest.raises(QueryValidationError, match="Write/DDL operations"):
            validate_read_only("EXPLAIN REPLACE INTO wp_options VALUES (1, 'a', 'b', 'no')")

    def test_keywords_inside_literals_allowed(self):
        """Write keywords inside string literals are just data."""
        validate_read_only("SELECT ID FROM wp_posts WHERE post_title = 'Update notes'")

    def test_column_names_containing_keywords(self):
        """Identifiers like update_time are not keywords."""
        validate_read_only(
            "SELECT UPDATE_TIME FROM information_schema.TABLES WHERE TABLE_NAME = 'wp_posts'"
        )

    def test_reject_empty(self):
        """Blank SQL should be rejected."""
        with pytest.raises(QueryValidationError, match="empty"):
            validate_read_only("   ")

    def test_line_and_hash_comments(self):
        """Trailing comments should not affect validation."""
        validate_read_only("SELECT * FROM wp_posts -- comment")
        validate_read_only("SELECT * FROM wp_posts # comment")

    def test_case_insensitive(self):
        """Validation should be case insensitive."""
        validate_read_only("SeLeCt * FrOm Wp_PoStS")


class TestStripComments:
    """Tests for strip_comments function."""

    def test_strips_all_comment_styles(self):
        result = strip_comments("SELECT /* a */ 1 -- b\n# c\nFROM x")
        assert "a" not in result
        assert "b" not in result
        assert "c" not in result
        assert "FROM x" in result
