"""Tests for placeholder translation."""

from media_store.db.placeholders import dollar_to_qmark, qmark_to_dollar


class TestQmarkToDollar:
    """Test ? → $N translation for Postgres."""

    def test_no_placeholders(self):
        assert qmark_to_dollar("SELECT 1") == "SELECT 1"

    def test_single_placeholder(self):
        assert qmark_to_dollar("SELECT * FROM users WHERE username = ?") == (
            "SELECT * FROM users WHERE username = $1"
        )

    def test_numbered_left_to_right(self):
        sql = "INSERT INTO users (username, password_hash, created_at) VALUES (?, ?, ?)"
        assert qmark_to_dollar(sql) == (
            "INSERT INTO users (username, password_hash, created_at) VALUES ($1, $2, $3)"
        )

    def test_count_matches_input(self):
        sql = " AND ".join(["x = ?"] * 12)
        out = qmark_to_dollar(sql)
        assert "?" not in out
        for n in range(1, 13):
            assert f"${n}" in out
        assert out.index("$1 ") < out.index("$2 ") < out.index("$12")

    def test_native_syntax_passes_through(self):
        sql = "UPDATE users SET role = $1 WHERE username = $2"
        assert qmark_to_dollar(sql) == sql

    def test_question_mark_in_string_literal_kept(self):
        sql = "SELECT '?' FROM t WHERE x = ?"
        assert qmark_to_dollar(sql) == "SELECT '?' FROM t WHERE x = $1"

    def test_escaped_quote_inside_literal(self):
        sql = "SELECT 'it''s ?' FROM t WHERE x = ? AND y = ?"
        assert qmark_to_dollar(sql) == "SELECT 'it''s ?' FROM t WHERE x = $1 AND y = $2"

    def test_empty_sql(self):
        assert qmark_to_dollar("") == ""


class TestDollarToQmark:
    """Test $N → ?N translation for SQLite."""

    def test_generic_syntax_passes_through(self):
        sql = "SELECT * FROM favorites WHERE username = ? AND key = ?"
        assert dollar_to_qmark(sql) == sql

    def test_numbered_placeholders(self):
        assert dollar_to_qmark("UPDATE users SET role = $1 WHERE username = $2") == (
            "UPDATE users SET role = ?1 WHERE username = ?2"
        )

    def test_keeps_numbering_when_reused(self):
        assert dollar_to_qmark("SELECT $2, $1, $2") == "SELECT ?2, ?1, ?2"

    def test_dollar_without_digits_untouched(self):
        sql = "SELECT json_extract(data, '$.title') FROM t"
        assert dollar_to_qmark(sql) == sql

    def test_dollar_number_in_string_literal_kept(self):
        sql = "SELECT 'costs $5' AS price"
        assert dollar_to_qmark(sql) == sql

    def test_literal_and_placeholder_mixed(self):
        sql = "UPDATE t SET note = 'was $1, now $2' WHERE id = $1"
        assert dollar_to_qmark(sql) == "UPDATE t SET note = 'was $1, now $2' WHERE id = ?1"

    def test_escaped_quote_inside_literal(self):
        assert dollar_to_qmark("SELECT 'it''s $3', $1") == "SELECT 'it''s $3', ?1"
