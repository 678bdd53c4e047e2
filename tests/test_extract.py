"""Unit tests for statement extraction."""

import unittest

from sqlcheck.core.errors import ConfigurationError, StatementExtractionError
from sqlcheck.extract import split_statements


class SplitStatementsTests(unittest.TestCase):
    """Tests for splitting raw SQL into normalized statements."""

    def test_split_and_lowercase(self) -> None:
        """Statements are split on semicolons and lowercased."""
        self.assertEqual(
            split_statements("SELECT * FROM Accounts; select 1"),
            ["select * from accounts", "select 1"],
        )

    def test_semicolon_inside_string(self) -> None:
        """Semicolons inside string literals do not split."""
        self.assertEqual(
            split_statements("select 'a;b' from t; select 2;"),
            ["select 'a;b' from t", "select 2"],
        )

    def test_comments_are_dropped(self) -> None:
        """Line and block comments are removed."""
        sql = "select a -- pick a; not b\nfrom t;\nselect /* all; */ b from u;"
        self.assertEqual(split_statements(sql), ["select a from t", "select b from u"])

    def test_whitespace_is_collapsed(self) -> None:
        """Runs of whitespace become a single space."""
        sql = "SELECT   a,\n\tb\n  FROM t"
        self.assertEqual(split_statements(sql), ["select a, b from t"])

    def test_adjacent_tokens_stay_glued(self) -> None:
        """Tokens with no gap between them are not spaced apart."""
        self.assertEqual(
            split_statements("SELECT * FROM bugs ORDER BY RAND() LIMIT 1;"),
            ["select * from bugs order by rand() limit 1"],
        )

    def test_empty_statements_are_skipped(self) -> None:
        """Blank and comment-only statements are dropped."""
        self.assertEqual(split_statements(""), [])
        self.assertEqual(split_statements(" ;; ; "), [])
        self.assertEqual(split_statements("-- only a comment\n"), [])

    def test_unterminated_string(self) -> None:
        """An unterminated string is an extraction error."""
        with self.assertRaises(StatementExtractionError):
            split_statements("select 'abc from t")

    def test_unknown_dialect(self) -> None:
        """An unknown dialect is a configuration error."""
        with self.assertRaises(ConfigurationError):
            split_statements("select 1", dialect="no_such_dialect")

    def test_other_dialects(self) -> None:
        """Splitting works the same across common dialects."""
        for dialect in ["postgres", "mysql", "sqlite", "duckdb"]:
            self.assertEqual(
                split_statements("SELECT a FROM t; SELECT b FROM u", dialect=dialect),
                ["select a from t", "select b from u"],
                dialect,
            )


if __name__ == "__main__":
    unittest.main()
