"""Unit tests for the lexical statement helpers."""

import unittest

from sqlcheck.core.helpers import (
    Statement,
    get_table_name,
    is_create_statement,
    is_ddl_statement,
    normalize_statement,
)


class TableNameTests(unittest.TestCase):
    """Tests for CREATE TABLE name extraction."""

    def test_create_table_name(self) -> None:
        """The token after CREATE TABLE is the table name."""
        self.assertEqual(get_table_name("create table accounts (id int)"), "accounts")

    def test_select_has_no_table_name(self) -> None:
        """A query without CREATE TABLE has no table name."""
        self.assertIsNone(get_table_name("select * from accounts"))

    def test_extra_spaces_are_collapsed(self) -> None:
        """Extra spaces before the name are ignored."""
        self.assertEqual(get_table_name("create table    bugs   (bug_id int)"), "bugs")

    def test_name_glued_to_column_list(self) -> None:
        """No grammar awareness: the token runs up to the next space."""
        self.assertEqual(get_table_name("create table foo(id int)"), "foo(id")

    def test_schema_qualified_name_is_verbatim(self) -> None:
        """Schema-qualified names come back whole."""
        self.assertEqual(get_table_name("create table app.users (user_id int)"), "app.users")

    def test_clause_without_name(self) -> None:
        """A bare CREATE TABLE has no table name."""
        self.assertIsNone(get_table_name("create table"))
        self.assertIsNone(get_table_name("create table   "))

    def test_clause_not_at_start(self) -> None:
        """The clause is found anywhere in the text."""
        sql = "drop table if exists bugs; create table bugs (bug_id int)"
        self.assertEqual(get_table_name(sql), "bugs")


class StatementKindTests(unittest.TestCase):
    """Tests for DDL / CREATE detection."""

    def test_create_is_ddl_and_create(self) -> None:
        """CREATE TABLE counts as DDL and as a create."""
        sql = "create table t (a int)"
        self.assertTrue(is_ddl_statement(sql))
        self.assertTrue(is_create_statement(sql))

    def test_alter_is_ddl_but_not_create(self) -> None:
        """ALTER TABLE counts as DDL only."""
        sql = "alter table t add column b int"
        self.assertTrue(is_ddl_statement(sql))
        self.assertFalse(is_create_statement(sql))

    def test_select_is_neither(self) -> None:
        """A SELECT is neither DDL nor a create."""
        sql = "select id from t"
        self.assertFalse(is_ddl_statement(sql))
        self.assertFalse(is_create_statement(sql))

    def test_substring_search_is_not_anchored(self) -> None:
        """Detection is a plain substring search."""
        sql = "select 'create table' from dual"
        self.assertTrue(is_ddl_statement(sql))
        self.assertTrue(is_create_statement(sql))


class StatementTests(unittest.TestCase):
    """Tests for the Statement value."""

    def test_text_is_lowercased(self) -> None:
        """Statement text is lowercased on construction."""
        statement = Statement("CREATE TABLE Accounts (ID INT)")
        self.assertEqual(statement.text, "create table accounts (id int)")
        self.assertEqual(statement.table_name, "accounts")

    def test_whitespace_is_kept(self) -> None:
        """Statement does not collapse whitespace."""
        statement = Statement("select  1")
        self.assertEqual(statement.text, "select  1")

    def test_facts_are_memoized(self) -> None:
        """Facts are computed on first access and cached."""
        statement = Statement("create table t (a int)")
        self.assertNotIn("is_create", statement.__dict__)
        self.assertTrue(statement.is_create)
        self.assertIn("is_create", statement.__dict__)
        self.assertTrue(statement.is_ddl)
        self.assertEqual(statement.table_name, "t")
        self.assertIn("table_name", statement.__dict__)

    def test_statement_is_immutable(self) -> None:
        """Statement text cannot be reassigned."""
        statement = Statement("select 1")
        with self.assertRaises(AttributeError):
            statement.text = "select 2"

    def test_normalize_statement(self) -> None:
        """normalize_statement trims, collapses and lowercases."""
        self.assertEqual(
            normalize_statement("  SELECT *\n\tFROM   Accounts  "),
            "select * from accounts",
        )


if __name__ == "__main__":
    unittest.main()
