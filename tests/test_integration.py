"""Integration tests for the check_sql() API."""

import unittest

from sqlcheck import Configuration, Risk, check_sql

SCHEMA_SQL = """
-- Bug tracker schema
CREATE TABLE Accounts (
    account_id   SERIAL PRIMARY KEY,
    account_name VARCHAR(20),
    password     VARCHAR(30),
    hourly_rate  FLOAT
);

CREATE TABLE Comments (
    comment_id  SERIAL PRIMARY KEY,
    parent_id   BIGINT REFERENCES Comments(comment_id),
    author      BIGINT NOT NULL,
    FOREIGN KEY (author) REFERENCES Accounts(account_id)
);

SELECT * FROM Accounts;

SELECT account_name FROM Accounts WHERE account_id = 1;
"""


class CheckSqlTests(unittest.TestCase):
    """Tests for the unified check_sql() API."""

    def test_one_report_per_statement(self) -> None:
        """Each statement in the input gets its own report."""
        report = check_sql(SCHEMA_SQL)
        self.assertEqual(len(report.statements), 4)
        self.assertEqual(report.summary.statements, 4)
        self.assertTrue(report.statements[0].statement.text.startswith("create table accounts"))
        self.assertFalse(report.statements[3].has_findings)

    def test_schema_findings(self) -> None:
        """Table definitions get the expected design findings."""
        report = check_sql(SCHEMA_SQL)
        accounts = [f.rule_id for f in report.statements[0].findings]
        self.assertIn("logical_design.foreign_key_exists", accounts)
        self.assertIn("physical_design.imprecise_data_type", accounts)
        self.assertIn("application.readable_passwords", accounts)
        self.assertNotIn("logical_design.primary_key_exists", accounts)

        comments = [f.rule_id for f in report.statements[1].findings]
        self.assertIn("logical_design.recursive_dependency", comments)
        self.assertIn("query.not_null_usage", comments)
        self.assertNotIn("logical_design.foreign_key_exists", comments)

    def test_select_star_statement(self) -> None:
        """The SELECT * statement gets exactly one finding."""
        report = check_sql(SCHEMA_SQL)
        self.assertEqual([f.title for f in report.statements[2].findings], ["SELECT *"])

    def test_high_risk_only(self) -> None:
        """Risk level 3 keeps only ERROR findings."""
        report = check_sql(SCHEMA_SQL, Configuration(risk_level=3))
        self.assertTrue(report.findings)
        self.assertTrue(all(f.risk is Risk.ERROR for f in report.findings))
        self.assertEqual(report.summary.total, report.summary.high)
        self.assertGreater(report.summary.suppressed, 0)

    def test_summary_matches_findings(self) -> None:
        """Summary counts agree with the findings list."""
        report = check_sql(SCHEMA_SQL)
        summary = report.summary
        self.assertEqual(summary.total, len(report.findings))
        self.assertEqual(summary.high + summary.medium + summary.low, summary.total)
        self.assertEqual(sum(summary.by_category.values()), summary.total)

    def test_repeated_runs_are_identical(self) -> None:
        """Repeated runs serialize identically."""
        first = check_sql(SCHEMA_SQL).to_dict()
        second = check_sql(SCHEMA_SQL).to_dict()
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
