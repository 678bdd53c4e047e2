"""Tests for the command-line interface."""

import io
import json
import tempfile
import unittest
from pathlib import Path

from rich.console import Console

from sqlcheck import cli
from sqlcheck.cli import main


def _console() -> tuple:
    buffer = io.StringIO()
    return Console(file=buffer, no_color=True, highlight=False, width=200), buffer


class CliTests(unittest.TestCase):
    """Tests for main()."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, sql: str) -> str:
        path = self.tmp / "input.sql"
        path.write_text(sql, encoding="utf-8")
        return str(path)

    def test_findings_exit_code_and_summary(self) -> None:
        """Findings print one line each, a summary, and exit with 1."""
        console, buffer = _console()
        code = main([self._write("SELECT * FROM Accounts;")], console=console)
        output = buffer.getvalue()

        self.assertEqual(code, 1)
        self.assertIn("(High Risk) (Query Anti-Pattern) SELECT *", output)
        self.assertIn("All Anti-Patterns and Hints  :: 1", output)
        self.assertIn(">  High Risk   :: 1", output)
        self.assertNotIn("select * from accounts", output)

    def test_clean_input(self) -> None:
        """Clean input exits with 0 and a zero total."""
        console, buffer = _console()
        code = main([self._write("select first_name from accounts where id = 1;")], console=console)
        self.assertEqual(code, 0)
        self.assertIn("All Anti-Patterns and Hints  :: 0", buffer.getvalue())

    def test_verbose_echoes_statement_and_message(self) -> None:
        """Verbose mode echoes flagged statements and rule messages."""
        console, buffer = _console()
        sql = "select first_name from accounts where id = 1; SELECT * FROM Accounts;"
        main([self._write(sql), "-v"], console=console)
        output = buffer.getvalue()

        self.assertIn("Statement 2", output)
        self.assertNotIn("Statement 1 ", output)
        self.assertIn("select * from accounts", output)
        self.assertIn("Inefficiency in moving data to the consumer", output)

    def test_risk_level_filters_output(self) -> None:
        """A higher risk level hides lower-risk findings."""
        console, buffer = _console()
        code = main([self._write("select * from t where a is null;"), "-r", "3"], console=console)
        output = buffer.getvalue()

        self.assertEqual(code, 1)
        self.assertIn("SELECT *", output)
        self.assertNotIn("NULL Usage", output)

    def test_invalid_risk_level(self) -> None:
        """An out-of-range risk level is an error, exit 2."""
        console, buffer = _console()
        code = main([self._write("select 1;"), "-r", "5"], console=console)
        self.assertEqual(code, 2)
        self.assertEqual(buffer.getvalue(), "")

    def test_unknown_rule(self) -> None:
        """An unknown rule id is an error, exit 2."""
        console, _ = _console()
        code = main([self._write("select 1;"), "--rules", "query.nope"], console=console)
        self.assertEqual(code, 2)

    def test_selected_rules(self) -> None:
        """--rules limits the run to the named rules."""
        console, buffer = _console()
        sql = "select * from t where a is null;"
        code = main([self._write(sql), "--rules", "query.null_usage"], console=console)
        output = buffer.getvalue()

        self.assertEqual(code, 1)
        self.assertIn("NULL Usage", output)
        self.assertNotIn("SELECT *", output)

    def test_json_output(self) -> None:
        """--output writes the JSON report, creating parent directories."""
        console, _ = _console()
        output_path = self.tmp / "out" / "report.json"
        main([self._write("select * from a; select * from b;"), "-o", str(output_path)], console=console)

        data = json.loads(output_path.read_text(encoding="utf-8"))
        self.assertEqual(data["summary"]["total"], 2)
        self.assertEqual(data["summary"]["statements"], 2)
        self.assertEqual([r["statement_index"] for r in data["results"]], [0, 1])

    def test_module_logger(self) -> None:
        """The CLI logs under its module name."""
        self.assertEqual(cli.logger.name, "sqlcheck.cli")

    def test_list_rules(self) -> None:
        """--list-rules prints the catalog and exits with 0."""
        console, buffer = _console()
        code = main(["--list-rules"], console=console)
        output = buffer.getvalue()

        self.assertEqual(code, 0)
        self.assertIn("query.select_star", output)
        self.assertIn("application.readable_passwords", output)


if __name__ == "__main__":
    unittest.main()
