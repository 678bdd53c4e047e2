"""CLI entry point for checking SQL files for anti-patterns."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sqlcheck import check_statements, split_statements
from sqlcheck.core.base import Category, Risk
from sqlcheck.core.config import DEFAULT_DIALECT, Configuration
from sqlcheck.core.errors import SQLCheckError
from sqlcheck.core.registry import build_catalog, get_all_rules
from sqlcheck.core.report import Report, StatementReport

logger = logging.getLogger(__name__)

RISK_STYLES = {
    Risk.ERROR: "bold red",
    Risk.WARNING: "yellow",
    Risk.INFO: "cyan",
}


def _read_sql(sql_file: str | None) -> str:
    if sql_file:
        return Path(sql_file).read_text(encoding="utf-8")
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise SystemExit("Provide a SQL file path or pipe SQL via stdin.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detect anti-patterns in SQL statements."
    )
    parser.add_argument(
        "sql_file",
        nargs="?",
        help="Path to SQL file. If not provided, reads from stdin."
    )
    parser.add_argument(
        "-r",
        "--risk-level",
        type=int,
        default=1,
        help="Minimum risk to report: 1 = all anti-patterns and hints, "
             "2 = medium and high risk, 3 = high risk only (default: 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Echo each offending statement and explain every anti-pattern.",
    )
    parser.add_argument(
        "-c",
        "--color",
        action="store_true",
        help="Colorize output.",
    )
    parser.add_argument(
        "--dialect",
        default=DEFAULT_DIALECT,
        help=f"SQL dialect whose tokenizer splits statements (default: {DEFAULT_DIALECT}).",
    )
    parser.add_argument(
        "--rules",
        nargs="*",
        help="Specific rule IDs to run (e.g., query.select_star).",
    )
    parser.add_argument(
        "--categories",
        nargs="*",
        choices=[c.value for c in Category],
        help="Rule categories to run (default: all).",
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Also write a JSON report to this path.",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List the rule catalog and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def make_console(config: Configuration) -> Console:
    if config.color:
        return Console(highlight=False, force_terminal=True)
    return Console(highlight=False, no_color=True)


def print_rules(console: Console) -> None:
    table = Table(title="SQL anti-pattern rules")
    table.add_column("Rule ID")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Risk")
    for rule in get_all_rules():
        table.add_row(
            rule.rule_id,
            escape(rule.title),
            rule.category.display_name,
            f"[{RISK_STYLES[rule.risk]}]{rule.risk.label}[/]",
        )
    console.print(table)


def print_statement_report(console: Console, result: StatementReport, config: Configuration) -> None:
    """Print findings for one statement; the statement itself only in verbose mode."""
    if not result.has_findings:
        return

    if config.verbose:
        console.print(f"==================== Statement {result.index + 1} ====================", style="bold")
        console.print(result.statement.text, markup=False)
        console.print()

    for finding in result.findings:
        console.print(
            f"[{RISK_STYLES[finding.risk]}]({finding.risk.label})[/] "
            f"({finding.category.display_name}) {escape(finding.title)}"
        )
        if config.verbose:
            console.print(finding.message, markup=False)


def print_summary(console: Console, report: Report) -> None:
    summary = report.summary
    console.print("==================== Summary ===================", style="bold")
    console.print(f"All Anti-Patterns and Hints  :: {summary.total}")
    console.print(f">  High Risk   :: {summary.high}", style=RISK_STYLES[Risk.ERROR])
    console.print(f">  Medium Risk :: {summary.medium}", style=RISK_STYLES[Risk.WARNING])
    console.print(f">  Low Risk    :: {summary.low}", style=RISK_STYLES[Risk.INFO])


def run(args: argparse.Namespace, console: Optional[Console] = None) -> int:
    """Run a check for already-parsed arguments.

    Returns:
        Exit code (0 = no findings, 1 = findings reported, 2 = error)
    """
    config = Configuration(
        risk_level=args.risk_level,
        verbose=args.verbose,
        color=args.color,
        dialect=args.dialect,
    )
    console = console or make_console(config)

    if args.list_rules:
        print_rules(console)
        return 0

    catalog = build_catalog(rule_ids=args.rules, categories=args.categories)
    sql = _read_sql(args.sql_file)
    statements = split_statements(sql, dialect=config.dialect)
    report = check_statements(statements, config, catalog=catalog)

    for result in report.statements:
        print_statement_report(console, result, config)
    print_summary(console, report)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
        console.print(f"Report saved to: {output_path.absolute()}", markup=False)

    return 1 if report.summary.total else 0


def main(argv: Sequence[str] | None = None, console: Optional[Console] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return run(args, console)
    except (SQLCheckError, KeyError, OSError) as e:
        logger.debug("Run failed", exc_info=True)
        err = Console(stderr=True, highlight=False)
        err.print(f"Error: {e}", style="bold red", markup=False)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
