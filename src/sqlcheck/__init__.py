"""SQLCheck - lexical detection of SQL anti-patterns.

Checks SQL statements against a catalog of logical design, physical design,
query and application anti-patterns and reports each finding with a risk tier.
"""

from typing import Optional, Sequence

from .core.base import Category, Finding, MatchResult, Risk, Rule
from .core.config import Configuration
from .core.errors import ConfigurationError, RuleDefinitionError, SQLCheckError, StatementExtractionError
from .core.evaluator import Aggregator, admit, check_statement, check_statements, evaluate
from .core.helpers import Statement, get_table_name, is_create_statement, is_ddl_statement
from .core.registry import build_catalog, get_all_rules, get_rule, get_rules_by_category, list_rules
from .core.report import Report, StatementReport, Summary
from .extract import split_statements

# Import rules to trigger registration
from . import rules


def check_sql(
    sql: str,
    config: Optional[Configuration] = None,
    catalog: Optional[Sequence[Rule]] = None,
) -> Report:
    """Split raw SQL into statements and check each of them.

    Args:
        sql: Raw SQL text, one or more statements
        config: Run configuration (default: report everything, postgres tokenizer)
        catalog: Rules to evaluate (default: every registered rule)

    Returns:
        Report with one StatementReport per statement and run totals
    """
    config = config or Configuration()
    statements = split_statements(sql, dialect=config.dialect)
    return check_statements(statements, config, catalog=catalog)


__all__ = [
    # Main API
    "check_sql",
    "check_statement",
    "check_statements",
    "split_statements",

    # Core classes
    "Rule",
    "Risk",
    "Category",
    "MatchResult",
    "Finding",
    "Statement",
    "Configuration",
    "Report",
    "StatementReport",
    "Summary",
    "Aggregator",
    "evaluate",
    "admit",

    # Statement helpers
    "is_ddl_statement",
    "is_create_statement",
    "get_table_name",

    # Registry
    "get_all_rules",
    "get_rule",
    "get_rules_by_category",
    "build_catalog",
    "list_rules",

    # Errors
    "SQLCheckError",
    "RuleDefinitionError",
    "ConfigurationError",
    "StatementExtractionError",
]
