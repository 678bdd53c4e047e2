"""SQLCheck core module - Rule base classes, registry and evaluation engine."""

from .base import (
    AbsentPatternRule,
    Category,
    Finding,
    LengthThresholdRule,
    MatchResult,
    Risk,
    Rule,
    TemplatePatternRule,
    TextPatternRule,
)
from .config import Configuration
from .errors import ConfigurationError, RuleDefinitionError, SQLCheckError, StatementExtractionError
from .evaluator import Aggregator, admit, check_statement, check_statements, evaluate
from .helpers import Statement, get_table_name, is_create_statement, is_ddl_statement
from .registry import build_catalog, get_all_rules, get_rule, get_rules_by_category, list_rules, register
from .report import Report, StatementReport, Summary

__all__ = [
    "Rule",
    "TextPatternRule",
    "AbsentPatternRule",
    "LengthThresholdRule",
    "TemplatePatternRule",
    "Risk",
    "Category",
    "MatchResult",
    "Finding",
    "Configuration",
    "SQLCheckError",
    "RuleDefinitionError",
    "ConfigurationError",
    "StatementExtractionError",
    "Aggregator",
    "evaluate",
    "admit",
    "check_statement",
    "check_statements",
    "Statement",
    "is_ddl_statement",
    "is_create_statement",
    "get_table_name",
    "register",
    "get_all_rules",
    "get_rule",
    "get_rules_by_category",
    "build_catalog",
    "list_rules",
    "Report",
    "StatementReport",
    "Summary",
]
