"""Base classes for SQLCheck anti-pattern rules."""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Pattern

from .errors import RuleDefinitionError
from .helpers import Statement


class Risk(IntEnum):
    """Risk tier of an anti-pattern, ordered by severity.

    The integer values double as the user-selectable minimum risk level:
    level 1 reports everything, level 3 reports errors only.
    """

    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def label(self) -> str:
        return _RISK_LABELS[self]


_RISK_LABELS = {
    Risk.INFO: "Low Risk",
    Risk.WARNING: "Medium Risk",
    Risk.ERROR: "High Risk",
}


class Category(Enum):
    """Which part of database work an anti-pattern belongs to."""

    LOGICAL_DESIGN = "logical_design"
    PHYSICAL_DESIGN = "physical_design"
    QUERY = "query"
    APPLICATION = "application"

    @property
    def display_name(self) -> str:
        return _CATEGORY_NAMES[self]


_CATEGORY_NAMES = {
    Category.LOGICAL_DESIGN: "Logical Database Design Anti-Pattern",
    Category.PHYSICAL_DESIGN: "Physical Database Design Anti-Pattern",
    Category.QUERY: "Query Anti-Pattern",
    Category.APPLICATION: "Application Development Anti-Pattern",
}


@dataclass(frozen=True)
class MatchResult:
    """Outcome of testing one rule against one statement."""

    fired: bool
    count: int = 0


NOT_FIRED = MatchResult(fired=False, count=0)


@dataclass(frozen=True)
class Finding:
    """One rule that fired on one statement and passed the risk filter."""

    statement_index: int
    rule_id: str
    title: str
    category: Category
    risk: Risk
    match_count: int
    message: str = field(default="", repr=False, compare=False)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "statement_index": self.statement_index,
            "rule_id": self.rule_id,
            "title": self.title,
            "category": self.category.value,
            "risk": self.risk.name.lower(),
            "match_count": self.match_count,
        }


def compile_pattern(rule_id: str, pattern: str) -> Pattern[str]:
    """Compile a rule's regular expression, failing with the rule id attached."""
    if not pattern:
        raise RuleDefinitionError(f"Rule '{rule_id}' must define a non-empty 'pattern'")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise RuleDefinitionError(f"Rule '{rule_id}' has an invalid pattern {pattern!r}: {e}") from e


class Rule(ABC):
    """Base class for all anti-pattern rules.

    Subclasses must define class attributes:
        rule_id: Unique identifier (e.g., "query.select_star")
        title: Human-readable name (e.g., "SELECT *")
        category: Category the anti-pattern belongs to
        risk: Risk tier reported when the rule fires
        message: Explanation shown to the user

    Subclasses may override applies() to skip statements the rule has
    nothing to say about, and must implement match().
    """

    rule_id: str
    title: str
    category: Category
    risk: Risk
    message: str

    def __init__(self) -> None:
        rule_id = getattr(self, "rule_id", None)
        if not rule_id:
            raise RuleDefinitionError(f"Rule class {type(self).__name__} must define 'rule_id'")
        if not getattr(self, "title", None):
            raise RuleDefinitionError(f"Rule '{rule_id}' must define 'title'")
        if not isinstance(getattr(self, "category", None), Category):
            raise RuleDefinitionError(f"Rule '{rule_id}' must define a Category")
        if not isinstance(getattr(self, "risk", None), Risk):
            raise RuleDefinitionError(f"Rule '{rule_id}' must define a Risk")
        if not getattr(self, "message", None):
            raise RuleDefinitionError(f"Rule '{rule_id}' must define 'message'")

    def applies(self, statement: Statement) -> bool:
        """Return False to skip the rule for this statement."""
        return True

    @abstractmethod
    def match(self, statement: Statement) -> MatchResult:
        """Test the rule against a statement it applies to."""
        pass

    def evaluate(self, statement: Statement) -> MatchResult:
        """Check the applicability guard, then match."""
        if not self.applies(statement):
            return NOT_FIRED
        return self.match(statement)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.rule_id}>"


class TextPatternRule(Rule):
    """Fires when a static pattern occurs at least min_occurrences times."""

    pattern: str
    min_occurrences: int = 1

    def __init__(self) -> None:
        super().__init__()
        if not isinstance(self.min_occurrences, int) or self.min_occurrences < 1:
            raise RuleDefinitionError(
                f"Rule '{self.rule_id}' needs min_occurrences >= 1, got {self.min_occurrences!r}"
            )
        self._regex = compile_pattern(self.rule_id, getattr(self, "pattern", ""))

    def count_matches(self, text: str) -> int:
        """Count non-overlapping matches.

        With a threshold of one, presence is all that matters and the
        count is capped at 1.
        """
        if self.min_occurrences == 1:
            return 1 if self._regex.search(text) else 0
        return sum(1 for _ in self._regex.finditer(text))

    def match(self, statement: Statement) -> MatchResult:
        count = self.count_matches(statement.text)
        return MatchResult(fired=count >= self.min_occurrences, count=count)


class AbsentPatternRule(Rule):
    """Fires when a required pattern does not occur at all."""

    pattern: str

    def __init__(self) -> None:
        super().__init__()
        self._regex = compile_pattern(self.rule_id, getattr(self, "pattern", ""))

    def match(self, statement: Statement) -> MatchResult:
        if self._regex.search(statement.text):
            return NOT_FIRED
        return MatchResult(fired=True, count=0)


class LengthThresholdRule(Rule):
    """Fires when the statement is at least min_length characters long."""

    min_length: int

    def __init__(self) -> None:
        super().__init__()
        min_length = getattr(self, "min_length", None)
        if not isinstance(min_length, int) or min_length < 1:
            raise RuleDefinitionError(f"Rule '{self.rule_id}' needs min_length >= 1, got {min_length!r}")

    def match(self, statement: Statement) -> MatchResult:
        if len(statement.text) >= self.min_length:
            return MatchResult(fired=True, count=1)
        return NOT_FIRED


class TemplatePatternRule(Rule):
    """Fires when a pattern built from the statement's own facts matches.

    The template is a format string with a ``{table}`` placeholder that is
    filled with the regex-escaped table name of the statement. Statements
    without a table name are skipped.
    """

    template: str

    def __init__(self) -> None:
        super().__init__()
        template = getattr(self, "template", "")
        if "{table}" not in template:
            raise RuleDefinitionError(f"Rule '{self.rule_id}' template must contain '{{table}}'")
        try:
            sample = template.format(table="t")
        except (IndexError, KeyError, ValueError) as e:
            raise RuleDefinitionError(f"Rule '{self.rule_id}' has an invalid template {template!r}: {e}") from e
        compile_pattern(self.rule_id, sample)

    def applies(self, statement: Statement) -> bool:
        return statement.table_name is not None

    def build_pattern(self, statement: Statement) -> Optional[Pattern[str]]:
        table_name = statement.table_name
        if table_name is None:
            return None
        return re.compile(self.template.format(table=re.escape(table_name)))

    def match(self, statement: Statement) -> MatchResult:
        regex = self.build_pattern(statement)
        if regex is None or not regex.search(statement.text):
            return NOT_FIRED
        return MatchResult(fired=True, count=1)


__all__ = [
    "Risk",
    "Category",
    "MatchResult",
    "NOT_FIRED",
    "Finding",
    "compile_pattern",
    "Rule",
    "TextPatternRule",
    "AbsentPatternRule",
    "LengthThresholdRule",
    "TemplatePatternRule",
]
