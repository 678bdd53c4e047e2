"""Report structures handed to the presentation layer."""

from dataclasses import dataclass, field
from typing import Dict, Tuple

from .base import Category, Finding, Risk
from .helpers import Statement


@dataclass(frozen=True)
class StatementReport:
    """Findings for one statement, in catalog order."""

    index: int
    statement: Statement
    findings: Tuple[Finding, ...] = ()

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    def to_dict(self) -> dict:
        return {
            "statement_index": self.index,
            "statement": self.statement.text,
            "findings": [f.to_dict() for f in self.findings],
        }


@dataclass(frozen=True)
class Summary:
    """Run-wide totals over every reported finding."""

    total: int = 0
    by_risk: Dict[Risk, int] = field(default_factory=dict)
    by_category: Dict[Category, int] = field(default_factory=dict)
    suppressed: int = 0
    statements: int = 0

    @property
    def high(self) -> int:
        return self.by_risk.get(Risk.ERROR, 0)

    @property
    def medium(self) -> int:
        return self.by_risk.get(Risk.WARNING, 0)

    @property
    def low(self) -> int:
        return self.by_risk.get(Risk.INFO, 0)

    def to_dict(self) -> dict:
        return {
            "statements": self.statements,
            "total": self.total,
            "by_risk": {r.name.lower(): self.by_risk.get(r, 0) for r in Risk},
            "by_category": {c.value: self.by_category.get(c, 0) for c in Category},
            "suppressed": self.suppressed,
        }


@dataclass(frozen=True)
class Report:
    """Everything a run produced: statement reports in input order plus totals."""

    statements: Tuple[StatementReport, ...] = ()
    summary: Summary = field(default_factory=Summary)

    @property
    def findings(self) -> Tuple[Finding, ...]:
        return tuple(f for s in self.statements for f in s.findings)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "results": [s.to_dict() for s in self.statements if s.has_findings],
        }


__all__ = ["StatementReport", "Summary", "Report"]
