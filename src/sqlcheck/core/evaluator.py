"""Rule evaluation, risk filtering and aggregation."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Union

from .base import Category, Finding, MatchResult, Risk, Rule
from .config import Configuration
from .helpers import Statement
from .registry import build_catalog
from .report import Report, StatementReport, Summary

logger = logging.getLogger(__name__)


def evaluate(rule: Rule, statement: Statement) -> MatchResult:
    """Decide whether a rule fires on a statement, and with what count."""
    return rule.evaluate(statement)


def admit(
    rule: Rule,
    match: MatchResult,
    config: Configuration,
    statement_index: int = 0,
) -> Optional[Finding]:
    """Turn a fired rule into a Finding unless the risk level filters it out.

    Returns:
        The Finding, or None if the rule did not fire or its risk is below
        the configured minimum.
    """
    if not match.fired:
        return None
    if rule.risk < config.min_risk:
        return None
    return Finding(
        statement_index=statement_index,
        rule_id=rule.rule_id,
        title=rule.title,
        category=rule.category,
        risk=rule.risk,
        match_count=match.count,
        message=rule.message,
    )


@dataclass
class Aggregator:
    """Running totals for one run.

    A rule counts once per statement it fires on, however many times its
    pattern matched.
    """

    by_risk: Dict[Risk, int] = field(default_factory=lambda: {r: 0 for r in Risk})
    by_category: Dict[Category, int] = field(default_factory=lambda: {c: 0 for c in Category})
    suppressed: int = 0
    statements: int = 0

    def record(self, finding: Finding) -> None:
        self.by_risk[finding.risk] += 1
        self.by_category[finding.category] += 1

    def suppress(self) -> None:
        """Count a firing that the risk level kept out of the report."""
        self.suppressed += 1

    def count_statement(self) -> None:
        self.statements += 1

    @property
    def total(self) -> int:
        return sum(self.by_risk.values())

    def summary(self) -> Summary:
        return Summary(
            total=self.total,
            by_risk=dict(self.by_risk),
            by_category=dict(self.by_category),
            suppressed=self.suppressed,
            statements=self.statements,
        )


def check_statement(
    statement: Union[Statement, str],
    config: Configuration,
    index: int = 0,
    catalog: Optional[Sequence[Rule]] = None,
    aggregator: Optional[Aggregator] = None,
) -> StatementReport:
    """Run the catalog against one normalized statement.

    Args:
        statement: Normalized statement text, or a Statement
        config: Run configuration
        index: Position of the statement in the run
        catalog: Rules to evaluate (default: every registered rule)
        aggregator: Totals to update, if the caller keeps any

    Returns:
        StatementReport whose findings follow catalog order
    """
    if not isinstance(statement, Statement):
        statement = Statement(statement)
    rules = build_catalog() if catalog is None else catalog

    findings = []
    for rule in rules:
        match = evaluate(rule, statement)
        if not match.fired:
            continue

        finding = admit(rule, match, config, statement_index=index)
        if finding is None:
            logger.debug("Statement %d: %s suppressed at risk level %d", index, rule.rule_id, config.risk_level)
            if aggregator is not None:
                aggregator.suppress()
            continue

        logger.debug("Statement %d: %s fired (%d matches)", index, rule.rule_id, match.count)
        findings.append(finding)
        if aggregator is not None:
            aggregator.record(finding)

    if aggregator is not None:
        aggregator.count_statement()

    return StatementReport(index=index, statement=statement, findings=tuple(findings))


def check_statements(
    statements: Iterable[Union[Statement, str]],
    config: Configuration,
    catalog: Optional[Sequence[Rule]] = None,
) -> Report:
    """Check statements in input order and return the full report."""
    rules = build_catalog() if catalog is None else tuple(catalog)
    aggregator = Aggregator()

    reports = [
        check_statement(statement, config, index=idx, catalog=rules, aggregator=aggregator)
        for idx, statement in enumerate(statements)
    ]

    summary = aggregator.summary()
    logger.info(
        "Checked %d statements against %d rules: %d findings (%d suppressed)",
        summary.statements,
        len(rules),
        summary.total,
        summary.suppressed,
    )
    return Report(statements=tuple(reports), summary=summary)


__all__ = [
    "evaluate",
    "admit",
    "Aggregator",
    "check_statement",
    "check_statements",
]
