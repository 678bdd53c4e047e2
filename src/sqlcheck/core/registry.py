"""Rule registry holding the ordered anti-pattern catalog."""

import logging
from typing import Dict, Iterable, List, Optional, Tuple, Type, Union

from .base import Category, Rule
from .errors import RuleDefinitionError

logger = logging.getLogger(__name__)

# Insertion order is declaration order, which is also evaluation order.
_registry: Dict[str, Rule] = {}


def register(cls: Type[Rule]) -> Type[Rule]:
    """Decorator to register a rule class.

    The class is instantiated immediately so that a malformed definition
    (invalid pattern, missing metadata) fails at import time.

    Usage:
        @register
        class MyRule(TextPatternRule):
            rule_id = "query.my_rule"
            ...
    """
    rule_id = getattr(cls, "rule_id", None)
    if not rule_id:
        raise RuleDefinitionError(f"Rule class {cls.__name__} must define 'rule_id' attribute")
    if rule_id in _registry:
        raise RuleDefinitionError(f"Rule '{rule_id}' is already registered")
    _registry[rule_id] = cls()
    logger.debug("Registered rule %s (%s)", rule_id, cls.__name__)
    return cls


def get_all_rules() -> List[Rule]:
    """Return all registered rules in declaration order."""
    return list(_registry.values())


def get_rule(rule_id: str) -> Rule:
    """Get a specific rule by ID.

    Args:
        rule_id: The unique rule identifier

    Returns:
        The registered Rule instance

    Raises:
        KeyError: If rule_id is not found
    """
    if rule_id not in _registry:
        raise KeyError(f"Rule '{rule_id}' not found. Available: {list(_registry.keys())}")
    return _registry[rule_id]


def get_rules_by_category(category: Union[Category, str]) -> List[Rule]:
    """Get all rules in a category, in declaration order.

    Args:
        category: A Category or its value (e.g., 'query', 'logical_design')

    Returns:
        List of registered rules in that category
    """
    category = Category(category)
    return [r for r in _registry.values() if r.category is category]


def build_catalog(
    rule_ids: Optional[Iterable[str]] = None,
    categories: Optional[Iterable[Union[Category, str]]] = None,
) -> Tuple[Rule, ...]:
    """Select the rules to run, always in declaration order.

    Args:
        rule_ids: Optional specific rule IDs to run (overrides categories)
        categories: Optional categories to run (None = all)

    Returns:
        Tuple of rules in declaration order

    Raises:
        KeyError: If a requested rule_id is not registered
        ValueError: If a requested category is unknown
    """
    if rule_ids:
        wanted = {get_rule(r).rule_id for r in rule_ids}
        return tuple(r for r in _registry.values() if r.rule_id in wanted)
    if categories:
        wanted_categories = {Category(c) for c in categories}
        return tuple(r for r in _registry.values() if r.category in wanted_categories)
    return tuple(_registry.values())


def list_rules() -> Dict[str, str]:
    """List all registered rules with their titles.

    Returns:
        Dictionary mapping rule_id to title
    """
    return {rule_id: rule.title for rule_id, rule in _registry.items()}


def clear_registry() -> None:
    """Clear the registry. Useful for testing."""
    _registry.clear()


__all__ = [
    "register",
    "get_all_rules",
    "get_rule",
    "get_rules_by_category",
    "build_catalog",
    "list_rules",
    "clear_registry",
]
