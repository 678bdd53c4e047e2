"""Run configuration for a SQLCheck run."""

from dataclasses import dataclass

from .base import Risk
from .errors import ConfigurationError

RISK_LEVELS = tuple(int(r) for r in Risk)
DEFAULT_DIALECT = "postgres"


@dataclass(frozen=True)
class Configuration:
    """Immutable run parameters, validated once before any statement is checked.

    risk_level selects the minimum risk that is reported:
        1 - all anti-patterns and hints
        2 - medium and high risk
        3 - high risk only
    """

    risk_level: int = 1
    verbose: bool = False
    color: bool = False
    dialect: str = DEFAULT_DIALECT

    def __post_init__(self) -> None:
        level = self.risk_level
        if isinstance(level, bool) or not isinstance(level, int) or level not in RISK_LEVELS:
            raise ConfigurationError(
                f"Unrecognized risk level {level!r}; expected one of {list(RISK_LEVELS)}"
            )
        if not self.dialect:
            raise ConfigurationError("A SQL dialect name is required")

    @property
    def min_risk(self) -> Risk:
        return Risk(self.risk_level)


__all__ = ["Configuration", "RISK_LEVELS", "DEFAULT_DIALECT"]
