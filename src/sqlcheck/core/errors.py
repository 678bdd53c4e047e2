"""Exception types raised by the SQLCheck engine."""


class SQLCheckError(Exception):
    """Base class for all SQLCheck errors."""


class RuleDefinitionError(SQLCheckError, ValueError):
    """A rule definition is malformed (bad regex, missing metadata, duplicate id).

    Raised while the catalog is being built, never while a statement is checked.
    """


class ConfigurationError(SQLCheckError, ValueError):
    """A run parameter is outside its accepted range."""


class StatementExtractionError(SQLCheckError):
    """Raw SQL text could not be split into statements."""


__all__ = [
    "SQLCheckError",
    "RuleDefinitionError",
    "ConfigurationError",
    "StatementExtractionError",
]
