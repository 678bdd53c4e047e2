"""Split raw SQL text into normalized statements.

Statements are cut on semicolons using the sqlglot tokenizer, so
semicolons inside string literals and comments are left alone. Nothing is
parsed. Comments are dropped and the text of each statement is
lowercased with whitespace collapsed.
"""

import logging
from typing import List

from sqlglot.dialects.dialect import Dialect
from sqlglot.errors import TokenError
from sqlglot.tokens import Token, TokenType

from .core.config import DEFAULT_DIALECT
from .core.errors import ConfigurationError, StatementExtractionError
from .core.helpers import normalize_statement

logger = logging.getLogger(__name__)


def _join_tokens(sql: str, tokens: List[Token]) -> str:
    """Rebuild statement text from token spans, keeping one space for any gap."""
    parts: List[str] = []
    previous_end = None
    for token in tokens:
        if previous_end is not None and token.start > previous_end + 1:
            parts.append(" ")
        parts.append(sql[token.start:token.end + 1])
        previous_end = token.end
    return "".join(parts)


def split_statements(sql: str, dialect: str = DEFAULT_DIALECT) -> List[str]:
    """Split SQL content into normalized statements.

    Args:
        sql: Raw SQL text, possibly holding many statements
        dialect: sqlglot dialect whose tokenizer rules apply (default: postgres)

    Returns:
        Normalized statements in input order. Empty statements are skipped.

    Raises:
        ConfigurationError: If the dialect is unknown to sqlglot
        StatementExtractionError: If the text cannot be tokenized, e.g. an
            unterminated string literal
    """
    try:
        tokenizer_dialect = Dialect.get_or_raise(dialect)
    except ValueError as e:
        raise ConfigurationError(f"Unknown SQL dialect {dialect!r}") from e

    try:
        tokens = tokenizer_dialect.tokenize(sql)
    except TokenError as e:
        raise StatementExtractionError(f"Could not split SQL into statements: {e}") from e

    statements: List[str] = []
    current: List[Token] = []
    for token in tokens:
        if token.token_type == TokenType.SEMICOLON:
            if current:
                statements.append(normalize_statement(_join_tokens(sql, current)))
            current = []
            continue
        current.append(token)

    # Last statement might not end with a semicolon
    if current:
        statements.append(normalize_statement(_join_tokens(sql, current)))

    logger.debug("Extracted %d statements (dialect=%s)", len(statements), dialect)
    return statements


__all__ = ["split_statements"]
