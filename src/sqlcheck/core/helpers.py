"""Lexical statement helpers shared by the anti-pattern rules.

None of these functions parse SQL. They look for fixed clauses in
normalized (lowercased, whitespace-collapsed) statement text.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Optional

CREATE_TABLE = "create table"
ALTER_TABLE = "alter table"


def normalize_statement(text: str) -> str:
    """Collapse runs of whitespace to single spaces and lowercase the text."""
    return " ".join(text.split()).lower()


def is_ddl_statement(text: str) -> bool:
    """Check if the text creates or alters a table anywhere."""
    return CREATE_TABLE in text or ALTER_TABLE in text


def is_create_statement(text: str) -> bool:
    """Check if the text contains a CREATE TABLE clause."""
    return CREATE_TABLE in text


def get_table_name(text: str) -> Optional[str]:
    """Return the name defined by the first CREATE TABLE clause.

    The name is the first space-delimited token after the clause, so
    ``create table foo(id int)`` yields ``foo(id``. Quoted or
    schema-qualified names come back verbatim.

    Args:
        text: Normalized statement text

    Returns:
        The table name, or None if there is no CREATE TABLE clause or
        nothing follows it.
    """
    found = text.find(CREATE_TABLE)
    if found == -1:
        return None

    rest = " ".join(text[found + len(CREATE_TABLE):].split())
    table_name = rest.partition(" ")[0]
    return table_name or None


@dataclass(frozen=True)
class Statement:
    """A single SQL statement with its derived facts.

    The text is lowercased on construction. Facts are computed on first
    access and then shared by every rule evaluated against the statement.
    """

    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "text", self.text.lower())

    @cached_property
    def is_ddl(self) -> bool:
        return is_ddl_statement(self.text)

    @cached_property
    def is_create(self) -> bool:
        return is_create_statement(self.text)

    @cached_property
    def table_name(self) -> Optional[str]:
        return get_table_name(self.text)


__all__ = [
    "CREATE_TABLE",
    "ALTER_TABLE",
    "normalize_statement",
    "is_ddl_statement",
    "is_create_statement",
    "get_table_name",
    "Statement",
]
