"""Physical database design anti-patterns.

Rules:
- imprecise_data_type: FLOAT/REAL/DOUBLE PRECISION columns and tiny literals
- values_in_definition: ENUM or IN (...) checks baked into a column definition
- external_files: File paths stored in place of the data itself
- index_count: CREATE TABLE declaring three or more indexes
- index_attribute_order: Compound indexes whose column order matters
"""

from sqlcheck.core.base import Category, Risk, TextPatternRule
from sqlcheck.core.helpers import Statement
from sqlcheck.core.registry import register


@register
class ImpreciseDataTypeRule(TextPatternRule):
    """Floating point types used where exact values are expected."""

    rule_id = "physical_design.imprecise_data_type"
    title = "Imprecise Data Type"
    category = Category.PHYSICAL_DESIGN
    risk = Risk.ERROR
    pattern = r"(float)|(real)|(double precision)|(0\.000[0-9]*)"
    message = (
        "Use precise data types:\n"
        "Virtually any use of FLOAT, REAL, or DOUBLE PRECISION data types is suspect.\n"
        "Most applications that use floating-point numbers don't require the range of\n"
        "values supported by IEEE 754 formats. The cumulative impact of inexact\n"
        "floating-point numbers is severe when calculating aggregates.\n"
        "Instead of FLOAT or its siblings, use the NUMERIC or DECIMAL SQL data types\n"
        "for fixed-precision fractional numbers. These data types store numeric values\n"
        "exactly, up to the precision you specify in the column definition.\n"
        "Do not use FLOAT if you can avoid it.\n"
    )


@register
class ValuesInDefinitionRule(TextPatternRule):
    """Allowed values hard-coded into DDL."""

    rule_id = "physical_design.values_in_definition"
    title = "Values In Definition"
    category = Category.PHYSICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(enum)|(in \()"
    message = (
        "Don't specify values in column definition:\n"
        "With enum, you declare the values as strings,\n"
        "but internally the column is stored as the ordinal number of the string\n"
        "in the enumerated list. The storage is therefore compact, but when you\n"
        "sort a query by this column, the result is ordered by the ordinal value,\n"
        "not alphabetically by the string value. You may not expect this behavior.\n"
        "There's no syntax to add or remove a value from an ENUM or check constraint;\n"
        "you can only redefine the column with a new set of values.\n"
        "Moreover, if you make a value obsolete, you could upset historical data.\n"
        "As a matter of policy, changing metadata (that is, changing the definition\n"
        "of tables and columns) should be infrequent and with attention to testing and\n"
        "quality assurance. There's a better solution to restrict values in a column:\n"
        "create a lookup table with one row for each value you allow.\n"
        "Then declare a foreign key constraint on the old table referencing\n"
        "the new table.\n"
        "Use metadata when validating against a fixed set of values.\n"
        "Use data when validating against a fluid set of values.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_ddl


@register
class ExternalFilesRule(TextPatternRule):
    """Path columns and unlink() calls that manage files outside the database."""

    rule_id = "physical_design.external_files"
    title = "Files Are Not SQL Data Types"
    category = Category.PHYSICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(path varchar)|(unlink\s?\()"
    message = (
        "Resources outside the database are not managed by the database:\n"
        "It's common for programmers to be unequivocal that we should always\n"
        "store files external to the database.\n"
        "Files don't obey DELETE, transaction isolation, rollback, or work well with\n"
        "database backup tools. They do not obey SQL access privileges and are not SQL\n"
        "data types.\n"
        "Resources outside the database are not managed by the database.\n"
        "You should consider storing blobs inside the database instead of in\n"
        "external files. You can save the contents of a BLOB column to a file.\n"
    )


@register
class IndexCountRule(TextPatternRule):
    """Table definitions carrying many indexes."""

    rule_id = "physical_design.index_count"
    title = "Too Many Indexes"
    category = Category.PHYSICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(index)"
    min_occurrences = 3
    message = (
        "Don't create too many indexes:\n"
        "You benefit from an index only if you run queries that use that index.\n"
        "There's no benefit to creating indexes that you don't use.\n"
        "If you cover a database table with indexes, you incur a lot of overhead\n"
        "with no assurance of payoff.\n"
        "Consider dropping unnecessary indexes.\n"
        "If an index provides all the columns we need, then we don't need to read\n"
        "rows of data from the table at all. Consider using such covering indexes.\n"
        "Know your data, know your queries, and maintain the right set of indexes.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_create


@register
class IndexAttributeOrderRule(TextPatternRule):
    """Reminder that compound index column order must follow the queries."""

    rule_id = "physical_design.index_attribute_order"
    title = "Index Attribute Order"
    category = Category.PHYSICAL_DESIGN
    risk = Risk.INFO
    pattern = r"(create index)"
    message = (
        "Align index attributes with query attributes:\n"
        "If you create a compound index for the columns, make sure that the query\n"
        "attributes are in the same order as the index attributes, so that the DBMS\n"
        "can use the index while processing the query.\n"
        "If the query and index attribute orders are not aligned, then the DBMS might\n"
        "be unable to use the index during query processing.\n"
        "EX: CREATE INDEX TelephoneBook ON Accounts(last_name, first_name);\n"
        "SELECT * FROM Accounts ORDER BY first_name, last_name;\n"
    )


__all__ = [
    "ImpreciseDataTypeRule",
    "ValuesInDefinitionRule",
    "ExternalFilesRule",
    "IndexCountRule",
    "IndexAttributeOrderRule",
]
