"""Logical database design anti-patterns.

Rules:
- multi_valued_attribute: Lists of ids stored in a string column
- recursive_dependency: A table holding a foreign key to itself
- primary_key_exists: CREATE TABLE without a primary key
- generic_primary_key: A key column named just "id"
- foreign_key_exists: CREATE TABLE without any foreign key
- entity_attribute_value: Attribute tables that store schema as data
- metadata_tribbles: Columns or tables cloned with numeric suffixes
"""

from sqlcheck.core.base import (
    AbsentPatternRule,
    Category,
    Risk,
    TemplatePatternRule,
    TextPatternRule,
)
from sqlcheck.core.helpers import Statement
from sqlcheck.core.registry import register


@register
class MultiValuedAttributeRule(TextPatternRule):
    """Id lists kept in VARCHAR/TEXT columns."""

    rule_id = "logical_design.multi_valued_attribute"
    title = "Multi-Valued Attribute"
    category = Category.LOGICAL_DESIGN
    risk = Risk.ERROR
    pattern = r"(id\s+varchar)|(id\s+text)|(id\s+regexp)"
    message = (
        "Store each value in its own column and row:\n"
        "Storing a list of IDs as a VARCHAR/TEXT column can cause performance and data integrity\n"
        "problems. Querying against such a column would require using pattern-matching\n"
        "expressions. It is awkward and costly to join a comma-separated list to matching rows.\n"
        "This will make it harder to validate IDs. Think about what is the greatest number of\n"
        "entries this list must support? Instead of using a multi-valued attribute,\n"
        "consider storing it in a separate table, so that each individual value of that attribute\n"
        "occupies a separate row. Such an intersection table implements a many-to-many relationship\n"
        "between the two referenced tables. This will greatly simplify querying and validating\n"
        "the IDs.\n"
    )


@register
class RecursiveDependencyRule(TemplatePatternRule):
    """A CREATE TABLE whose foreign key references the table being created."""

    rule_id = "logical_design.recursive_dependency"
    title = "Recursive Dependency"
    category = Category.LOGICAL_DESIGN
    risk = Risk.ERROR
    template = r"(references\s+{table})"
    message = (
        "Avoid recursive relationships:\n"
        "It's common for data to have recursive relationships. Data may be organized in a\n"
        "treelike or hierarchical way. However, creating a foreign key constraint to enforce\n"
        "the relationship between two columns in the same table lends to awkward querying.\n"
        "Each level of the tree corresponds to another join. You will need to issue recursive\n"
        "queries to get all descendants or all ancestors of a node.\n"
        "A solution is to construct an additional closure table. It involves storing all paths\n"
        "through the tree, not just those with a direct parent-child relationship.\n"
        "You might want to compare different hierarchical data designs -- closure table,\n"
        "path enumeration, nested sets -- and pick one based on your application's needs.\n"
    )


@register
class PrimaryKeyExistsRule(AbsentPatternRule):
    """CREATE TABLE statements that never declare a primary key."""

    rule_id = "logical_design.primary_key_exists"
    title = "Primary Key Does Not Exist"
    category = Category.LOGICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(primary key)"
    message = (
        "Consider adding a primary key:\n"
        "A primary key constraint is important when you need to do the following:\n"
        "prevent a table from containing duplicate rows,\n"
        "reference individual rows in queries, and\n"
        "support foreign key references\n"
        "If you don't use primary key constraints, you create a chore for yourself:\n"
        "checking for duplicate rows. More often than not, you will need to define\n"
        "a primary key for every table. Use compound keys when they are appropriate.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_create


@register
class GenericPrimaryKeyRule(TextPatternRule):
    """Table definitions with a column named just "id"."""

    rule_id = "logical_design.generic_primary_key"
    title = "Generic Primary Key"
    category = Category.LOGICAL_DESIGN
    risk = Risk.ERROR
    pattern = r"(\s+[\(]?id\s+)|(,id\s+)|(\s+id\s+serial)"
    message = (
        "Skip using a generic primary key (id):\n"
        "Adding an id column to every table causes several effects that make its\n"
        "use seem arbitrary. You might end up creating a redundant key or allow\n"
        "duplicate rows if you add this column in a compound key.\n"
        "The name id is so generic that it holds no meaning. This is especially\n"
        "important when you join two tables and they have the same primary\n"
        "key column name.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_ddl


@register
class ForeignKeyExistsRule(AbsentPatternRule):
    """CREATE TABLE statements that declare no foreign key."""

    rule_id = "logical_design.foreign_key_exists"
    title = "Foreign Key Does Not Exist"
    category = Category.LOGICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(foreign key)"
    message = (
        "Consider adding a foreign key:\n"
        "Are you leaving out the application constraints? Even though it seems at\n"
        "first that skipping foreign key constraints makes your database design\n"
        "simpler, more flexible, or speedier, you pay for this in other ways.\n"
        "It becomes your responsibility to write code to ensure referential integrity\n"
        "manually. Use foreign key constraints to enforce referential integrity.\n"
        "Foreign keys have another feature you can't mimic using application code:\n"
        "cascading updates to multiple tables. This feature allows you to\n"
        "update or delete the parent row and lets the database takes care of any child\n"
        "rows that reference it. The way you declare the ON UPDATE or ON DELETE clauses\n"
        "in the foreign key constraint allow you to control the result of a cascading\n"
        "operation. Make your database mistake-proof with constraints.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_create


@register
class EntityAttributeValueRule(TextPatternRule):
    """Tables named after attributes, the usual sign of an EAV design."""

    rule_id = "logical_design.entity_attribute_value"
    title = "Entity-Attribute-Value Pattern"
    category = Category.LOGICAL_DESIGN
    risk = Risk.WARNING
    pattern = r"(attribute)"
    message = (
        "Dynamic schema with variable attributes:\n"
        "Are you trying to create a schema where you can define new attributes\n"
        "at runtime? This involves storing attributes as rows in an attribute table.\n"
        "This is referred to as the Entity-Attribute-Value or schemaless pattern.\n"
        "When you use this pattern, you sacrifice many advantages that a conventional\n"
        "database design would have given you. You can't make mandatory attributes.\n"
        "You can't enforce referential integrity. You might find that attributes are\n"
        "not being named consistently. A solution is to store all related types in one table,\n"
        "with distinct columns for every attribute that exists in any type\n"
        "(Single Table Inheritance). Use one attribute to define the subtype of a given row.\n"
        "Many attributes are subtype-specific, and these columns must\n"
        "be given a null value on any row storing an object for which the attribute\n"
        "does not apply; the columns with non-null values become sparse.\n"
        "Another solution is to create a separate table for each subtype\n"
        "(Concrete Table Inheritance). A third solution mimics inheritance,\n"
        "as though tables were object-oriented classes (Class Table Inheritance).\n"
        "Create a single table for the base type, containing attributes common to\n"
        "all subtypes. Then for each subtype, create another table, with a primary key\n"
        "that also serves as a foreign key to the base table.\n"
        "If you have many subtypes or if you must support new attributes frequently,\n"
        "you can add a BLOB column to store data in a format such as XML or JSON,\n"
        "which encodes both the attribute names and their values.\n"
        "This design is best when you can't limit yourself to a finite set of subtypes\n"
        "and when you need complete flexibility to define new attributes at any time.\n"
    )

    def applies(self, statement: Statement) -> bool:
        table_name = statement.table_name
        return table_name is not None and "attribute" in table_name


_MULTI_COLUMN_MESSAGE = (
    "Store each value with the same meaning in a single column:\n"
    "Creating multiple columns in a table indicates that you are trying to store\n"
    "a multivalued attribute. This design makes it hard to add or remove values,\n"
    "to ensure the uniqueness of values, and handling growing sets of values.\n"
    "The best solution is to create a dependent table with one column for the\n"
    "multivalue attribute. Store the multiple values in multiple rows instead of\n"
    "multiple columns. Also, define a foreign key in the dependent table to associate\n"
    "the values to its parent row.\n"
)

_SPLIT_BY_YEAR_MESSAGE = (
    "Breaking down a table or column by year:\n"
    "You might be trying to split a single column into multiple columns,\n"
    "using column names based on distinct values in another attribute.\n"
    "Each year, you will need to add one more column or table.\n"
    "You are mixing metadata with data. You will now need to make sure that\n"
    "the primary key values are unique across all the split columns or tables.\n"
    "The solution is to use a feature called sharding or horizontal partitioning.\n"
    "(PARTITION BY HASH ( YEAR(...) ). With this feature, you can gain the\n"
    "benefits of splitting a large table without the drawbacks.\n"
    "Partitioning is not defined in the SQL standard, so each brand of database\n"
    "implements it in their own nonstandard way.\n"
    "Another remedy for metadata tribbles is to create a dependent table.\n"
    "Instead of one row per entity with multiple columns for each year,\n"
    "use multiple rows. Don't let data spawn metadata.\n"
)


@register
class MetadataTribblesRule(TextPatternRule):
    """Names ending in digits (bug1, bug2, sales_2019) inside table definitions."""

    rule_id = "logical_design.metadata_tribbles"
    title = "Metadata Tribbles"
    category = Category.LOGICAL_DESIGN
    risk = Risk.ERROR
    pattern = r"[A-za-z\-_@]+[0-9]+ "
    message = _MULTI_COLUMN_MESSAGE + "\n" + _SPLIT_BY_YEAR_MESSAGE

    def applies(self, statement: Statement) -> bool:
        return statement.is_ddl


__all__ = [
    "MultiValuedAttributeRule",
    "RecursiveDependencyRule",
    "PrimaryKeyExistsRule",
    "GenericPrimaryKeyRule",
    "ForeignKeyExistsRule",
    "EntityAttributeValueRule",
    "MetadataTribblesRule",
]
