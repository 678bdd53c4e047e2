"""Query anti-patterns.

Rules:
- select_star: SELECT * column lists
- null_usage: Any use of NULL
- not_null_usage: NOT NULL columns in table definitions
- string_concatenation: || over possibly-null columns
- group_by_usage: GROUP BY and the single-value rule
- order_by_rand: ORDER BY RAND() for random sampling
- pattern_matching: LIKE / REGEXP predicates
- spaghetti_query: Very long statements
- join_count: Five or more JOINs
- distinct_count: Two or more DISTINCTs
- implicit_columns: INSERT without a column list
- having_usage: HAVING clauses
- nested_subquery: Nested SELECTs
- or_usage: OR in predicates
- union_usage: UNION of result sets
- distinct_join: DISTINCT covering up a JOIN fan-out
"""

from sqlcheck.core.base import Category, LengthThresholdRule, Risk, TextPatternRule
from sqlcheck.core.helpers import Statement
from sqlcheck.core.registry import register

SPAGHETTI_QUERY_LENGTH = 500

_MOVING_DATA_MESSAGE = (
    "Inefficiency in moving data to the consumer:\n"
    "When you SELECT *, you're often retrieving more columns from the database than\n"
    "your application really needs to function. This causes more data to move from\n"
    "the database server to the client, slowing access and increasing load on your\n"
    "machines, as well as taking more time to travel across the network. This is\n"
    "especially true when someone adds new columns to underlying tables that didn't\n"
    "exist and weren't needed when the original consumers coded their data access.\n"
)

_INDEXING_MESSAGE = (
    "Indexing issues:\n"
    "Consider a scenario where you want to tune a query to a high level of performance.\n"
    "If you were to use *, and it returned more columns than you actually needed,\n"
    "the server would often have to perform more expensive methods to retrieve your\n"
    "data than it otherwise might. For example, you wouldn't be able to create an index\n"
    "which simply covered the columns in your SELECT list, and even if you did\n"
    "(including all columns), the next person who came around and added a column\n"
    "to the underlying table would cause the optimizer to ignore your optimized covering\n"
    "index, and you'd likely find that the performance of your query would drop\n"
    "substantially for no readily apparent reason.\n"
)

_BINDING_MESSAGE = (
    "Binding problems:\n"
    "When you SELECT *, it's possible to retrieve two columns of the same name from two\n"
    "different tables. This can often crash your data consumer. Imagine a query that joins\n"
    "two tables, both of which contain a column called \"ID\". How would a consumer know\n"
    "which was which? SELECT * can also confuse views (at least in some versions of SQL Server)\n"
    "when underlying table structures change: the view is not rebuilt, and the data which\n"
    "comes back can be nonsense. And the worst part of it is that you can take care to name\n"
    "your columns whatever you want, but the next person who comes along might have no way of\n"
    "knowing that they have to worry about adding a column which will collide with your\n"
    "already-developed names.\n"
)


@register
class SelectStarRule(TextPatternRule):
    """SELECT * instead of an explicit column list."""

    rule_id = "query.select_star"
    title = "SELECT *"
    category = Category.QUERY
    risk = Risk.ERROR
    pattern = r"(select\s+\*)"
    message = _MOVING_DATA_MESSAGE + "\n" + _INDEXING_MESSAGE + "\n" + _BINDING_MESSAGE


@register
class NullUsageRule(TextPatternRule):
    rule_id = "query.null_usage"
    title = "NULL Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(null)"
    message = (
        "Use NULL as a unique value:\n"
        "NULL is not the same as zero. A number ten greater than an unknown is still an unknown.\n"
        "NULL is not the same as a string of zero length.\n"
        "Combining any string with NULL in standard SQL returns NULL.\n"
        "NULL is not the same as false. Boolean expressions with AND, OR, and NOT also produce\n"
        "results that some people find confusing.\n"
        "When you declare a column as NOT NULL, it should be because it would make no sense\n"
        "for the row to exist without a value in that column.\n"
        "Use null to signify a missing value for any data type.\n"
    )


@register
class NotNullUsageRule(TextPatternRule):
    rule_id = "query.not_null_usage"
    title = "NOT NULL Usage"
    category = Category.QUERY
    risk = Risk.WARNING
    pattern = r"(not null)"
    message = (
        "Use NOT NULL only if the column cannot have a missing value:\n"
        "When you declare a column as NOT NULL, it should be because it would make no sense\n"
        "for the row to exist without a value in that column.\n"
        "Use null to signify a missing value for any data type.\n"
    )

    def applies(self, statement: Statement) -> bool:
        return statement.is_create


@register
class StringConcatenationRule(TextPatternRule):
    rule_id = "query.string_concatenation"
    title = "String Concatenation"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"\|\|"
    message = (
        "Use COALESCE for string concatenation of nullable columns:\n"
        "You may need to force a column or expression to be non-null for the sake of\n"
        "simplifying the query logic, but you don't want that value to be stored.\n"
        "Use COALESCE function to construct the concatenated expression so that a\n"
        "null-valued column doesn't make the whole expression become null.\n"
        "EX: SELECT first_name || COALESCE(' ' || middle_initial || ' ', ' ') || last_name\n"
        "AS full_name FROM Accounts;\n"
    )


@register
class GroupByUsageRule(TextPatternRule):
    rule_id = "query.group_by_usage"
    title = "GROUP BY Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(group by)"
    message = (
        "Do not reference non-grouped columns:\n"
        "Every column in the select-list of a query must have a single value row\n"
        "per row group. This is called the Single-Value Rule.\n"
        "Columns named in the GROUP BY clause are guaranteed to be exactly one value\n"
        "per group, no matter how many rows the group matches.\n"
        "Most DBMSs report an error if you try to run any query that tries to return\n"
        "a column other than those columns named in the GROUP BY clause or as\n"
        "arguments to aggregate functions.\n"
        "Every expression in the select list must be contained in either an\n"
        "aggregate function or the GROUP BY clause.\n"
        "Follow the single-value rule to avoid ambiguous query results.\n"
    )


@register
class OrderByRandRule(TextPatternRule):
    rule_id = "query.order_by_rand"
    title = "ORDER BY RAND Usage"
    category = Category.QUERY
    risk = Risk.WARNING
    pattern = r"(order by rand\()"
    message = (
        "Sorting by a nondeterministic expression gives poor performance:\n"
        "Sorting by a random expression means the sort cannot benefit from an index.\n"
        "The database has to generate a random value for every row, sort the whole\n"
        "table by that value, and then throw away most of the result.\n"
        "The cost grows with the size of the table, even though you usually want\n"
        "only a few rows.\n"
        "Avoid sorting the data set. Count the rows, choose a random offset in the\n"
        "application, and fetch the row at that offset, or pick a random key value\n"
        "and select the row with the nearest key.\n"
    )


@register
class PatternMatchingRule(TextPatternRule):
    rule_id = "query.pattern_matching"
    title = "Pattern Matching Usage"
    category = Category.QUERY
    risk = Risk.ERROR
    pattern = r"(like\s)|(regexp\s)"
    message = (
        "Avoid using vanilla pattern matching:\n"
        "The most important disadvantage of pattern-matching operators is that\n"
        "they have poor performance. A pattern with a leading wildcard cannot use a\n"
        "conventional index, so the query has to scan every row in the table.\n"
        "A second problem of simple pattern-matching using LIKE or regular\n"
        "expressions is that it can find unintended matches.\n"
        "It's best to use a specialized search engine technology like Apache Lucene,\n"
        "or the full-text search feature of your database.\n"
        "Another alternative is to reduce the recurring cost of search by saving\n"
        "the result. Consider using an inverted index.\n"
    )


@register
class SpaghettiQueryRule(LengthThresholdRule):
    """Statements too long to reason about, whatever they contain."""

    rule_id = "query.spaghetti_query"
    title = "Spaghetti Query Alert"
    category = Category.QUERY
    risk = Risk.INFO
    min_length = SPAGHETTI_QUERY_LENGTH
    message = (
        "Split up a complex spaghetti query into several simpler queries:\n"
        "SQL is a very expressive language: you can accomplish a lot in a single\n"
        "query or statement. But that doesn't mean it's mandatory or even a good\n"
        "idea to approach every task with the assumption it has to be done in one\n"
        "line of code. One common unintended consequence of producing all your\n"
        "results in one query is a Cartesian product. This happens when two of the\n"
        "tables in the query have no condition restricting their relationship.\n"
        "Without such a restriction, the join of two tables pairs each row in the\n"
        "first table to every row in the other table. Each such pairing becomes a\n"
        "row of the result set, and you end up with many more rows than you expect.\n"
        "It's important to consider that these queries are simply hard to write,\n"
        "hard to modify, and hard to debug. You should expect to get regular\n"
        "requests for incremental enhancements to your database applications.\n"
        "Managers want more complex reports and more fields in a user interface.\n"
        "If you design intricate, monolithic SQL queries, it's more costly and\n"
        "time-consuming to make enhancements to them. Your time is worth something,\n"
        "both to you and to your project.\n"
        "Split up a complex spaghetti query into several simpler queries.\n"
        "When you split up a query, the result may be that you have several similar\n"
        "queries. Consider using UNION or CTEs to combine their results.\n"
    )


@register
class JoinCountRule(TextPatternRule):
    rule_id = "query.join_count"
    title = "Reduce Number of JOINs"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(join)"
    min_occurrences = 5
    message = (
        "Reduce number of JOINs:\n"
        "Too many JOINs is a symptom of complex spaghetti queries. Consider splitting\n"
        "up the complex query into many simpler queries, and reduce the number of JOINs.\n"
        "Every additional join multiplies the work the optimizer has to do to choose\n"
        "a plan, and makes it more likely that a missing join condition quietly\n"
        "produces a Cartesian product.\n"
    )


@register
class DistinctCountRule(TextPatternRule):
    rule_id = "query.distinct_count"
    title = "Eliminate Unnecessary DISTINCT Conditions"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(distinct)"
    min_occurrences = 2
    message = (
        "Eliminate unnecessary DISTINCT conditions:\n"
        "Too many DISTINCT conditions is a symptom of complex spaghetti queries.\n"
        "Consider splitting up the complex query into many simpler queries, and\n"
        "reduce the number of DISTINCT conditions.\n"
        "It is possible that the DISTINCT condition has no effect if a primary key\n"
        "column is part of the result set of columns.\n"
    )


@register
class ImplicitColumnsRule(TextPatternRule):
    """INSERT statements that rely on the table's column order."""

    rule_id = "query.implicit_columns"
    title = "Implicit Column Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(insert into \S+ values)"
    message = (
        "Explicitly name columns:\n"
        "Although using wildcards and unnamed columns satisfies the goal of less\n"
        "typing, this habit creates several hazards.\n"
        "This can break application refactoring and can harm performance.\n"
        "Always spell out all the columns you need, instead of relying on\n"
        "wild-cards or implicit column lists.\n"
        "If a column is added, dropped or reordered, an INSERT without a column\n"
        "list either fails or, worse, silently writes values into the wrong columns.\n"
    )


@register
class HavingUsageRule(TextPatternRule):
    rule_id = "query.having_usage"
    title = "HAVING Clause Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(having)"
    message = (
        "Consider rewriting HAVING clause into WHERE clause:\n"
        "Rewriting the query's HAVING clause into a predicate will enable the use\n"
        "of indexes during query processing.\n"
        "EX: SELECT s.cust_id, count(s.cust_id) FROM SH.sales s GROUP BY s.cust_id\n"
        "HAVING s.cust_id != '1660' AND s.cust_id != '2';\n"
        "can be rewritten as:\n"
        "SELECT s.cust_id, count(cust_id) FROM SH.sales s WHERE s.cust_id != '1660'\n"
        "AND s.cust_id != '2' GROUP BY s.cust_id;\n"
    )


@register
class NestedSubqueryRule(TextPatternRule):
    rule_id = "query.nested_subquery"
    title = "Nested sub queries"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(select)"
    min_occurrences = 2
    message = (
        "Un-nest sub queries:\n"
        "Rewriting nested queries as joins often leads to more efficient execution\n"
        "and more effective optimization. In general, sub-query unnesting is always\n"
        "done for correlated sub-queries with, at most, one table in the FROM clause,\n"
        "which are used in ANY, ALL, and EXISTS predicates. An uncorrelated sub-query,\n"
        "or a sub-query with more than one table in the FROM clause, is flattened if\n"
        "it can be decided, based on the query semantics, that the sub-query returns\n"
        "at most one row.\n"
        "EX: SELECT * FROM SH.products p WHERE p.prod_id = (SELECT s.prod_id FROM SH.sales\n"
        "s WHERE s.cust_id = 100996 AND s.quantity_sold = 1);\n"
        "can be rewritten as:\n"
        "SELECT p.* FROM SH.products p, sales s WHERE p.prod_id = s.prod_id AND\n"
        "s.cust_id = 100996 AND s.quantity_sold = 1;\n"
    )


@register
class OrUsageRule(TextPatternRule):
    rule_id = "query.or_usage"
    title = "OR Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"( or )"
    message = (
        "Consider using an IN predicate when querying an indexed column:\n"
        "The IN-list predicate can be exploited for indexed retrieval and also,\n"
        "the optimizer can sort the IN-list to match the sort sequence of the index,\n"
        "leading to more efficient retrieval. Note that the IN-list must contain only\n"
        "constants, or values that are constant during one execution of the query\n"
        "block, such as outer references.\n"
        "EX: SELECT s.* FROM SH.sales s WHERE s.prod_id = 14 OR s.prod_id = 17;\n"
        "can be rewritten as:\n"
        "SELECT s.* FROM SH.sales s WHERE s.prod_id IN (14, 17);\n"
    )


@register
class UnionUsageRule(TextPatternRule):
    rule_id = "query.union_usage"
    title = "UNION Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"( union )"
    message = (
        "Consider using UNION ALL if you do not care about duplicates:\n"
        "Unlike UNION which removes duplicates, UNION ALL allows duplicate tuples.\n"
        "If you do not care about duplicate tuples, then using UNION ALL would be\n"
        "a faster option, since it skips the sort and comparison needed to\n"
        "eliminate duplicates.\n"
    )


@register
class DistinctJoinRule(TextPatternRule):
    rule_id = "query.distinct_join"
    title = "DISTINCT & JOIN Usage"
    category = Category.QUERY
    risk = Risk.INFO
    pattern = r"(distinct.*join)"
    message = (
        "Consider using a sub-query with EXISTS instead of DISTINCT:\n"
        "The DISTINCT keyword removes duplicates after sorting the tuples.\n"
        "Instead, consider using a sub-query with the EXISTS keyword, so that you\n"
        "can avoid having to return an entire table.\n"
        "EX: SELECT DISTINCT c.country_id, c.country_name FROM SH.countries c,\n"
        "SH.customers e WHERE e.country_id = c.country_id;\n"
        "can be rewritten as:\n"
        "SELECT c.country_id, c.country_name FROM SH.countries c WHERE EXISTS\n"
        "(SELECT 'X' FROM SH.customers e WHERE e.country_id = c.country_id);\n"
    )


__all__ = [
    "SPAGHETTI_QUERY_LENGTH",
    "SelectStarRule",
    "NullUsageRule",
    "NotNullUsageRule",
    "StringConcatenationRule",
    "GroupByUsageRule",
    "OrderByRandRule",
    "PatternMatchingRule",
    "SpaghettiQueryRule",
    "JoinCountRule",
    "DistinctCountRule",
    "ImplicitColumnsRule",
    "HavingUsageRule",
    "NestedSubqueryRule",
    "OrUsageRule",
    "UnionUsageRule",
    "DistinctJoinRule",
]
