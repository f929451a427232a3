"""
SQL text for normalization views.

Array columns are unnested with ``UNNEST ... WITH ORDINALITY``, which is
standard SQL; the ordinal starts at 1. Resulting queries have been written
against PostgreSQL.

JSON columns only get a projection template of the owning table's primary
key: expanding their structure would require reading table contents.

Table references of view queries are extracted with sqlglot, reading the
PostgreSQL dialect.
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from sqlglot import exp, parse

from normalize1nf.naming import NamingPatterns, SqlQuoter
from normalize1nf.structure import ColumnStructure

SQL_DIALECT = "postgres"


class ColumnKind(str, Enum):
    """Kinds of non-1NF columns."""

    ARRAY = "array"
    JSON = "json"


def classify_column(column: ColumnStructure) -> Optional[ColumnKind]:
    """Return the kind of a non-1NF column, or None for an ordinary column."""
    if column.is_array():
        return ColumnKind.ARRAY
    if column.is_json():
        return ColumnKind.JSON
    return None


def _foreign_key_projection(
    table: str,
    primary_key_columns: Sequence[str],
    patterns: NamingPatterns,
    quoter: SqlQuoter,
) -> List[str]:
    return [
        f"{pk_column} as "
        f"{quoter.quote(patterns.foreign_key_column_name(table, pk_column))}"
        for pk_column in primary_key_columns
    ]


def array_view_query(
    schema: str,
    table: str,
    column: str,
    primary_key_columns: Sequence[str],
    patterns: NamingPatterns,
    quoter: SqlQuoter,
) -> str:
    """
    Query unpacking an array column into one row per element.

    Example:
        >>> array_view_query("s", "t", "tags", ["id"], NamingPatterns(), SqlQuoter())
        'select id as "t_id", "array_index", "tags_item" from "s"."t" cross join unnest("tags") with ordinality as a("tags_item", "array_index")'
    """
    index_column = quoter.quote(patterns.index_column_name(table, column))
    item_column = quoter.quote(patterns.item_column_name(table, column))

    projection = _foreign_key_projection(table, primary_key_columns, patterns, quoter)
    projection += [index_column, item_column]

    return (
        f"select {', '.join(projection)}"
        f" from {quoter.quote(schema)}.{quoter.quote(table)}"
        f" cross join unnest({quoter.quote(column)}) with ordinality"
        f" as {patterns.table_alias}({item_column}, {index_column})"
    )


def json_view_query(
    schema: str,
    table: str,
    primary_key_columns: Sequence[str],
    patterns: NamingPatterns,
    quoter: SqlQuoter,
) -> str:
    """Projection template for a JSON column: the owning row's key only."""
    projection = _foreign_key_projection(table, primary_key_columns, patterns, quoter)
    return (
        f"select {', '.join(projection)}"
        f" from {quoter.quote(schema)}.{quoter.quote(table)}"
    )


def extract_table_references(query: str) -> List[Tuple[str, str]]:
    """
    Return the distinct ``(schema, table)`` pairs a query reads from.

    Only schema-qualified tables are reported. Common table expressions and
    other single-part names are left out.

    Raises:
        ParseError: If the query cannot be parsed
        TokenError: If the query cannot be tokenized

    Example:
        >>> extract_table_references('select * from "s"."t" join s.u on true')
        [('s', 't'), ('s', 'u')]
    """
    if not query or not query.strip():
        return []

    references = []
    for statement in parse(query, read=SQL_DIALECT):
        if statement is None:
            continue
        for table in statement.find_all(exp.Table):
            if not table.db:
                continue
            reference = (table.db, table.name)
            if reference not in references:
                references.append(reference)
    return references
