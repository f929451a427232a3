"""
Keys and columns of normalization views.

The view of a column ``c`` of table ``t`` with primary key ``[p1..pn]`` has
one column ``fk(pi)`` per primary key column, referencing ``t.pi``. Array
views add the ordinal column, which completes their primary key.
"""

from typing import List, Sequence

from normalize1nf.document.models import (
    ColumnConfiguration,
    ForeignKeyConfiguration,
    PrimaryKeyConfiguration,
    ReferenceConfiguration,
)
from normalize1nf.naming import NamingPatterns
from normalize1nf.sql import ColumnKind


def foreign_key_column_names(
    table: str, primary_key_columns: Sequence[str], patterns: NamingPatterns
) -> List[str]:
    return [
        patterns.foreign_key_column_name(table, pk_column)
        for pk_column in primary_key_columns
    ]


def view_primary_key(
    table: str,
    column: str,
    primary_key_columns: Sequence[str],
    kind: ColumnKind,
    patterns: NamingPatterns,
) -> PrimaryKeyConfiguration:
    column_names = foreign_key_column_names(table, primary_key_columns, patterns)
    if kind == ColumnKind.ARRAY:
        column_names.append(patterns.index_column_name(table, column))
    return PrimaryKeyConfiguration(column_names=column_names)


def view_foreign_key(
    table: str, primary_key_columns: Sequence[str], patterns: NamingPatterns
) -> ForeignKeyConfiguration:
    """Foreign key from the view back to the original table."""
    references = [
        ReferenceConfiguration(
            column=patterns.foreign_key_column_name(table, pk_column),
            referenced=pk_column,
        )
        for pk_column in primary_key_columns
    ]
    return ForeignKeyConfiguration(referenced_table=table, references=references)


def view_columns(
    table: str,
    column: str,
    primary_key_columns: Sequence[str],
    kind: ColumnKind,
    patterns: NamingPatterns,
) -> List[ColumnConfiguration]:
    """Columns projected by the view, in query order."""
    columns = [
        ColumnConfiguration(
            name=patterns.foreign_key_column_name(table, pk_column),
            description=f"References {table}.{pk_column}",
        )
        for pk_column in primary_key_columns
    ]
    if kind == ColumnKind.ARRAY:
        columns.append(
            ColumnConfiguration(
                name=patterns.index_column_name(table, column),
                description=f"Position in {table}.{column}, starting at 1",
            )
        )
        columns.append(
            ColumnConfiguration(
                name=patterns.item_column_name(table, column),
                description=f"Element of {table}.{column}",
            )
        )
    return columns
