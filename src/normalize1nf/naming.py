"""
Naming of generated views, columns and descriptions.

Patterns may contain the tokens ``${table}`` and ``${column}``. No other
tokens are recognized: anything else, including unknown ``${...}``
placeholders, is copied verbatim.

Example:
    >>> resolve("${table}__${column}", "orders", "tags")
    'orders__tags'
    >>> SqlQuoter().quote("orders__tags")
    '"orders__tags"'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional

DEFAULT_ARRAY_NAME_PATTERN = "${table}__${column}"
DEFAULT_ARRAY_FOREIGN_KEY_COLUMN_PATTERN = "${table}_${column}"
DEFAULT_ARRAY_DESCRIPTION_PATTERN = "Normalized array column ${table}.${column}"
DEFAULT_ARRAY_INDEX_COLUMN_NAME_PATTERN = "array_index"
DEFAULT_ARRAY_ITEM_COLUMN_NAME_PATTERN = "${column}_item"
DEFAULT_ARRAY_TABLE_ALIAS = "a"
DEFAULT_JSON_DESCRIPTION_PATTERN = "Normalized JSON column ${table}.${column}"

_TOKEN_RE = re.compile(r"\$\{(table|column)\}")


def resolve(pattern: str, table: str, column: str) -> str:
    """Substitute ``${table}`` and ``${column}`` in ``pattern`` in a single pass."""
    values = {"table": table, "column": column}
    return _TOKEN_RE.sub(lambda match: values[match.group(1)], pattern)


@dataclass(frozen=True)
class SqlQuoter:
    """Quotes SQL identifiers, or passes them through when quoting is off."""

    quote_identifiers: bool = True

    def quote(self, identifier: str) -> str:
        if not self.quote_identifiers:
            return identifier
        return '"' + identifier + '"'


@dataclass(frozen=True)
class NamingPatterns:
    """
    Patterns for one kind of normalized column.

    Attributes:
        name: View name
        foreign_key_column: Name of the view column referencing each original
            primary key column (``${column}`` is the primary key column)
        description: View description
        index_column: Ordinal column of an unnested array
        item_column: Element column of an unnested array
        table_alias: Alias of the ``unnest`` table expression
    """

    name: str = DEFAULT_ARRAY_NAME_PATTERN
    foreign_key_column: str = DEFAULT_ARRAY_FOREIGN_KEY_COLUMN_PATTERN
    description: str = DEFAULT_ARRAY_DESCRIPTION_PATTERN
    index_column: str = DEFAULT_ARRAY_INDEX_COLUMN_NAME_PATTERN
    item_column: str = DEFAULT_ARRAY_ITEM_COLUMN_NAME_PATTERN
    table_alias: str = DEFAULT_ARRAY_TABLE_ALIAS

    @classmethod
    def array_defaults(cls) -> NamingPatterns:
        return cls()

    @classmethod
    def json_defaults(cls) -> NamingPatterns:
        return cls(description=DEFAULT_JSON_DESCRIPTION_PATTERN)

    @classmethod
    def from_mapping(
        cls, values: Optional[Mapping[str, Any]], base: NamingPatterns
    ) -> NamingPatterns:
        """Override the patterns of ``base`` with the non-empty entries of ``values``."""
        if not values:
            return base
        overrides = {
            key: str(value)
            for key, value in values.items()
            if key in cls.__dataclass_fields__ and value not in (None, "")
        }
        return replace(base, **overrides)

    def view_name(self, table: str, column: str) -> str:
        return resolve(self.name, table, column)

    def view_description(self, table: str, column: str) -> str:
        return resolve(self.description, table, column)

    def foreign_key_column_name(self, table: str, primary_key_column: str) -> str:
        return resolve(self.foreign_key_column, table, primary_key_column)

    def index_column_name(self, table: str, column: str) -> str:
        return resolve(self.index_column, table, column)

    def item_column_name(self, table: str, column: str) -> str:
        return resolve(self.item_column, table, column)


@dataclass(frozen=True)
class NormalizationOptions:
    """Options of one normalization pass."""

    quote_identifiers: bool = True
    array_patterns: NamingPatterns = field(default_factory=NamingPatterns.array_defaults)
    json_patterns: NamingPatterns = field(default_factory=NamingPatterns.json_defaults)

    @property
    def quoter(self) -> SqlQuoter:
        return SqlQuoter(self.quote_identifiers)

    @classmethod
    def from_config(
        cls,
        settings: Mapping[str, Any],
        quote_identifiers: Optional[bool] = None,
        array_overrides: Optional[Mapping[str, Any]] = None,
        json_overrides: Optional[Mapping[str, Any]] = None,
    ) -> NormalizationOptions:
        """
        Build options from the ``[normalize]`` section of the runtime settings,
        then apply explicit overrides (e.g. from command line flags).
        """
        section = settings.get("normalize") or {}
        array_patterns = NamingPatterns.from_mapping(
            section.get("array"), NamingPatterns.array_defaults()
        )
        json_patterns = NamingPatterns.from_mapping(
            section.get("json"), NamingPatterns.json_defaults()
        )
        if quote_identifiers is None:
            quote_identifiers = bool(section.get("quote_identifiers", True))
        return cls(
            quote_identifiers=quote_identifiers,
            array_patterns=NamingPatterns.from_mapping(array_overrides, array_patterns),
            json_patterns=NamingPatterns.from_mapping(json_overrides, json_patterns),
        )
