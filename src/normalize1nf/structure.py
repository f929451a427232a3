"""
Database structure model consumed by the normalization pass.

The structure is produced by an introspection layer outside this package.
For command line use it can be described in a YAML document:

    schemas:
      - name: public
        tables:
          - name: orders
            columns:
              - name: id
                type: INTEGER
                originalType: int4
              - name: tags
                type: CHARACTER VARYING ARRAY
                originalType: _varchar
            primaryKey:
              name: orders_pkey
              columns: [id]

Design Decisions:
- Frozen dataclasses: the structure never changes during a pass
- Column order and primary key order are significant and preserved
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import yaml

from normalize1nf.exceptions import StructureLoadError

JSON_TYPE_NAMES = frozenset({"json", "jsonb"})
ARRAY_TYPE_SUFFIX = "ARRAY"


@dataclass(frozen=True)
class ColumnStructure:
    """
    A column of an introspected table.

    Attributes:
        name: Column name
        type_name: Normalized SQL-99 type name (e.g. "INTEGER ARRAY")
        original_type_name: Dialect specific type name (e.g. "_int4", "jsonb")
        nullable: Whether the column accepts NULL
        description: Optional column comment
    """

    name: str
    type_name: str
    original_type_name: str
    nullable: bool = True
    description: Optional[str] = None

    def is_array(self) -> bool:
        return self.type_name.upper().endswith(ARRAY_TYPE_SUFFIX)

    def is_json(self) -> bool:
        return self.original_type_name.lower() in JSON_TYPE_NAMES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ColumnStructure:
        type_name = data["type"]
        return cls(
            name=data["name"],
            type_name=type_name,
            original_type_name=data.get("originalType") or type_name,
            nullable=data.get("nullable", True),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class PrimaryKey:
    """Primary key of a table. The order of ``column_names`` is significant."""

    column_names: Tuple[str, ...]
    name: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional[PrimaryKey]:
        """Build a primary key, or return None when it lists no columns."""
        columns = data.get("columns") or data.get("columnNames") or []
        if not columns:
            return None
        return cls(
            column_names=tuple(columns),
            name=data.get("name"),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class TableStructure:
    """
    An introspected table.

    Attributes:
        name: Table name
        schema: Name of the owning schema
        columns: Ordered columns
        primary_key: Primary key, if the table has one
        description: Optional table comment
    """

    name: str
    schema: str
    columns: Tuple[ColumnStructure, ...] = ()
    primary_key: Optional[PrimaryKey] = None
    description: Optional[str] = None

    @property
    def table_id(self) -> str:
        return f"{self.schema}.{self.name}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], schema: str) -> TableStructure:
        primary_key = data.get("primaryKey")
        return cls(
            name=data["name"],
            schema=schema,
            columns=tuple(ColumnStructure.from_dict(c) for c in data.get("columns") or []),
            primary_key=PrimaryKey.from_dict(primary_key) if primary_key else None,
            description=data.get("description"),
        )


@dataclass(frozen=True)
class SchemaStructure:
    name: str
    tables: Tuple[TableStructure, ...] = ()


@dataclass
class DatabaseStructure:
    """Schemas of a database, in introspection order."""

    schemas: List[SchemaStructure] = field(default_factory=list)

    def get_schema(self, name: str) -> Optional[SchemaStructure]:
        for schema in self.schemas:
            if schema.name == name:
                return schema
        return None

    def get_table(self, schema: str, table: str) -> Optional[TableStructure]:
        schema_structure = self.get_schema(schema)
        if schema_structure is None:
            return None
        for table_structure in schema_structure.tables:
            if table_structure.name == table:
                return table_structure
        return None

    def iter_tables(self) -> Iterator[TableStructure]:
        for schema in self.schemas:
            yield from schema.tables

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> DatabaseStructure:
        """
        Parse a dict (from YAML) into a DatabaseStructure.

        Raises:
            KeyError: If a schema, table or column lacks a required field
            TypeError: If a section has the wrong shape
        """
        schemas = []
        for schema_data in data.get("schemas") or []:
            schema_name = schema_data["name"]
            tables = tuple(
                TableStructure.from_dict(t, schema_name)
                for t in schema_data.get("tables") or []
            )
            schemas.append(SchemaStructure(name=schema_name, tables=tables))
        return cls(schemas=schemas)


def load_structure(path: Union[str, Path]) -> DatabaseStructure:
    """
    Load a database structure from a YAML file.

    Raises:
        StructureLoadError: If the file cannot be read or is malformed
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise TypeError("top level must be a mapping")
        return DatabaseStructure.from_dict(data)
    except (OSError, yaml.YAMLError, KeyError, TypeError, AttributeError) as e:
        raise StructureLoadError(path, e) from e
