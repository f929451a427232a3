"""
Pydantic models for the export configuration document.

The document maps schema names to table configurations and custom views.
Custom views are derived relations (a SQL query plus keys) exported as if
they were tables; the normalization pass adds one per non-1NF column.

Serialized keys are camelCase (``customViews``, ``primaryKey``,
``referencedTable``); unset optional fields are omitted on dump.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class DatabaseTechnicalFeatures(str, Enum):
    """Database features that an export can be told to ignore."""

    USERS = "users"
    ROLES = "roles"
    PRIVILEGES = "privileges"
    PRIMARY_KEYS = "primaryKeys"
    FOREIGN_KEYS = "foreignKeys"
    CANDIDATE_KEYS = "candidateKeys"
    CHECK_CONSTRAINTS = "checkConstraints"
    TRIGGERS = "triggers"
    VIEWS = "views"
    ROUTINES = "routines"


class ConfigurationModel(BaseModel):
    """Base class for all configuration document models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ColumnConfiguration(ConfigurationModel):
    name: str
    description: Optional[str] = None


class PrimaryKeyConfiguration(ConfigurationModel):
    name: Optional[str] = None
    column_names: List[str] = Field(default_factory=list)
    description: Optional[str] = None


class ReferenceConfiguration(ConfigurationModel):
    column: str
    referenced: str


class ForeignKeyConfiguration(ConfigurationModel):
    name: Optional[str] = None
    referenced_table: str
    references: List[ReferenceConfiguration] = Field(default_factory=list)
    description: Optional[str] = None


class TableConfiguration(ConfigurationModel):
    name: str
    description: Optional[str] = None
    columns: List[ColumnConfiguration] = Field(default_factory=list)

    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def remove_column(self, name: str) -> None:
        self.columns = [c for c in self.columns if c.name != name]


class CustomViewConfiguration(ConfigurationModel):
    """
    A derived relation exported in place of (part of) a table.

    Every field but ``name`` is optional so that a merge document can state
    only the fields it overrides.
    """

    name: str
    simulate_table: Optional[bool] = None
    description: Optional[str] = None
    query: Optional[str] = None
    primary_key: Optional[PrimaryKeyConfiguration] = None
    foreign_keys: Optional[List[ForeignKeyConfiguration]] = None
    columns: Optional[List[ColumnConfiguration]] = None


class SchemaConfiguration(ConfigurationModel):
    tables: List[TableConfiguration] = Field(default_factory=list)
    custom_views: List[CustomViewConfiguration] = Field(default_factory=list)

    def get_table(self, name: str) -> Optional[TableConfiguration]:
        for table in self.tables:
            if table.name == name:
                return table
        return None

    def get_custom_view(self, name: str) -> Optional[CustomViewConfiguration]:
        for view in self.custom_views:
            if view.name == name:
                return view
        return None

    def sort_custom_views(self) -> None:
        self.custom_views.sort(key=lambda view: view.name)


class ModuleConfiguration(ConfigurationModel):
    """
    The export configuration document.

    Attributes:
        import_module: Free-form description of the import module that produced
            the structure (module name and parameters)
        schemas: Schema name to schema configuration
        ignore: Features the export leaves out
        fetch_rows: Whether the export reads table rows
    """

    import_module: Optional[Dict[str, Any]] = Field(default=None, alias="import")
    schemas: Dict[str, SchemaConfiguration] = Field(default_factory=dict)
    ignore: Dict[DatabaseTechnicalFeatures, bool] = Field(default_factory=dict)
    fetch_rows: bool = True

    @field_serializer("ignore")
    def serialize_ignore(self, ignore: Dict[DatabaseTechnicalFeatures, bool]):
        return {feature.value: ignored for feature, ignored in ignore.items()}

    def get_schema(self, name: str) -> Optional[SchemaConfiguration]:
        return self.schemas.get(name)

    def get_table_configuration(
        self, schema: str, table: str
    ) -> Optional[TableConfiguration]:
        schema_configuration = self.get_schema(schema)
        if schema_configuration is None:
            return None
        return schema_configuration.get_table(table)

    def get_custom_view(
        self, schema: str, name: str
    ) -> Optional[CustomViewConfiguration]:
        schema_configuration = self.get_schema(schema)
        if schema_configuration is None:
            return None
        return schema_configuration.get_custom_view(name)

    def add_custom_view(self, schema: str, view: CustomViewConfiguration) -> None:
        schema_configuration = self.schemas.setdefault(schema, SchemaConfiguration())
        schema_configuration.custom_views.append(view)

    def table_ids(self) -> Set[Tuple[str, str]]:
        """All ``(schema, table)`` pairs with a table configuration."""
        return {
            (schema_name, table.name)
            for schema_name, schema in self.schemas.items()
            for table in schema.tables
        }

    def is_ignored(self, feature: DatabaseTechnicalFeatures) -> bool:
        return self.ignore.get(feature, False)

    def set_ignored(self, feature: DatabaseTechnicalFeatures, ignored: bool) -> None:
        self.ignore[feature] = ignored
