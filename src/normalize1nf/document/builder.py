"""
Builds the initial export configuration for a database structure.

Every table is listed with all of its columns; the normalization pass then
removes non-1NF columns and adds custom views in their place.
"""

from typing import Any, Dict, Optional

from normalize1nf.document.models import (
    ColumnConfiguration,
    DatabaseTechnicalFeatures,
    ModuleConfiguration,
    SchemaConfiguration,
    TableConfiguration,
)
from normalize1nf.structure import DatabaseStructure, TableStructure


def create_ignore_list_except(
    ignore: bool, *features: DatabaseTechnicalFeatures
) -> Dict[DatabaseTechnicalFeatures, bool]:
    """Ignore map setting every feature to ``ignore`` except ``features``."""
    return {
        feature: (not ignore if feature in features else ignore)
        for feature in DatabaseTechnicalFeatures
    }


def table_configuration(table: TableStructure) -> TableConfiguration:
    return TableConfiguration(
        name=table.name,
        description=table.description,
        columns=[
            ColumnConfiguration(name=column.name, description=column.description)
            for column in table.columns
        ],
    )


def build_module_configuration(
    structure: DatabaseStructure, import_module: Optional[Dict[str, Any]] = None
) -> ModuleConfiguration:
    """
    Create the export configuration for ``structure``.

    Row data is not fetched and every technical feature except views is
    ignored; the normalization pass re-enables what it needs.
    """
    configuration = ModuleConfiguration(
        import_module=import_module,
        ignore=create_ignore_list_except(True, DatabaseTechnicalFeatures.VIEWS),
        fetch_rows=False,
    )
    for schema in structure.schemas:
        configuration.schemas[schema.name] = SchemaConfiguration(
            tables=[table_configuration(table) for table in schema.tables]
        )
    return configuration
