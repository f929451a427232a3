"""
Normalization of non-1NF columns, one table at a time.

The host export pipeline calls :meth:`Normalize1NFWalker.handle_data_open_table`
for every table it opens and :meth:`Normalize1NFWalker.finish_database` once at
the end. For each array or JSON column of a table with a primary key, a custom
view is registered in the configuration and the column is removed from the
table's configuration.
"""

import logging
from typing import List, Optional

from normalize1nf.document.models import (
    CustomViewConfiguration,
    DatabaseTechnicalFeatures,
    ModuleConfiguration,
)
from normalize1nf.exceptions import TableNotConfiguredError, ViewNameCollisionError
from normalize1nf.keys import view_columns, view_foreign_key, view_primary_key
from normalize1nf.merge import MergeReconciler, MergeReport
from normalize1nf.naming import NamingPatterns, NormalizationOptions
from normalize1nf.sql import (
    ColumnKind,
    array_view_query,
    classify_column,
    json_view_query,
)
from normalize1nf.structure import ColumnStructure, TableStructure

logger = logging.getLogger(__name__)


class Normalize1NFWalker:
    """
    Rewrites an export configuration so non-1NF columns become custom views.

    The walker owns ``module_configuration`` from construction until
    :meth:`finish_database` hands it back.

    Args:
        module_configuration: Configuration to rewrite in place. It must have a
            table configuration for every table that is opened.
        options: Naming patterns and SQL quoting.
        merge_configuration: Optional merge document (read only).

    Example:
        walker = Normalize1NFWalker(build_module_configuration(structure))
        walker.init_database()
        for table in structure.iter_tables():
            walker.handle_data_open_table(table)
        configuration = walker.finish_database()
    """

    # Features the walker reads from the structure, whatever the host ignores.
    REQUIRED_FEATURES = (DatabaseTechnicalFeatures.PRIMARY_KEYS,)

    def __init__(
        self,
        module_configuration: ModuleConfiguration,
        options: Optional[NormalizationOptions] = None,
        merge_configuration: Optional[ModuleConfiguration] = None,
    ):
        self.module_configuration = module_configuration
        self.options = options or NormalizationOptions()
        self.reconciler = MergeReconciler(merge_configuration)
        self.warnings: List[str] = []
        self.views: List[CustomViewConfiguration] = []
        self.merge_report: Optional[MergeReport] = None
        self._finished = False

    def init_database(self) -> None:
        for feature in self.REQUIRED_FEATURES:
            self.module_configuration.set_ignored(feature, False)

    def handle_data_open_table(
        self, table: TableStructure
    ) -> List[CustomViewConfiguration]:
        """
        Normalize the array and JSON columns of ``table``.

        Returns:
            The views created for the table

        Raises:
            TableNotConfiguredError: If the configuration has no entry for the table
            ViewNameCollisionError: If a view name is generated twice in a schema
            RuntimeError: If called after :meth:`finish_database`
        """
        if self._finished:
            raise RuntimeError("Normalization already finished")

        table_configuration = self.module_configuration.get_table_configuration(
            table.schema, table.name
        )
        if table_configuration is None:
            raise TableNotConfiguredError(
                f"No table configuration for {table.table_id}"
            )

        created = []
        for column in table.columns:
            kind = classify_column(column)
            if kind is None:
                continue

            if table.primary_key is None or not table.primary_key.column_names:
                message = (
                    f"Table {table.schema}.{table.name} has no primary key. "
                    f"Cannot create normalization of {kind.value} column {column.name}"
                )
                logger.warning(message)
                self.warnings.append(message)
                continue

            logger.info(
                "Creating normalization of %s column %s.%s.%s",
                kind.value,
                table.schema,
                table.name,
                column.name,
            )
            view = self._create_view(table, column, kind)

            # register first; the column disappears only once its view exists
            self.module_configuration.add_custom_view(table.schema, view)
            table_configuration.remove_column(column.name)

            created.append(view)
            self.views.append(view)

        return created

    def finish_database(self) -> ModuleConfiguration:
        """Add the merge-only views and hand the configuration back."""
        if not self._finished:
            self.merge_report = self.reconciler.reconcile(self.module_configuration)
            self._finished = True
        return self.module_configuration

    def _patterns(self, kind: ColumnKind) -> NamingPatterns:
        if kind == ColumnKind.ARRAY:
            return self.options.array_patterns
        return self.options.json_patterns

    def _create_view(
        self, table: TableStructure, column: ColumnStructure, kind: ColumnKind
    ) -> CustomViewConfiguration:
        patterns = self._patterns(kind)
        quoter = self.options.quoter
        primary_key_columns = table.primary_key.column_names

        view_name = patterns.view_name(table.name, column.name)
        if self.module_configuration.get_custom_view(table.schema, view_name) is not None:
            raise ViewNameCollisionError(table.schema, view_name, table.name, column.name)

        if kind == ColumnKind.ARRAY:
            query = array_view_query(
                table.schema, table.name, column.name, primary_key_columns, patterns, quoter
            )
        else:
            query = json_view_query(
                table.schema, table.name, primary_key_columns, patterns, quoter
            )

        view = CustomViewConfiguration(
            name=view_name,
            simulate_table=True,
            description=patterns.view_description(table.name, column.name),
            query=query,
            primary_key=view_primary_key(
                table.name, column.name, primary_key_columns, kind, patterns
            ),
            foreign_keys=[view_foreign_key(table.name, primary_key_columns, patterns)],
            columns=view_columns(
                table.name, column.name, primary_key_columns, kind, patterns
            ),
        )

        override = self.reconciler.find_view(table.schema, view_name)
        if override is not None:
            logger.info("Merging view %s.%s with merge configuration", table.schema, view_name)
            self.reconciler.apply_overrides(view, override)

        return view
