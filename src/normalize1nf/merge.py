"""
Reconciliation of generated configuration with a user supplied merge document.

The merge document only adds or overrides, it never deletes:

- A merge view named like a generated view overrides its description, query,
  columns and primary key (when given) and adds its foreign keys to the
  generated ones. This is applied while the view is generated.
- A merge view with no generated counterpart is added to its schema if its
  query only references tables of the generated configuration.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlglot.errors import ParseError, TokenError

from normalize1nf.document.models import CustomViewConfiguration, ModuleConfiguration
from normalize1nf.sql import extract_table_references

logger = logging.getLogger(__name__)


@dataclass
class MergeReport:
    """Views added from the merge document, and views dropped as invalid."""

    added: List[Tuple[str, str]] = field(default_factory=list)
    dropped: List[Tuple[str, str, str]] = field(default_factory=list)


class MergeReconciler:
    """
    Applies a merge document to a generated configuration.

    Args:
        merge_configuration: The merge document. It is only read.
    """

    def __init__(self, merge_configuration: Optional[ModuleConfiguration] = None):
        if merge_configuration is None:
            merge_configuration = ModuleConfiguration()
        self.merge_configuration = merge_configuration

    def find_view(self, schema: str, name: str) -> Optional[CustomViewConfiguration]:
        return self.merge_configuration.get_custom_view(schema, name)

    @staticmethod
    def apply_overrides(
        generated: CustomViewConfiguration, override: CustomViewConfiguration
    ) -> CustomViewConfiguration:
        """
        Override fields of ``generated`` in place with those set in ``override``.

        Foreign keys are appended, duplicates included.
        """
        if override.description is not None:
            generated.description = override.description
        if override.query is not None:
            generated.query = override.query
        if override.columns is not None:
            generated.columns = [c.model_copy(deep=True) for c in override.columns]
        if override.primary_key is not None:
            generated.primary_key = override.primary_key.model_copy(deep=True)
        if override.foreign_keys:
            generated.foreign_keys = list(generated.foreign_keys or []) + [
                fk.model_copy(deep=True) for fk in override.foreign_keys
            ]
        return generated

    @staticmethod
    def validate_view(
        view: CustomViewConfiguration,
        configuration: ModuleConfiguration,
    ) -> Optional[str]:
        """
        Check that ``view`` can be added to ``configuration``.

        Returns:
            The reason the view is invalid, or None if it is valid
        """
        if not view.query or not view.query.strip():
            return "it has no query"

        try:
            references = extract_table_references(view.query)
        except (ParseError, TokenError) as e:
            logger.debug("Cannot parse query of view %s: %s", view.name, e)
            return "its query cannot be parsed"

        table_ids = configuration.table_ids()
        missing = [
            f"{ref_schema}.{ref_table}"
            for ref_schema, ref_table in references
            if (ref_schema, ref_table) not in table_ids
        ]
        if missing:
            return f"it references unknown tables: {', '.join(missing)}"
        return None

    def reconcile(self, configuration: ModuleConfiguration) -> MergeReport:
        """
        Add the valid merge-only views to ``configuration`` and sort the views
        of every schema present in both documents by name.
        """
        report = MergeReport()

        for schema_name, schema_configuration in configuration.schemas.items():
            merge_schema = self.merge_configuration.get_schema(schema_name)
            if merge_schema is None:
                continue

            for merge_view in merge_schema.custom_views:
                if schema_configuration.get_custom_view(merge_view.name) is not None:
                    continue

                reason = self.validate_view(merge_view, configuration)
                if reason is not None:
                    logger.warning(
                        "Dropping merge view %s.%s: %s",
                        schema_name,
                        merge_view.name,
                        reason,
                    )
                    report.dropped.append((schema_name, merge_view.name, reason))
                    continue

                logger.info("Adding merge view %s.%s", schema_name, merge_view.name)
                schema_configuration.custom_views.append(merge_view.model_copy(deep=True))
                report.added.append((schema_name, merge_view.name))

            schema_configuration.sort_custom_views()

        return report
