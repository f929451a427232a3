"""
End-to-end normalization of a database structure into an export configuration.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from normalize1nf.document.builder import build_module_configuration
from normalize1nf.document.io import load_merge_configuration, save_module_configuration
from normalize1nf.document.models import CustomViewConfiguration, ModuleConfiguration
from normalize1nf.merge import MergeReport
from normalize1nf.naming import NormalizationOptions
from normalize1nf.structure import DatabaseStructure
from normalize1nf.walker import Normalize1NFWalker

logger = logging.getLogger(__name__)


@dataclass
class NormalizationResult:
    """
    Outcome of a normalization run.

    Attributes:
        configuration: The rewritten configuration
        views: Views generated from non-1NF columns, in creation order
        warnings: Non-fatal problems (e.g. tables without primary key)
        merge_report: Views added or dropped from the merge document
    """

    configuration: ModuleConfiguration
    views: List[CustomViewConfiguration] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    merge_report: MergeReport = field(default_factory=MergeReport)


def run_normalization(
    structure: DatabaseStructure,
    output_file: Optional[Union[str, Path]] = None,
    merge_file: Optional[Union[str, Path]] = None,
    options: Optional[NormalizationOptions] = None,
    import_module: Optional[Dict[str, Any]] = None,
) -> NormalizationResult:
    """
    Normalize every table of ``structure``.

    Args:
        structure: Tables to visit, in order
        output_file: Where to save the configuration; not saved when None
        merge_file: Merge document to reconcile with the generated configuration
        options: Naming patterns and SQL quoting
        import_module: Import module description recorded in the configuration

    Raises:
        ModuleConfigurationLoadError: If the merge file cannot be loaded. Nothing
            is generated in that case.
    """
    merge_configuration = load_merge_configuration(merge_file)

    walker = Normalize1NFWalker(
        build_module_configuration(structure, import_module=import_module),
        options=options,
        merge_configuration=merge_configuration,
    )
    walker.init_database()

    for table in structure.iter_tables():
        logger.debug("Opening table %s", table.table_id)
        walker.handle_data_open_table(table)

    configuration = walker.finish_database()

    if output_file is not None:
        save_module_configuration(configuration, output_file)
        logger.info("Configuration written to %s", output_file)

    return NormalizationResult(
        configuration=configuration,
        views=list(walker.views),
        warnings=list(walker.warnings),
        merge_report=walker.merge_report,
    )
