__version__ = "1.0.0"

from .context import config, get_logger

from .document import (
    CustomViewConfiguration,
    ModuleConfiguration,
    build_module_configuration,
    load_merge_configuration,
    load_module_configuration,
    save_module_configuration,
)
from .exceptions import (
    ModuleConfigurationLoadError,
    StructureLoadError,
    TableNotConfiguredError,
    ViewNameCollisionError,
)
from .merge import MergeReconciler
from .naming import NamingPatterns, NormalizationOptions, SqlQuoter, resolve
from .pipeline import NormalizationResult, run_normalization
from .structure import (
    ColumnStructure,
    DatabaseStructure,
    PrimaryKey,
    TableStructure,
    load_structure,
)
from .walker import Normalize1NFWalker

__all__ = [
    "__version__",
    "config",
    "get_logger",
    # Configuration document
    "CustomViewConfiguration",
    "ModuleConfiguration",
    "build_module_configuration",
    "load_merge_configuration",
    "load_module_configuration",
    "save_module_configuration",
    # Exceptions
    "ModuleConfigurationLoadError",
    "StructureLoadError",
    "TableNotConfiguredError",
    "ViewNameCollisionError",
    # Normalization
    "MergeReconciler",
    "NamingPatterns",
    "NormalizationOptions",
    "SqlQuoter",
    "resolve",
    "NormalizationResult",
    "run_normalization",
    "Normalize1NFWalker",
    # Structure
    "ColumnStructure",
    "DatabaseStructure",
    "PrimaryKey",
    "TableStructure",
    "load_structure",
]
