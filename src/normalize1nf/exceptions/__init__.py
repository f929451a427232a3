from ._config_exceptions import ModuleConfigurationLoadError, StructureLoadError
from ._normalization_exceptions import TableNotConfiguredError, ViewNameCollisionError
