from .builder import build_module_configuration, create_ignore_list_except
from .io import (
    dump_module_configuration,
    load_merge_configuration,
    load_module_configuration,
    save_module_configuration,
)
from .models import (
    ColumnConfiguration,
    CustomViewConfiguration,
    DatabaseTechnicalFeatures,
    ForeignKeyConfiguration,
    ModuleConfiguration,
    PrimaryKeyConfiguration,
    ReferenceConfiguration,
    SchemaConfiguration,
    TableConfiguration,
)
