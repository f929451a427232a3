"""
Loading and saving of configuration documents (YAML).
"""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from normalize1nf.document.models import ModuleConfiguration
from normalize1nf.exceptions import ModuleConfigurationLoadError

PathLike = Union[str, Path]


def load_module_configuration(path: PathLike) -> ModuleConfiguration:
    """
    Load a configuration document from a YAML file.

    Args:
        path: Path to the configuration file

    Returns:
        The parsed ModuleConfiguration (empty if the file is empty)

    Raises:
        ModuleConfigurationLoadError: If the file cannot be read, is not valid
            YAML or does not describe a configuration document
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return ModuleConfiguration.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise ModuleConfigurationLoadError(path, e) from e


def load_merge_configuration(path: Optional[PathLike]) -> ModuleConfiguration:
    """Load the merge document, or an empty one when no path is given."""
    if path is None:
        return ModuleConfiguration()
    return load_module_configuration(path)


def module_configuration_to_dict(configuration: ModuleConfiguration) -> dict:
    return configuration.model_dump(by_alias=True, exclude_none=True, mode="json")


def dump_module_configuration(configuration: ModuleConfiguration) -> str:
    return yaml.safe_dump(
        module_configuration_to_dict(configuration),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def save_module_configuration(
    configuration: ModuleConfiguration, path: PathLike
) -> None:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dump_module_configuration(configuration), encoding="utf-8")
