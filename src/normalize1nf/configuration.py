import os
from ast import literal_eval
from collections.abc import MutableMapping
from typing import Optional, Type, TypeVar, Union, cast

import toml
from box import Box


D = TypeVar("D", bound=Union[dict, MutableMapping])

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), "config.toml")


class CompoundKey(tuple):
    pass


class Config(Box):
    """
    A config is a Box subclass
    """


def merge_dicts(d1: MutableMapping, d2: MutableMapping) -> MutableMapping:
    """
    Updates `d1` from `d2` by replacing each `(k, v1)` pair in `d1` with the
    corresponding `(k, v2)` pair in `d2`.

    If the value of each pair is itself a dict, then the value is updated
    recursively.

    Args:
        - d1 (MutableMapping): A dictionary to be replaced
        - d2 (MutableMapping): A dictionary used for replacement

    Returns:
        - A `MutableMapping` with the two dictionary contents merged
    """

    new_dict = d1.copy()

    for k, v in d2.items():
        if isinstance(new_dict.get(k), MutableMapping) and isinstance(
            v, MutableMapping
        ):
            new_dict[k] = merge_dicts(new_dict[k], d2[k])
        else:
            new_dict[k] = d2[k]
    return new_dict


def string_to_type(val: str) -> Union[bool, int, float, str]:
    """
    Helper function for transforming string env var values into typed values.

    Maps:
        - "true" (any capitalization) to `True`
        - "false" (any capitalization) to `False`
        - any other valid literal Python syntax interpretable by ast.literal_eval

    Arguments:
        - val (str): the string value of an environment variable

    Returns:
        Union[bool, int, float, str]: the type-cast env var value
    """

    # bool
    if val.upper() == "TRUE":
        return True
    elif val.upper() == "FALSE":
        return False

    # ints, floats, or any other literal Python syntax
    try:
        return literal_eval(val)
    except (ValueError, SyntaxError):
        pass

    # return string value
    return val


def expand_path(path: str) -> str:
    """
    Expands `~` and environment variables in a filesystem path. Only paths are
    expanded; configuration values are kept verbatim because naming patterns
    use the same `${...}` syntax.
    """
    return os.path.expanduser(os.path.expandvars(path))


def dict_to_flatdict(dct: MutableMapping, parent: Optional[CompoundKey] = None) -> dict:
    """Converts a (nested) dictionary to a flattened representation.

    Each key of the flat dict will be a CompoundKey tuple containing the "chain of keys"
    for the corresponding value.

    Args:
        - dct (dict): The dictionary to flatten
        - parent (CompoundKey, optional): Defaults to `None`. The parent key
        (you shouldn't need to set this)

    Returns:
        - dict: A flattened dict
    """

    items = []  # type: list
    parent = parent or CompoundKey()
    for k, v in dct.items():
        k_parent = CompoundKey(parent + (k,))
        if isinstance(v, MutableMapping):
            items.extend(dict_to_flatdict(v, parent=k_parent).items())
        else:
            items.append((k_parent, v))
    return dict(items)


def flatdict_to_dict(dct: dict, dct_class: Optional[Type[D]] = None) -> D:
    """Converts a flattened dictionary back to a nested dictionary.

    Args:
        - dct (dict): The dictionary to be nested. Each key should be a
            `CompoundKey`, as generated by `dict_to_flatdict()`
        - dct_class (type, optional): the type of the result; defaults to `dict`

    Returns:
        - D: An instance of `dct_class` used to represent a nested dictionary
    """
    result = cast(D, (dct_class or dict)())
    for k, v in dct.items():
        if isinstance(k, CompoundKey):
            current_dict = result
            for ki in k[:-1]:
                current_dict = current_dict.setdefault(  # type: ignore
                    ki, (dct_class or dict)()
                )
            current_dict[k[-1]] = v
        else:
            result[k] = v

    return result


# Validation ------------------------------------------------------------------


def validate_config(config: Config) -> None:
    """
    Validates that keys of the configuration do not shadow Config methods.
    """

    def check_valid_keys(config: Config) -> None:
        invalid_keys = dir(Config)
        for k, v in config.items():
            if k in invalid_keys:
                raise ValueError('Invalid config key: "{}"'.format(k))
            if isinstance(v, Config):
                check_valid_keys(v)

    check_valid_keys(config)


# Load configuration ----------------------------------------------------------


def load_toml(path: str) -> dict:
    """
    Loads a config dictionary from TOML
    """
    return dict(toml.load(expand_path(path)))


def interpolate_config(config: dict, env_var_prefix: Optional[str] = None) -> Config:
    """
    Applies environment overrides to a config dictionary, such as the one loaded
    from `load_toml`.

    Any env var with the format
        [ENV_VAR_PREFIX]__[Section]__[Optional Sub-Sections...]__[Key] = Value
    sets the corresponding configuration value.
    """
    flat_config = dict_to_flatdict(config)

    if env_var_prefix:
        for env_var, env_var_value in os.environ.items():
            if not env_var.startswith(env_var_prefix + "__"):
                continue

            env_var_option = env_var[len(env_var_prefix + "__") :]

            # at least one section and one key
            if "__" not in env_var_option:
                continue

            config_option = CompoundKey(env_var_option.lower().split("__"))
            flat_config[config_option] = string_to_type(env_var_value)

    return cast(Config, flatdict_to_dict(flat_config, dct_class=Config))


def load_configuration(
    path: str = DEFAULT_CONFIG,
    user_config_path: Optional[str] = None,
    env_var_prefix: Optional[str] = None,
) -> Config:
    """
    Loads a configuration from a known location.

    Args:
        - path (str): the path to the TOML configuration file
        - user_config_path (str): an optional path to a user config file. If a user config
            is provided, it will be used to update the main config prior to interpolation
        - env_var_prefix (str): any env vars matching this prefix will be used to create
            configuration values

    Returns:
        - Config
    """

    default_config = load_toml(path)

    if user_config_path and os.path.isfile(expand_path(user_config_path)):
        user_config = load_toml(user_config_path)
        default_config = cast(dict, merge_dicts(default_config, user_config))

    config = interpolate_config(default_config, env_var_prefix=env_var_prefix)

    validate_config(config)
    return config
