import logging
import os
import sys

from decouple import AutoConfig

from .configuration import DEFAULT_CONFIG, Config, load_configuration

CONFIG_BASE_URL = os.getenv(
    "NORMALIZE1NF_BASE_CONFIG_PATH",
    os.path.join(os.path.expanduser("~"), ".normalize1nf"),
)
decouple_config = AutoConfig(search_path=CONFIG_BASE_URL)
USER_CONFIG = decouple_config(
    "NORMALIZE1NF_USER_CONFIG_PATH", default="~/.normalize1nf/config.toml"
)
ENV_VAR_PREFIX = "NORMALIZE1NF"


def load_default_config() -> Config:
    return load_configuration(
        path=DEFAULT_CONFIG,
        user_config_path=USER_CONFIG,
        env_var_prefix=ENV_VAR_PREFIX,
    )


def _create_logger(name: str) -> logging.Logger:
    """
    Creates a logger with a `StreamHandler` that has level and formatting
    set from `normalize1nf.context.config`.

    Args:
        - name (str): Name to use for logger.

    Returns:
        - logging.Logger: a configured logging object
    """
    logger = logging.getLogger(name)

    formatter = logging.Formatter(config.logging.format, config.logging.datefmt)
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    logger.setLevel(config.logging.level)

    return logger


def configure_logging() -> logging.Logger:
    """
    Creates a "normalize1nf" root logger with a `StreamHandler` that has level
    and formatting set from the runtime configuration.

    Returns:
        - logging.Logger: a configured logging object
    """
    return _create_logger("normalize1nf")


def get_logger(name: str = None) -> logging.Logger:
    """
    Returns a logger.

    Args:
        - name (str): if `None`, the root normalize1nf logger is returned. If provided,
            a child logger of the name `{name}` is returned. The child logger inherits
            the root logger's settings.

    Returns:
        - logging.Logger: a configured logging object with the appropriate name
    """

    if name is None:
        return normalize1nf_logger
    else:
        return normalize1nf_logger.getChild(name)


config = load_default_config()
normalize1nf_logger = configure_logging()

logger = get_logger()
logger.propagate = False
