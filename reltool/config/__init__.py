# reltool Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from reltool.config.defaults import DEFAULT_CONFIG, generate_default_config, get_default_config
from reltool.config.loader import (
    CONFIG_FILE_NAME,
    get_config_path,
    load_config,
    load_or_default_config,
    save_config,
    validate_config_file,
)
from reltool.config.schema import (
    DEFAULT_CHANGELOG_COMMAND,
    GitConfig,
    OptionsConfig,
    ReleaseConfig,
    ScriptsConfig,
)

__all__ = [
    # Schema
    "ReleaseConfig",
    "OptionsConfig",
    "ScriptsConfig",
    "GitConfig",
    "DEFAULT_CHANGELOG_COMMAND",
    # Loader
    "CONFIG_FILE_NAME",
    "load_config",
    "load_or_default_config",
    "save_config",
    "get_config_path",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "get_default_config",
    "generate_default_config",
]
