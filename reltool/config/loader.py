# reltool Configuration Loader
# Load, save, and validate YAML configuration files

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from reltool.config.defaults import get_default_config
from reltool.config.schema import ReleaseConfig

CONFIG_FILE_NAME = ".reltool.yaml"


def get_config_path(cwd: Optional[Path] = None) -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get("RELTOOL_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return (cwd or Path.cwd()) / CONFIG_FILE_NAME


def load_config(config_path: Optional[Path] = None) -> ReleaseConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        ReleaseConfig: Validated configuration object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}\nRun 'reltool config init' to create one.")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    merged = _merge_with_defaults(data)
    if not merged["name"]:
        merged["name"] = config_path.resolve().parent.name

    return ReleaseConfig.model_validate(merged)


def load_or_default_config(config_path: Optional[Path] = None) -> ReleaseConfig:
    """
    Load config if it exists, or fall back to defaults.

    The project name defaults to the name of the working directory.
    """
    if config_path is None:
        config_path = get_config_path()

    if config_path.exists():
        return load_config(config_path)

    data = get_default_config()
    data["name"] = Path.cwd().name
    return ReleaseConfig.model_validate(data)


def save_config(config: ReleaseConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(exclude_none=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without loading it.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return False, [f"Configuration file not found: {config_path}"]

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return False, [f"Invalid YAML syntax: {e}"]

    if data is None:
        return False, ["Configuration file is empty"]

    if not isinstance(data, dict):
        return False, ["Configuration must be a mapping"]

    try:
        ReleaseConfig.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    return True, []


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = get_default_config()

    for key in ("name", "version"):
        if key in data:
            result[key] = data[key]

    for section in ("options", "scripts", "git"):
        if section in data and data[section]:
            result[section] = {**result[section], **data[section]}

    return result
