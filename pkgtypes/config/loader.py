# pkgtypes Configuration Loader
# Load, save, and validate YAML configuration files

import copy
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from pkgtypes.config.defaults import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    ENV_CONFIG_PATH,
    ENV_SYMLINK_APP_PATH,
    ENV_SYMLINK_REMOTE_CATALOG_ROOT,
    generate_default_config,
)
from pkgtypes.config.schema import TypesConfig
from pkgtypes.utils.paths import expand_path


def get_config_path(app_path: Optional[Path] = None) -> Path:
    """Get the path to the configuration file."""
    # Allow override via environment variable
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return expand_path(env_path)
    return (app_path or Path.cwd()) / CONFIG_FILE_NAME


def load_config(config_path: Optional[Path] = None, *, app_path: Optional[Path] = None) -> TypesConfig:
    """
    Load configuration from YAML file, defaults, and environment.

    A missing configuration file is not an error; the defaults apply.

    Args:
        config_path: Optional path to config file. Uses default if not provided.
        app_path: Optional application root, overriding the file's value.

    Returns:
        TypesConfig: Validated configuration object.

    Raises:
        ValidationError: If config file is invalid.
    """
    if config_path is None:
        config_path = get_config_path(app_path)

    data: dict = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    merged = _merge_with_defaults(data)

    if app_path is not None:
        merged["app_path"] = str(app_path)
    elif "app_path" not in data:
        # Relative to the config file when it names no app root
        merged["app_path"] = str(config_path.parent if config_path.exists() else Path.cwd())

    _apply_env_overrides(merged)

    return TypesConfig.model_validate(merged)


def save_config(config: TypesConfig, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration object to save.
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Path: Path where config was saved.
    """
    if config_path is None:
        config_path = get_config_path(Path(config.app_path))

    config_path.parent.mkdir(parents=True, exist_ok=True)

    # Use mode='json' to serialize values as plain YAML scalars
    data = config.model_dump(exclude_none=True, mode="json")

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

    return config_path


def ensure_config_exists(app_path: Optional[Path] = None) -> tuple[Path, bool]:
    """
    Ensure configuration file exists, creating default if needed.

    Returns:
        Tuple of (config_path, was_created).
    """
    config_path = get_config_path(app_path)

    if config_path.exists():
        return config_path, False

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(generate_default_config(), encoding="utf-8")
    return config_path, True


def validate_config_file(config_path: Optional[Path] = None) -> tuple[bool, list[str]]:
    """
    Validate a configuration file without applying it.

    Args:
        config_path: Path to config file to validate.

    Returns:
        Tuple of (is_valid, error_messages).
    """
    if config_path is None:
        config_path = get_config_path()

    errors: list[str] = []

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
        return False, ["Configuration root must be a mapping"]

    try:
        TypesConfig.model_validate(_merge_with_defaults(data))
    except ValidationError as e:
        for error in e.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        return False, errors

    overrides = data.get("symlink_overrides") or {}
    if bool(overrides.get("remote_catalog_root")) != bool(overrides.get("app_path")):
        errors.append("symlink_overrides: both remote_catalog_root and app_path must be set, or neither")

    return len(errors) == 0, errors


def _merge_with_defaults(data: dict) -> dict:
    """Merge loaded data with default values for missing keys."""
    result = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in data.items():
        if key in ("symlink_overrides", "output") and isinstance(value, dict):
            result[key] = {**result[key], **value}
        else:
            result[key] = value

    return result


def _apply_env_overrides(data: dict) -> None:
    """Take link target overrides from the environment when both are set."""
    remote_root = os.environ.get(ENV_SYMLINK_REMOTE_CATALOG_ROOT)
    app_path = os.environ.get(ENV_SYMLINK_APP_PATH)

    if remote_root and app_path:
        data["symlink_overrides"] = {
            "remote_catalog_root": remote_root,
            "app_path": app_path,
        }
