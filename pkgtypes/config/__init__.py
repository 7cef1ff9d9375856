# pkgtypes Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from pkgtypes.config.defaults import DEFAULT_CONFIG, generate_default_config
from pkgtypes.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from pkgtypes.config.schema import OutputConfig, SymlinkOverrides, TypesConfig

__all__ = [
    # Schema
    "TypesConfig",
    "SymlinkOverrides",
    "OutputConfig",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
