# pkgtypes Default Configuration
# Full default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "app_path": ".",
    "cache_dir": ".meteor/local/types",
    "stub_module": "package-types",
    "declaration_file": "packages.d.ts",
    "namespace": "meteor",
    "name_separator": ":",
    "name_replacement": "_",
    "strip_suffixes": [".d.ts", ".ts"],
    "remote_catalog_root": None,
    "symlink_overrides": {
        "remote_catalog_root": None,
        "app_path": None,
    },
    "output": {
        "verbose": False,
        "colored": True,
    },
}

# Environment variables that override the link target roots
ENV_SYMLINK_REMOTE_CATALOG_ROOT = "PKGTYPES_SYMLINK_REMOTE_CATALOG_ROOT"
ENV_SYMLINK_APP_PATH = "PKGTYPES_SYMLINK_APP_PATH"
ENV_CONFIG_PATH = "PKGTYPES_CONFIG"
ENV_DEBUG = "PKGTYPES_DEBUG"

CONFIG_FILE_NAME = "pkgtypes.yaml"


def generate_default_config() -> str:
    """
    Generate the default configuration as commented YAML.

    Returns:
        YAML text suitable for writing to pkgtypes.yaml.
    """
    header = (
        "# pkgtypes configuration\n"
        "# Keeps .meteor/local/types in sync with the packages used by the app.\n"
        "#\n"
        f"# Link targets can be remapped with {ENV_SYMLINK_REMOTE_CATALOG_ROOT}\n"
        f"# and {ENV_SYMLINK_APP_PATH} (both must be set).\n\n"
    )
    data = {key: value for key, value in DEFAULT_CONFIG.items() if key != "app_path"}
    return header + yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
