# pkgtypes Utilities Module
# Idempotent filesystem helpers and platform link handling

from pkgtypes.utils.paths import (
    atomic_write,
    expand_path,
    mkdir_if_missing,
    readlink_or_none,
    rmdir_if_exists,
    unlink_if_exists,
    write_if_changed,
)
from pkgtypes.utils.platform import (
    create_directory_link,
    get_current_platform,
    is_junction,
    is_windows,
    normalize_link_target,
)

__all__ = [
    # Platform
    "get_current_platform",
    "is_windows",
    "is_junction",
    "create_directory_link",
    "normalize_link_target",
    # Paths
    "expand_path",
    "mkdir_if_missing",
    "unlink_if_exists",
    "rmdir_if_exists",
    "readlink_or_none",
    "atomic_write",
    "write_if_changed",
]
