# pkgtypes Platform Utilities
# Platform-aware directory link creation and link target handling

import os
import platform
import stat
import subprocess
from pathlib import Path

from pkgtypes.exceptions import LinkCreationError

# Platform name mapping: system name -> pkgtypes platform name
_PLATFORM_MAP: dict[str, str] = {
    "Darwin": "macos",
    "Linux": "linux",
    "Windows": "windows",
}

# Prefix Windows adds to junction targets read back through readlink
_EXTENDED_PATH_PREFIX = "\\\\?\\"


def get_current_platform() -> str:
    """
    Get the current platform identifier.

    Returns:
        Platform string: "macos", "linux", or "windows".
    """
    system = platform.system()
    return _PLATFORM_MAP.get(system, system.lower())


def is_windows() -> bool:
    """Check if running on Windows."""
    return get_current_platform() == "windows"


def is_junction(path: str | Path) -> bool:
    """
    Check if path is an NTFS junction.

    Always False outside Windows. A missing path raises FileNotFoundError.
    """
    if not is_windows():
        return False
    attributes = getattr(os.lstat(path), "st_file_attributes", 0)
    return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0)) and not os.path.islink(path)


def create_directory_link(target: str | Path, link: str | Path) -> None:
    """
    Create a link at `link` that resolves to the directory `target`.

    Windows gets a junction (no Developer Mode or admin privilege needed, and
    relative paths inside the tree resolve as if it were physically present);
    other platforms get a directory symlink.

    Args:
        target: Directory the link points to. Need not exist yet.
        link: Path of the link to create. Must not exist.

    Raises:
        LinkCreationError: If the junction could not be created.
        OSError: If the symlink could not be created.
    """
    if is_windows():
        completed = subprocess.run(
            ["cmd", "/c", "mklink", "/J", str(link), str(target)],
            capture_output=True,
            text=True,
        )
        if completed.returncode != 0:
            message = (completed.stderr or completed.stdout).strip()
            raise LinkCreationError(f"Failed to create junction {link} -> {target}: {message}")
        return

    os.symlink(str(target), str(link), target_is_directory=True)


def normalize_link_target(target: str) -> str:
    """Strip the extended-length prefix Windows reports for junction targets."""
    if target.startswith(_EXTENDED_PATH_PREFIX):
        return target[len(_EXTENDED_PATH_PREFIX) :]
    return target
