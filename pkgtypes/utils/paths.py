# pkgtypes Path Utilities
# Idempotent filesystem operations for the types cache

import os
import tempfile
from pathlib import Path

from pkgtypes.utils.platform import is_junction, normalize_link_target


def expand_path(path: str | Path) -> Path:
    """
    Expand ~ and environment variables in path.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded absolute Path object.
    """
    path_str = str(path)
    # Expand ~ first, then environment variables
    path_str = os.path.expanduser(path_str)
    path_str = os.path.expandvars(path_str)
    return Path(path_str).absolute()


def mkdir_if_missing(path: Path, *, parents: bool = False) -> bool:
    """
    Create a directory, treating an existing one as success.

    Args:
        path: Directory to create.
        parents: Create missing parent directories too.

    Returns:
        True if the directory was created, False if it already existed.

    Raises:
        OSError: For anything other than the directory already existing.
    """
    try:
        path.mkdir(parents=parents)
    except FileExistsError:
        return False
    return True


def unlink_if_exists(path: Path) -> bool:
    """
    Remove a link or file, treating a missing one as success.

    Junctions are directory reparse points on Windows and are removed with
    rmdir; everything else goes through unlink.

    Returns:
        True if something was removed, False if it was already gone.
    """
    try:
        if is_junction(path):
            os.rmdir(path)
        else:
            os.unlink(path)
    except FileNotFoundError:
        return False
    return True


def rmdir_if_exists(path: Path) -> bool:
    """
    Remove an empty directory, treating a missing one as success.

    Returns:
        True if the directory was removed, False if it was already gone.
    """
    try:
        os.rmdir(path)
    except FileNotFoundError:
        return False
    return True


def readlink_or_none(path: Path) -> str | None:
    """
    Read the target of a link.

    Args:
        path: Link to read.

    Returns:
        The link target text, or None if no link exists at path.

    Raises:
        OSError: If path exists but is not a link, or cannot be read.
    """
    try:
        target = os.readlink(path)
    except FileNotFoundError:
        return None
    return normalize_link_target(str(target))


def _current_umask() -> int:
    """Read the process umask without changing it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def atomic_write(path: Path, content: str | bytes, *, encoding: str = "utf-8") -> None:
    """
    Atomically write content to file.

    Uses a temporary file and atomic rename.

    Args:
        path: Target file path.
        content: Content to write (str or bytes).
        encoding: Encoding for string content (default utf-8).
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory for atomic rename
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        if isinstance(content, str):
            with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
                f.write(content)
        else:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
        # mkstemp creates 0600; give the file the mode a plain open() would
        os.chmod(temp_path, 0o666 & ~_current_umask())
        os.replace(temp_path, path)
    except Exception:
        # Cleanup on failure
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def write_if_changed(path: Path, content: str, *, encoding: str = "utf-8") -> bool:
    """
    Write content only when the file is missing or differs.

    Returns:
        True if the file was written.
    """
    try:
        if path.read_text(encoding=encoding) == content:
            return False
    except FileNotFoundError:
        pass
    atomic_write(path, content, encoding=encoding)
    return True
