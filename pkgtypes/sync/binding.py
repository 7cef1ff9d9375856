# pkgtypes Bindings
# Desired and scanned representations of a package's cache entry

import os
from dataclasses import dataclass
from pathlib import Path, PurePath

from pkgtypes.exceptions import TypesEntryError

# Fixed layout of a package's installed npm dependencies
NODE_MODULES_LINK = "node_modules"
PACKAGE_LINK = "package"


def normalize_name(name: str, separator: str = ":", replacement: str = "_") -> str:
    """
    Turn a package name into a filesystem-safe directory name.

    Only the first separator is replaced; package names carry at most one.

    >>> normalize_name("ns:pkg")
    'ns_pkg'
    """
    return name.replace(separator, replacement, 1)


def denormalize_name(name: str, separator: str = ":", replacement: str = "_") -> str:
    """Reverse normalize_name for a name read back from the cache."""
    return name.replace(replacement, separator, 1)


def find_node_modules_path(package_path: str | Path) -> str:
    """Location of a package's installed npm dependencies."""
    return os.path.join(str(package_path), "npm", "node_modules")


def relative_types_entry(package_path: str | Path, types_entry: str | Path) -> str:
    """
    Express a type entry path relative to its package, with forward slashes.

    The entry is resolved through the package link, so it must lie inside
    the package.

    Raises:
        TypesEntryError: If an absolute entry is outside package_path.
    """
    entry = PurePath(types_entry)
    if entry.is_absolute():
        try:
            entry = entry.relative_to(PurePath(package_path))
        except ValueError:
            raise TypesEntryError(f"Type entry {types_entry} is outside package {package_path}") from None
    return entry.as_posix()


@dataclass(frozen=True)
class Binding:
    """A package the current build wants represented in the cache."""

    logical_name: str
    normalized_name: str
    package_path: str
    node_modules_path: str
    types_entry: str


@dataclass(frozen=True)
class ExistingBinding:
    """
    A complete cache entry found on disk or written during this process.

    Targets are the link contents as stored, i.e. after remapping.
    """

    normalized_name: str
    cache_entry_path: Path
    node_modules_target: str
    package_target: str

    def matches(self, node_modules_target: str, package_target: str) -> bool:
        """Check if both links already point where they should."""
        return self.node_modules_target == node_modules_target and self.package_target == package_target
