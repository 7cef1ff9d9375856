# pkgtypes Cache State
# Recovers previously written bindings from the types cache

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pkgtypes.config.schema import TypesConfig
from pkgtypes.logger import TypesLogger
from pkgtypes.sync.actions import clean_binding
from pkgtypes.sync.binding import NODE_MODULES_LINK, PACKAGE_LINK, ExistingBinding
from pkgtypes.utils.paths import mkdir_if_missing, readlink_or_none, write_if_changed


@dataclass(frozen=True)
class CacheLayout:
    """
    Locations inside the types cache.

    <types_path>/
        node_modules/<stub_module>/package.json
        node_modules/<stub_module>/<name>/{node_modules,package}
        <declaration_file>
    """

    types_path: Path
    stub_module: str = "package-types"
    declaration_file: str = "packages.d.ts"

    @classmethod
    def from_config(cls, config: TypesConfig) -> "CacheLayout":
        """Build the layout described by a configuration."""
        return cls(
            types_path=config.types_path,
            stub_module=config.stub_module,
            declaration_file=config.declaration_file,
        )

    @property
    def stub_module_path(self) -> Path:
        """Directory holding one subdirectory per binding."""
        return self.types_path / "node_modules" / self.stub_module

    @property
    def stub_manifest_path(self) -> Path:
        """package.json that makes the stub module importable."""
        return self.stub_module_path / "package.json"

    @property
    def declaration_path(self) -> Path:
        """Aggregate declaration file."""
        return self.types_path / self.declaration_file

    def entry_path(self, normalized_name: str) -> Path:
        """Cache entry directory for a binding."""
        return self.stub_module_path / normalized_name


@dataclass
class ScanResult:
    """Bindings recovered from the cache by scan_cache."""

    existing: dict[str, ExistingBinding] = field(default_factory=dict)
    cleaned: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Number of complete bindings found."""
        return len(self.existing)


def stub_manifest_content(stub_module: str) -> str:
    """Content of the stub module's package.json."""
    return json.dumps({"name": stub_module}, indent=2)


def read_existing_binding(entry_path: Path) -> Optional[ExistingBinding]:
    """
    Read a cache entry's links.

    Returns:
        The binding, or None if either link is missing.

    Raises:
        OSError: If a link cannot be read for any reason other than absence.
    """
    node_modules_target = readlink_or_none(entry_path / NODE_MODULES_LINK)
    package_target = readlink_or_none(entry_path / PACKAGE_LINK)

    if node_modules_target is None or package_target is None:
        return None

    return ExistingBinding(
        normalized_name=entry_path.name,
        cache_entry_path=entry_path,
        node_modules_target=node_modules_target,
        package_target=package_target,
    )


def scan_cache(layout: CacheLayout, logger: Optional[TypesLogger] = None) -> ScanResult:
    """
    Prepare the cache and recover the bindings already in it.

    Entries with only one of their two links are leftovers of an interrupted
    run; they are removed on sight.

    Args:
        layout: Cache locations.
        logger: Optional trace logger.

    Returns:
        ScanResult with the complete bindings and the names that were cleaned.

    Raises:
        OSError: For any filesystem error other than a missing link.
    """
    logger = logger or TypesLogger()
    result = ScanResult()

    logger.debug("starting setup")
    mkdir_if_missing(layout.types_path, parents=True)
    mkdir_if_missing(layout.stub_module_path, parents=True)
    write_if_changed(layout.stub_manifest_path, stub_manifest_content(layout.stub_module))

    for entry_path in sorted(layout.stub_module_path.iterdir()):
        if entry_path.is_symlink() or not entry_path.is_dir():
            continue

        logger.debug("checking", entry_path.name)
        existing = read_existing_binding(entry_path)

        if existing is None:
            logger.debug("partial - cleaning", entry_path.name)
            clean_binding(entry_path, logger)
            result.cleaned.append(entry_path.name)
            continue

        result.existing[existing.normalized_name] = existing
        logger.debug("add existing", entry_path.name)

    logger.debug("finish setup")
    return result
