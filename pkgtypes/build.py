# pkgtypes Build Integration
# Runs one reconciliation pass per build from an injected package catalog

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

import yaml

from pkgtypes.exceptions import CatalogNotSetError, ManifestError
from pkgtypes.sync.engine import TypesWriter, WriteResult


@dataclass(frozen=True)
class PackageInfo:
    """A package known to the build, with its type entry if it has one."""

    path: str
    types_entry: Optional[str] = None


class PackageCatalog(Protocol):
    """Source of the packages used by the application."""

    def load_packages(self) -> dict[str, PackageInfo]:
        """Return package name -> PackageInfo for the current build."""
        ...


class ManifestCatalog:
    """
    Package catalog read from a YAML manifest.

    Format:

        packages:
          author:package:
            path: /abs/or/relative/path
            types_entry: index.d.ts

    Relative package paths are resolved against the manifest's directory.
    """

    def __init__(self, manifest_path: Path):
        self.manifest_path = manifest_path

    def load_packages(self) -> dict[str, PackageInfo]:
        """
        Read the manifest.

        Raises:
            ManifestError: If the manifest is missing or malformed.
        """
        try:
            with open(self.manifest_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ManifestError(f"Package manifest not found: {self.manifest_path}") from None
        except yaml.YAMLError as e:
            raise ManifestError(f"Invalid YAML in {self.manifest_path}: {e}") from e

        entries = data.get("packages") if isinstance(data, dict) else None
        if entries is None:
            return {}
        if not isinstance(entries, dict):
            raise ManifestError(f"'packages' must be a mapping in {self.manifest_path}")

        base = self.manifest_path.parent
        packages: dict[str, PackageInfo] = {}
        for name, entry in entries.items():
            if not isinstance(entry, dict) or not entry.get("path"):
                raise ManifestError(f"Package '{name}' needs a path in {self.manifest_path}")
            package_path = Path(str(entry["path"])).expanduser()
            if not package_path.is_absolute():
                package_path = base / package_path
            types_entry = entry.get("types_entry")
            packages[str(name)] = PackageInfo(
                path=str(package_path),
                types_entry=str(types_entry) if types_entry else None,
            )
        return packages


class TypesBuilder:
    """
    Drives the writer from the host build tool.

    The host registers its catalog with set_catalog() whenever it has one,
    then calls run_pass() once per build. The cache is scanned on the first
    pass only.
    """

    def __init__(self, writer: TypesWriter, catalog: Optional[PackageCatalog] = None):
        self.writer = writer
        self._catalog = catalog

    @property
    def catalog(self) -> Optional[PackageCatalog]:
        return self._catalog

    def set_catalog(self, catalog: PackageCatalog) -> None:
        """Register the catalog used by subsequent passes."""
        self._catalog = catalog

    def run_pass(self) -> WriteResult:
        """
        Reconcile the cache with the catalog's packages.

        Packages without a type entry are left out.

        Raises:
            CatalogNotSetError: If no catalog has been registered.
            OSError: If the cache cannot be brought up to date.
        """
        if self._catalog is None:
            raise CatalogNotSetError("No package catalog registered; call set_catalog() first")

        if not self.writer.is_setup:
            self.writer.setup()

        packages = self._catalog.load_packages()
        self.writer.logger.debug("packages", len(packages))

        for name, info in packages.items():
            if info.types_entry:
                self.writer.add_package(name, info.path, info.types_entry)

        return self.writer.write_to_disk()
