# pkgtypes Build Integration Tests

from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from pkgtypes.build import ManifestCatalog, PackageInfo, TypesBuilder
from pkgtypes.exceptions import CatalogNotSetError, ManifestError
from pkgtypes.sync.engine import TypesWriter
from pkgtypes.sync.state import scan_cache


def _write_manifest(path: Path, packages: dict) -> Path:
    path.write_text(yaml.dump({"packages": packages}), encoding="utf-8")
    return path


class StaticCatalog:
    """Catalog returning a fixed package set."""

    def __init__(self, packages: dict[str, PackageInfo]):
        self.packages = packages

    def load_packages(self) -> dict[str, PackageInfo]:
        return dict(self.packages)


class TestManifestCatalog:
    """Tests for ManifestCatalog."""

    def test_loads_packages(self, temp_dir: Path):
        manifest = _write_manifest(
            temp_dir / "packages.yaml",
            {
                "ns:pkg": {"path": "/ws/pkg", "types_entry": "index.d.ts"},
                "plain": {"path": "/ws/plain"},
            },
        )

        packages = ManifestCatalog(manifest).load_packages()

        assert packages["ns:pkg"] == PackageInfo(path="/ws/pkg", types_entry="index.d.ts")
        assert packages["plain"].types_entry is None

    def test_relative_paths_resolved_against_manifest(self, temp_dir: Path):
        manifest = _write_manifest(temp_dir / "packages.yaml", {"ns:pkg": {"path": "packages/pkg"}})

        packages = ManifestCatalog(manifest).load_packages()

        assert Path(packages["ns:pkg"].path) == temp_dir / "packages" / "pkg"

    def test_empty_manifest(self, temp_dir: Path):
        manifest = temp_dir / "packages.yaml"
        manifest.write_text("", encoding="utf-8")
        assert ManifestCatalog(manifest).load_packages() == {}

    def test_missing_manifest(self, temp_dir: Path):
        with pytest.raises(ManifestError, match="not found"):
            ManifestCatalog(temp_dir / "missing.yaml").load_packages()

    def test_invalid_yaml(self, temp_dir: Path):
        manifest = temp_dir / "packages.yaml"
        manifest.write_text("packages: [unclosed", encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid YAML"):
            ManifestCatalog(manifest).load_packages()

    def test_package_without_path(self, temp_dir: Path):
        manifest = _write_manifest(temp_dir / "packages.yaml", {"ns:pkg": {"types_entry": "index.d.ts"}})
        with pytest.raises(ManifestError, match="needs a path"):
            ManifestCatalog(manifest).load_packages()


class TestTypesBuilder:
    """Tests for TypesBuilder."""

    def test_requires_catalog(self, writer: TypesWriter):
        builder = TypesBuilder(writer)
        with pytest.raises(CatalogNotSetError):
            builder.run_pass()

    def test_set_catalog(self, writer: TypesWriter):
        catalog = StaticCatalog({})
        builder = TypesBuilder(writer)
        builder.set_catalog(catalog)
        assert builder.catalog is catalog

    def test_run_pass(self, writer: TypesWriter, make_package: Callable[..., Path]):
        package = make_package("pkg")
        catalog = StaticCatalog(
            {
                "ns:pkg": PackageInfo(path=str(package), types_entry=str(package / "index.d.ts")),
                "untyped": PackageInfo(path="/ws/untyped"),
            }
        )

        result = TypesBuilder(writer, catalog).run_pass()

        assert result.created == 1
        assert writer.layout.entry_path("ns_pkg").is_dir()
        assert not writer.layout.entry_path("untyped").exists()
        content = writer.layout.declaration_path.read_text(encoding="utf-8")
        assert "'meteor/ns:pkg'" in content
        assert "untyped" not in content

    def test_scans_only_on_first_pass(self, writer: TypesWriter):
        catalog = StaticCatalog({"ns:pkg": PackageInfo(path="/ws/pkg", types_entry="index.d.ts")})
        builder = TypesBuilder(writer, catalog)

        with patch("pkgtypes.sync.engine.scan_cache", wraps=scan_cache) as mock_scan:
            builder.run_pass()
            builder.run_pass()

        assert mock_scan.call_count == 1

    def test_second_pass_unchanged(self, writer: TypesWriter):
        catalog = StaticCatalog({"ns:pkg": PackageInfo(path="/ws/pkg", types_entry="index.d.ts")})
        builder = TypesBuilder(writer, catalog)

        builder.run_pass()
        result = builder.run_pass()

        assert result.changed == 0

    def test_catalog_change_between_passes(self, writer: TypesWriter):
        builder = TypesBuilder(writer, StaticCatalog({"a:one": PackageInfo(path="/ws/one", types_entry="index.d.ts")}))
        builder.run_pass()

        builder.set_catalog(StaticCatalog({"b:two": PackageInfo(path="/ws/two", types_entry="index.d.ts")}))
        result = builder.run_pass()

        assert result.created == 1
        assert result.removed == 1
        assert sorted(writer.existing_bindings) == ["b_two"]
