"""Click-based CLI for pkgtypes - package type bindings for the types cache."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
import yaml
from pydantic import ValidationError

from pkgtypes import __version__
from pkgtypes.build import ManifestCatalog, TypesBuilder
from pkgtypes.config import (
    ensure_config_exists,
    get_config_path,
    load_config,
    validate_config_file,
)
from pkgtypes.config.schema import TypesConfig
from pkgtypes.exceptions import PkgTypesError
from pkgtypes.logger import TypesLogger
from pkgtypes.output.console import Console, create_console
from pkgtypes.sync.engine import TypesWriter

DEFAULT_MANIFEST = "packages.yaml"


def _load(app_path: Optional[Path], config_path: Optional[Path], console: Console) -> TypesConfig:
    """Load configuration or exit with an error."""
    try:
        return load_config(config_path, app_path=app_path)
    except ValidationError as e:
        console.print_error(f"Invalid configuration: {e}")
        sys.exit(1)
    except yaml.YAMLError as e:
        console.print_error(f"Invalid YAML in configuration: {e}")
        sys.exit(1)


def _writer(config: TypesConfig, verbose: bool) -> TypesWriter:
    return TypesWriter(config, logger=TypesLogger(verbose=verbose or config.output.verbose))


@click.group()
@click.version_option(version=__version__, prog_name="pkgtypes")
def cli() -> None:
    """pkgtypes - Type bindings for app packages.

    Keeps .meteor/local/types in sync with the packages an application uses:
    one linked entry per package, plus a packages.d.ts declaring them.
    """
    pass


@cli.command()
@click.option(
    "--manifest",
    "-m",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Package manifest (default: <app>/{DEFAULT_MANIFEST})",
)
@click.option("--app-path", "-a", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Application root")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
@click.option("--lint", is_flag=True, help="Exit immediately after updating types")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def sync(
    manifest: Optional[Path],
    app_path: Optional[Path],
    config_path: Optional[Path],
    lint: bool,
    verbose: bool,
) -> None:
    """Update the types cache from a package manifest.

    Only entries whose packages moved, appeared or disappeared are touched.
    """
    console = create_console(verbose=verbose)
    config = _load(app_path, config_path, console)
    console = create_console(verbose=verbose, colored=config.output.colored)
    manifest_path = manifest or Path(config.app_path) / DEFAULT_MANIFEST

    writer = _writer(config, verbose)
    builder = TypesBuilder(writer, ManifestCatalog(manifest_path))

    try:
        scan = writer.setup()
        result = builder.run_pass()
    except (PkgTypesError, OSError) as e:
        console.print_error(str(e))
        sys.exit(1)

    if lint:
        console.print("")
        console.print("[pkgtypes] Updated types", markup=False)
        console.print('[pkgtypes] Exiting "lint" early', markup=False)
        sys.exit(0)

    if verbose:
        console.print_scan_result(scan)
    console.print_write_result(result)


@cli.command()
@click.option("--app-path", "-a", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Application root")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Show link targets")
def status(app_path: Optional[Path], config_path: Optional[Path], verbose: bool) -> None:
    """Show the bindings currently in the types cache.

    Partial entries left by an interrupted run are removed.
    """
    console = create_console(verbose=verbose)
    config = _load(app_path, config_path, console)
    console = create_console(verbose=verbose, colored=config.output.colored)
    writer = _writer(config, verbose)

    try:
        scan = writer.setup()
    except OSError as e:
        console.print_error(str(e))
        sys.exit(1)

    console.print_info(f"Cache: {config.types_path}")
    if scan.cleaned:
        console.print_warning(f"Removed {len(scan.cleaned)} partial entries: {', '.join(scan.cleaned)}")
    console.print_bindings(
        writer.existing_bindings,
        separator=config.name_separator,
        replacement=config.name_replacement,
    )


@cli.command()
@click.option("--app-path", "-a", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Application root")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def clean(app_path: Optional[Path], config_path: Optional[Path], yes: bool) -> None:
    """Remove every binding and empty the declaration file."""
    console = create_console()
    config = _load(app_path, config_path, console)

    if not yes and not click.confirm(f"Remove all bindings in {config.types_path}?", default=False):
        console.print_warning("Cancelled")
        return

    writer = _writer(config, False)
    try:
        result = writer.write_to_disk()
    except OSError as e:
        console.print_error(str(e))
        sys.exit(1)

    console.print_success(f"Removed {result.removed} bindings")


@cli.group()
def config() -> None:
    """Manage pkgtypes configuration."""
    pass


@config.command("show")
@click.option("--app-path", "-a", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Application root")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
def config_show(app_path: Optional[Path], config_path: Optional[Path]) -> None:
    """Show the effective configuration."""
    console = create_console()
    loaded = _load(app_path, config_path, console)
    path = config_path or get_config_path(app_path)

    console.print_config_summary(str(path), str(loaded.types_path), loaded.symlink_overrides.enabled)
    console.print(loaded.model_dump(mode="json"))


@config.command("validate")
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Configuration file")
def config_validate(config_path: Optional[Path]) -> None:
    """Validate a configuration file."""
    console = create_console()
    is_valid, errors = validate_config_file(config_path)

    if is_valid:
        console.print_success("Configuration is valid")
        return

    for error in errors:
        console.print_error(error)
    sys.exit(1)


@config.command("init")
@click.option("--app-path", "-a", type=click.Path(exists=True, file_okay=False, path_type=Path), help="Application root")
def config_init(app_path: Optional[Path]) -> None:
    """Create a default pkgtypes.yaml."""
    console = create_console()
    path, created = ensure_config_exists(app_path)

    if created:
        console.print_success(f"Created {path}")
    else:
        console.print_info(f"Configuration already exists: {path}")


if __name__ == "__main__":
    cli()
