"""pkgtypes - type bindings for app packages.

Keeps a types cache directory in sync with the packages an application
uses: one pair of directory links per package and a single generated
declaration file mapping package names to their type definitions.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "TypesWriter",
    "WriteResult",
    "TypesBuilder",
    "ManifestCatalog",
    "PathRemapper",
    "TypesConfig",
    "load_config",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("TypesWriter", "WriteResult"):
        from pkgtypes.sync import engine

        return getattr(engine, name)
    if name in ("TypesBuilder", "ManifestCatalog"):
        from pkgtypes import build

        return getattr(build, name)
    if name == "PathRemapper":
        from pkgtypes.sync.remap import PathRemapper

        return PathRemapper
    if name == "TypesConfig":
        from pkgtypes.config.schema import TypesConfig

        return TypesConfig
    if name == "load_config":
        from pkgtypes.config.loader import load_config

        return load_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
