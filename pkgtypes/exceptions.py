# pkgtypes Exceptions
# Error types raised by the cache reconciler and its host seam


class PkgTypesError(Exception):
    """Base exception for pkgtypes errors."""

    pass


class LinkCreationError(OSError):
    """Raised when a directory link or junction could not be created."""

    pass


class CatalogNotSetError(PkgTypesError):
    """Raised when a build pass runs before a package catalog was registered."""

    pass


class ManifestError(PkgTypesError):
    """Raised when a package manifest cannot be read or is malformed."""

    pass


class TypesEntryError(PkgTypesError, ValueError):
    """Raised when a package's type entry lies outside the package."""

    pass
