# pkgtypes Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class SymlinkOverrides(BaseModel):
    """
    Replacement roots for link targets.

    Used when the cache is populated in a different environment (a container,
    a CI runner) than the one that later resolves the links. Both roots must be
    set for remapping to take effect.
    """

    remote_catalog_root: str | None = Field(
        default=None, description="Replacement for the remote package catalog root"
    )
    app_path: str | None = Field(default=None, description="Replacement for the application path")

    @property
    def enabled(self) -> bool:
        """Check if both override roots are configured."""
        return bool(self.remote_catalog_root) and bool(self.app_path)


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose trace output")
    colored: bool = Field(default=True, description="Enable colored output")


class TypesConfig(BaseModel):
    """Root configuration model for pkgtypes."""

    app_path: str = Field(default=".", description="Application root the cache lives under")
    cache_dir: str = Field(default=".meteor/local/types", description="Cache root, relative to app_path")
    stub_module: str = Field(default="package-types", description="Name of the stub module holding the bindings")
    declaration_file: str = Field(default="packages.d.ts", description="Aggregate declaration file name")
    namespace: str = Field(default="meteor", description="Module namespace used in declarations")
    name_separator: str = Field(default=":", description="Separator between author and package in names")
    name_replacement: str = Field(default="_", description="Filesystem-safe substitute for the separator")
    strip_suffixes: list[str] = Field(
        default_factory=lambda: [".d.ts", ".ts"],
        description="Suffixes removed from type entry paths, first match wins",
    )
    remote_catalog_root: str | None = Field(
        default=None, description="Root of the shared package catalog (for link target remapping)"
    )
    symlink_overrides: SymlinkOverrides = Field(
        default_factory=SymlinkOverrides, description="Link target remapping settings"
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("app_path")
    @classmethod
    def expand_app_path(cls, v: str) -> str:
        """Expand ~ and make the application path absolute."""
        return str(Path(v).expanduser().absolute())

    @field_validator("remote_catalog_root")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())

    @field_validator("name_separator", "name_replacement")
    @classmethod
    def require_single_character(cls, v: str) -> str:
        """Name separators are single characters."""
        if len(v) != 1:
            raise ValueError("must be a single character")
        return v

    @property
    def types_path(self) -> Path:
        """Absolute cache root."""
        return Path(self.app_path) / self.cache_dir
