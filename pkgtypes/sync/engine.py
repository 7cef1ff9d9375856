# pkgtypes Types Writer
# Reconciles the types cache with the packages of the current build pass

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pkgtypes.config.schema import TypesConfig
from pkgtypes.logger import TypesLogger
from pkgtypes.sync.actions import ActionType, BindingAction, clean_binding, create_binding_links
from pkgtypes.sync.binding import (
    Binding,
    ExistingBinding,
    find_node_modules_path,
    normalize_name,
    relative_types_entry,
)
from pkgtypes.sync.declaration import generate_declaration
from pkgtypes.sync.remap import PathRemapper
from pkgtypes.sync.state import CacheLayout, ScanResult, scan_cache
from pkgtypes.utils.paths import atomic_write


@dataclass
class WriteResult:
    """Result of a write_to_disk pass."""

    declaration_path: Path
    actions: list[BindingAction] = field(default_factory=list)

    def _count(self, action_type: ActionType) -> int:
        return sum(1 for action in self.actions if action.action_type == action_type)

    @property
    def created(self) -> int:
        return self._count(ActionType.CREATED)

    @property
    def replaced(self) -> int:
        return self._count(ActionType.REPLACED)

    @property
    def removed(self) -> int:
        return self._count(ActionType.REMOVED)

    @property
    def unchanged(self) -> int:
        return self._count(ActionType.UNCHANGED)

    @property
    def changed(self) -> int:
        """Number of entries whose links were touched."""
        return sum(1 for action in self.actions if action.is_mutation)

    @property
    def total_packages(self) -> int:
        """Number of packages declared by this pass."""
        return len(self.actions) - self.removed


class TypesWriter:
    """
    Manages the files and folders in the types cache.

    One writer exists per process. setup() recovers what earlier runs left on
    disk; each build pass then calls add_package() for every package and
    finishes with write_to_disk(), which touches only entries that changed.
    """

    def __init__(
        self,
        config: TypesConfig,
        *,
        logger: Optional[TypesLogger] = None,
        remapper: Optional[PathRemapper] = None,
    ):
        """
        Initialize the writer. Does not touch the disk.

        Args:
            config: pkgtypes configuration.
            logger: Optional trace logger.
            remapper: Optional link target remapper (built from config if not provided).
        """
        self.config = config
        self.layout = CacheLayout.from_config(config)
        self.logger = logger or TypesLogger(verbose=config.output.verbose)
        self.remapper = remapper or PathRemapper(
            remote_catalog_root=config.remote_catalog_root,
            app_path=config.app_path,
            overrides=config.symlink_overrides,
        )
        self._existing: dict[str, ExistingBinding] = {}
        self._packages: dict[str, Binding] = {}
        self._scan_result: Optional[ScanResult] = None

    @property
    def is_setup(self) -> bool:
        """Check if the cache has been scanned."""
        return self._scan_result is not None

    @property
    def existing_bindings(self) -> dict[str, ExistingBinding]:
        """Bindings currently on disk, by normalized name."""
        return dict(self._existing)

    @property
    def pending_packages(self) -> dict[str, Binding]:
        """Bindings added for the pass in progress, by normalized name."""
        return dict(self._packages)

    def setup(self) -> ScanResult:
        """
        Scan the cache once per process.

        Later calls return the first scan's result without touching the disk.

        Raises:
            OSError: For any filesystem error other than a missing link.
        """
        if self._scan_result is None:
            self._scan_result = scan_cache(self.layout, self.logger)
            self._existing = dict(self._scan_result.existing)
        return self._scan_result

    def normalize_name(self, name: str) -> str:
        """Filesystem-safe directory name for a package."""
        return normalize_name(name, self.config.name_separator, self.config.name_replacement)

    def add_package(self, name: str, package_path: str | Path, types_entry: str | Path) -> Binding:
        """
        Add a package to the pass in progress.

        A package whose normalized name is already taken replaces the earlier
        one.

        Args:
            name: Package name, e.g. "author:package".
            package_path: Directory holding the package sources.
            types_entry: Type entry file, relative to package_path or absolute.

        Returns:
            The binding that was recorded.

        Raises:
            TypesEntryError: If an absolute types_entry is outside package_path.
        """
        self.logger.debug("adding package", name)
        normalized = self.normalize_name(name)
        package_path = str(package_path)
        entry = relative_types_entry(package_path, types_entry)

        previous = self._packages.get(normalized)
        if previous is not None and previous.logical_name != name:
            self.logger.warning(f"{name} and {previous.logical_name} share the cache entry {normalized}; keeping {name}")

        binding = Binding(
            logical_name=name,
            normalized_name=normalized,
            package_path=package_path,
            node_modules_path=find_node_modules_path(package_path),
            types_entry=entry,
        )
        self._packages[normalized] = binding
        return binding

    def status(self) -> list[BindingAction]:
        """
        Preview what write_to_disk() would do, without touching the disk.

        Uses the bindings found by setup(); before setup every pending package
        shows as created.
        """
        actions = []
        for name, binding in sorted(self._packages.items()):
            node_modules_target = self.remapper.remap(binding.node_modules_path)
            package_target = self.remapper.remap(binding.package_path)
            existing = self._existing.get(name)

            if existing is None:
                action_type = ActionType.CREATED
            elif existing.matches(node_modules_target, package_target):
                action_type = ActionType.UNCHANGED
            else:
                action_type = ActionType.REPLACED
            actions.append(
                BindingAction(
                    name=name,
                    action_type=action_type,
                    node_modules_target=node_modules_target,
                    package_target=package_target,
                )
            )

        for name in sorted(set(self._existing) - set(self._packages)):
            actions.append(BindingAction(name=name, action_type=ActionType.REMOVED))
        return actions

    def write_to_disk(self) -> WriteResult:
        """
        Bring the cache in line with the packages added since the last pass.

        Every link is created or confirmed before the declaration file is
        written, so a failed pass never leaves declarations pointing at links
        that are missing. On failure the pending packages are kept.

        Returns:
            WriteResult describing what happened to each entry.

        Raises:
            OSError: For any filesystem error other than missing links or
                already existing directories.
        """
        self.setup()
        self.logger.debug("writing to disk")

        result = WriteResult(declaration_path=self.layout.declaration_path)

        for name, binding in self._packages.items():
            result.actions.append(self._write_binding(name, binding))

        for name in list(self._existing):
            if name in self._packages:
                continue
            existing = self._existing.pop(name)
            clean_binding(existing.cache_entry_path, self.logger)
            result.actions.append(BindingAction(name=name, action_type=ActionType.REMOVED, reason="No longer used"))

        declaration = generate_declaration(
            self._packages.values(),
            namespace=self.config.namespace,
            stub_module=self.config.stub_module,
            strip_suffixes=self.config.strip_suffixes,
        )
        atomic_write(self.layout.declaration_path, declaration)

        self._packages.clear()
        return result

    def _write_binding(self, name: str, binding: Binding) -> BindingAction:
        """Create, replace or confirm the cache entry for one binding."""
        node_modules_target = self.remapper.remap(binding.node_modules_path)
        package_target = self.remapper.remap(binding.package_path)
        existing = self._existing.get(name)

        if existing is not None and existing.matches(node_modules_target, package_target):
            self.logger.debug("up to date", name)
            return BindingAction(
                name=name,
                action_type=ActionType.UNCHANGED,
                node_modules_target=node_modules_target,
                package_target=package_target,
                reason="Links up to date",
            )

        entry_path = self.layout.entry_path(name)
        if existing is not None:
            self.logger.debug("has existing - is cleaning", name)
            clean_binding(existing.cache_entry_path, self.logger)
            del self._existing[name]
        else:
            # Leftovers of a write that failed earlier in this process
            clean_binding(entry_path)

        self.logger.debug("writing", name)
        create_binding_links(entry_path, node_modules_target, package_target)

        self._existing[name] = ExistingBinding(
            normalized_name=name,
            cache_entry_path=entry_path,
            node_modules_target=node_modules_target,
            package_target=package_target,
        )

        if existing is not None:
            return BindingAction(
                name=name,
                action_type=ActionType.REPLACED,
                node_modules_target=node_modules_target,
                package_target=package_target,
                reason="Package moved",
            )
        return BindingAction(
            name=name,
            action_type=ActionType.CREATED,
            node_modules_target=node_modules_target,
            package_target=package_target,
            reason="New package",
        )
