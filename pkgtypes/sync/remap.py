# pkgtypes Path Remapper
# Rewrites link targets for a consumer with a different view of the filesystem

from pathlib import PurePath
from typing import Optional

from pkgtypes.config.schema import SymlinkOverrides


def _replace_root(path: str, root: str, replacement: str) -> Optional[str]:
    """Swap `root` for `replacement` if path lies under root, else None."""
    try:
        remainder = PurePath(path).relative_to(PurePath(root))
    except ValueError:
        return None

    if not remainder.parts:
        return replacement
    return str(PurePath(replacement) / remainder)


class PathRemapper:
    """
    Maps link targets from the producing environment to the consuming one.

    When pkgtypes runs somewhere other than where the links are resolved
    (inside a container, on a CI runner), targets under the remote package
    catalog or the application are rewritten onto the override roots. With no
    overrides configured remap is the identity.
    """

    def __init__(
        self,
        remote_catalog_root: Optional[str],
        app_path: str,
        overrides: Optional[SymlinkOverrides] = None,
    ):
        self.remote_catalog_root = remote_catalog_root
        self.app_path = app_path
        self.overrides = overrides or SymlinkOverrides()

    @property
    def enabled(self) -> bool:
        """Check if targets are rewritten at all."""
        return self.overrides.enabled

    def remap(self, path: str) -> str:
        """
        Translate a link target.

        Roots match on whole path components. When the path lies under both
        roots the longer one wins; a path under neither is left unchanged.

        Args:
            path: Link target as seen by this process.

        Returns:
            Link target as the consumer should see it.
        """
        if not self.enabled:
            return path

        candidates = []
        if self.remote_catalog_root:
            candidates.append((self.remote_catalog_root, self.overrides.remote_catalog_root))
        candidates.append((self.app_path, self.overrides.app_path))

        # Most specific root first
        candidates.sort(key=lambda candidate: len(PurePath(candidate[0]).parts), reverse=True)

        for root, replacement in candidates:
            remapped = _replace_root(path, root, replacement)
            if remapped is not None:
                return remapped

        return path
