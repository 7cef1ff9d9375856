# pkgtypes Binding Actions
# Action types and filesystem mutations for cache entries

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from pkgtypes.logger import TypesLogger
from pkgtypes.sync.binding import NODE_MODULES_LINK, PACKAGE_LINK
from pkgtypes.utils.paths import mkdir_if_missing, rmdir_if_exists, unlink_if_exists
from pkgtypes.utils.platform import create_directory_link


class ActionType(str, Enum):
    """What happened to a binding during a pass."""

    # No action needed
    UNCHANGED = "unchanged"

    # Entry written for the first time
    CREATED = "created"

    # Stale entry removed and written again
    REPLACED = "replaced"

    # Entry no longer wanted
    REMOVED = "removed"


@dataclass
class BindingAction:
    """
    Outcome for a single cache entry.

    Targets are the remapped link targets; they are unset for removals.
    """

    name: str
    action_type: ActionType
    node_modules_target: Optional[str] = None
    package_target: Optional[str] = None
    reason: str = ""

    @property
    def is_mutation(self) -> bool:
        """Check if this action touched the filesystem."""
        return self.action_type != ActionType.UNCHANGED


def clean_binding(entry_path: Path, logger: Optional[TypesLogger] = None) -> None:
    """
    Remove a cache entry: both links first, then its directory.

    Missing pieces are ignored, so a half-removed entry can be cleaned again.

    Raises:
        OSError: For anything other than a missing link or directory,
            including a directory that still holds unexpected files.
    """
    if logger is not None:
        logger.debug("cleaning", entry_path)

    unlink_if_exists(entry_path / NODE_MODULES_LINK)
    unlink_if_exists(entry_path / PACKAGE_LINK)
    rmdir_if_exists(entry_path)


def create_binding_links(entry_path: Path, node_modules_target: str, package_target: str) -> None:
    """
    Create a cache entry directory and its two directory links.

    Raises:
        OSError: If the directory or either link cannot be created.
    """
    mkdir_if_missing(entry_path)
    create_directory_link(node_modules_target, entry_path / NODE_MODULES_LINK)
    create_directory_link(package_target, entry_path / PACKAGE_LINK)
