# pkgtypes Sync Module
# Cache scanning, reconciliation and declaration generation

from pkgtypes.sync.actions import ActionType, BindingAction, clean_binding, create_binding_links
from pkgtypes.sync.binding import Binding, ExistingBinding, denormalize_name, normalize_name
from pkgtypes.sync.declaration import generate_declaration, strip_types_suffix
from pkgtypes.sync.engine import TypesWriter, WriteResult
from pkgtypes.sync.remap import PathRemapper
from pkgtypes.sync.state import CacheLayout, ScanResult, scan_cache

__all__ = [
    # Bindings
    "Binding",
    "ExistingBinding",
    "normalize_name",
    "denormalize_name",
    # Actions
    "ActionType",
    "BindingAction",
    "clean_binding",
    "create_binding_links",
    # State
    "CacheLayout",
    "ScanResult",
    "scan_cache",
    # Remapping
    "PathRemapper",
    # Declarations
    "generate_declaration",
    "strip_types_suffix",
    # Engine
    "TypesWriter",
    "WriteResult",
]
