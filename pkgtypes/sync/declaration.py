# pkgtypes Declaration Generator
# Renders the aggregate packages.d.ts for the bindings of a pass

from collections.abc import Iterable, Sequence

from pkgtypes.sync.binding import PACKAGE_LINK, Binding

DECLARATION_TEMPLATE = """
declare module '{module_name}' {{
  import exports = require('{require_path}');
  export = exports;
}}
"""


def strip_types_suffix(types_entry: str, suffixes: Sequence[str] = (".d.ts", ".ts")) -> str:
    """
    Remove the first matching suffix from the end of a type entry path.

    TypeScript module resolution expects extension-less paths.
    """
    for suffix in suffixes:
        if suffix and types_entry.endswith(suffix):
            return types_entry[: -len(suffix)]
    return types_entry


def render_module(
    binding: Binding,
    *,
    namespace: str = "meteor",
    stub_module: str = "package-types",
    strip_suffixes: Sequence[str] = (".d.ts", ".ts"),
) -> str:
    """Render the declaration block for one binding."""
    types_entry = strip_types_suffix(binding.types_entry, strip_suffixes).lstrip("/")
    require_path = f"{stub_module}/{binding.normalized_name}/{PACKAGE_LINK}/{types_entry}"
    return DECLARATION_TEMPLATE.format(
        module_name=f"{namespace}/{binding.logical_name}",
        require_path=require_path,
    )


def generate_declaration(
    bindings: Iterable[Binding],
    *,
    namespace: str = "meteor",
    stub_module: str = "package-types",
    strip_suffixes: Sequence[str] = (".d.ts", ".ts"),
) -> str:
    """
    Render the full declaration file.

    Bindings are ordered by normalized name so the output is reproducible
    regardless of the order packages were enumerated in.

    Args:
        bindings: Bindings of the current pass.
        namespace: Prefix of the declared module names.
        stub_module: Module the cache entries are importable under.
        strip_suffixes: Suffixes removed from type entry paths.

    Returns:
        File content; empty when there are no bindings.
    """
    ordered = sorted(bindings, key=lambda binding: binding.normalized_name)
    return "".join(
        render_module(binding, namespace=namespace, stub_module=stub_module, strip_suffixes=strip_suffixes)
        for binding in ordered
    )
