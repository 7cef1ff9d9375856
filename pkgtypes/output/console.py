# pkgtypes Console Output
# Rich-based console output for user-friendly display

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from pkgtypes.sync.actions import ActionType, BindingAction
from pkgtypes.sync.binding import ExistingBinding, denormalize_name
from pkgtypes.sync.engine import WriteResult
from pkgtypes.sync.state import ScanResult


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for reconciliation passes.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        # Terminal detection stays on so piped output carries no escape codes
        self._console = RichConsole(no_color=not colored, highlight=False)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {message}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{message}[/blue]")

    def print_scan_result(self, result: ScanResult) -> None:
        """Print what setup recovered from the cache."""
        self._console.print(f"Found {result.total} existing bindings")
        for name in result.cleaned:
            self._console.print(f"    [yellow]×[/yellow] {name} [dim](partial entry removed)[/dim]")

    def print_write_result(self, result: WriteResult) -> None:
        """
        Print write result summary.

        Args:
            result: Result of a write_to_disk pass.
        """
        for action in result.actions:
            if action.action_type == ActionType.UNCHANGED and not self.verbose:
                continue
            self._print_action(action)

        border = "green" if result.changed else "blue"
        self._console.print(
            Panel(
                f"Packages: {result.total_packages}\n"
                f"Created: {result.created}, replaced: {result.replaced}, "
                f"removed: {result.removed}, unchanged: {result.unchanged}\n"
                f"Declarations: {result.declaration_path}",
                title="Types Updated",
                border_style=border,
            )
        )

    def _print_action(self, action: BindingAction) -> None:
        """Print a single binding action."""
        icon = self._get_action_icon(action.action_type)

        if action.action_type == ActionType.REMOVED:
            self._console.print(f"    {icon} [red]{action.name}[/red] (removed)")
        elif action.action_type == ActionType.UNCHANGED:
            self._console.print(f"    {icon} [dim]{action.name}[/dim]")
        else:
            self._console.print(f"    {icon} [cyan]{action.name}[/cyan] → {action.package_target}")

    def _get_action_icon(self, action_type: ActionType) -> str:
        """Get icon for action type."""
        icons = {
            ActionType.UNCHANGED: "[green]✓[/green]",
            ActionType.CREATED: "[green]+[/green]",
            ActionType.REPLACED: "[yellow]↻[/yellow]",
            ActionType.REMOVED: "[red]×[/red]",
        }
        return icons.get(action_type, "?")

    def print_bindings(self, bindings: dict[str, ExistingBinding], *, separator: str = ":", replacement: str = "_") -> None:
        """
        Print a table of cache entries.

        Args:
            bindings: Normalized name -> binding.
            separator: Package name separator, for showing package names.
            replacement: Its filesystem-safe substitute.
        """
        if not bindings:
            self._console.print("[dim]No bindings in cache[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Package", style="cyan")
        table.add_column("Entry")
        table.add_column("Package Link", style="dim")
        if self.verbose:
            table.add_column("node_modules Link", style="dim")

        for name, binding in sorted(bindings.items()):
            row = [denormalize_name(name, separator, replacement), name, binding.package_target]
            if self.verbose:
                row.append(binding.node_modules_target)
            table.add_row(*row)

        self._console.print(table)

    def print_config_summary(self, config_path: str, types_path: str, remapping: bool) -> None:
        """Print configuration summary."""
        self._console.print(
            Panel(
                f"Config: {config_path}\n"
                f"Cache: {types_path}\n"
                f"Link remapping: {'enabled' if remapping else 'disabled'}",
                title="pkgtypes Configuration",
                border_style="blue",
            )
        )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
