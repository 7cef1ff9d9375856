# pkgtypes Output Module
# Rich console output

from pkgtypes.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
