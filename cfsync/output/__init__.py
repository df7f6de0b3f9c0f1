# CFSync Output Module
# Rich console output

from cfsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
