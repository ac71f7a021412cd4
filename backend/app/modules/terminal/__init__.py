"""
Simulated terminal over the virtual file tree
"""

from app.modules.terminal.simulator import (
    COMMANDS,
    DEFAULT_CWD,
    LineType,
    TerminalLine,
    TerminalResult,
    TerminalSession,
    calculate,
    execute_command,
    history_entry,
)

__all__ = [
    "COMMANDS",
    "DEFAULT_CWD",
    "LineType",
    "TerminalLine",
    "TerminalResult",
    "TerminalSession",
    "calculate",
    "execute_command",
    "history_entry",
]
