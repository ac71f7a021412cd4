"""
Terminal Simulator
A small shell over the virtual file tree.

The simulator holds no state of its own: every call takes the tree and a
TerminalSession and returns the output lines together with the next session.
"""

import ast
import math
import operator
import posixpath
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, List, Tuple

from app.modules.filetree import Node, find_or_none, is_file, is_folder, render_tree, split_path


DEFAULT_CWD = "/project-root"
USER_NAME = "user"
SYSTEM_NAME = "WebTerminal"
SYSTEM_DESCRIPTION = "WebTerminal 1.0.0 Browser-Based Terminal Emulator"

HELP_LINES = [
    "Available commands:",
    "  help     - Show this help message",
    "  clear    - Clear terminal",
    "  ls       - List directory contents",
    "  pwd      - Print working directory",
    "  cd       - Change directory",
    "  cat      - Display file contents",
    "  echo     - Print text",
    "  date     - Show current date/time",
    "  tree     - Show directory tree",
    "  whoami   - Display current user",
    "  uname    - Print system information",
    "  calc     - Simple calculator (e.g., calc 5 + 3)",
]


class LineType(str, Enum):
    COMMAND = "command"
    OUTPUT = "output"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class TerminalLine:
    type: LineType
    text: str


@dataclass(frozen=True)
class TerminalSession:
    cwd: str = DEFAULT_CWD
    history: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TerminalResult:
    lines: List[TerminalLine]
    session: TerminalSession
    clear: bool = False


def _output(text: str) -> TerminalLine:
    return TerminalLine(LineType.OUTPUT, text)


def _error(text: str) -> TerminalLine:
    return TerminalLine(LineType.ERROR, text)


# =============================================================================
# CALCULATOR
# =============================================================================

_BINARY_OPERATORS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPERATORS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

MAX_EXPONENT = 1000
# Integer results are capped at this many bits (about 3000 decimal digits)
MAX_RESULT_BITS = 10000


def _check_power(base: float, exponent: float) -> None:
    """Reject powers whose result would exceed MAX_RESULT_BITS before computing them"""
    if abs(exponent) > MAX_EXPONENT:
        raise ValueError("exponent too large")
    if abs(base) > 1 and exponent > 0 and exponent * math.log2(abs(base)) > MAX_RESULT_BITS:
        raise ValueError("result too large")


def _check_size(value: float) -> float:
    if isinstance(value, int) and value.bit_length() > MAX_RESULT_BITS:
        raise ValueError("result too large")
    return value


def _evaluate(node: ast.AST) -> float:
    if isinstance(node, ast.Expression):
        return _evaluate(node.body)
    if isinstance(node, ast.Constant) and type(node.value) in (int, float):
        return _check_size(node.value)
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPERATORS:
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return _check_size(_BINARY_OPERATORS[type(node.op)](left, right))
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPERATORS:
        return _UNARY_OPERATORS[type(node.op)](_evaluate(node.operand))
    raise ValueError(f"unsupported expression: {type(node).__name__}")


def calculate(expression: str) -> str:
    """
    Evaluate an arithmetic expression without eval()

    Raises:
        ValueError: the expression is empty, not arithmetic or not computable
    """
    try:
        result = _evaluate(ast.parse(expression.strip(), mode="eval"))
    except (SyntaxError, ZeroDivisionError, OverflowError, TypeError, RecursionError) as e:
        raise ValueError(str(e)) from e
    if isinstance(result, float) and result.is_integer():
        result = int(result)
    return str(result)


# =============================================================================
# PATHS
# =============================================================================

def _resolve(tree: Node, cwd: str, target: str) -> str:
    """Turn a cd/cat/ls argument into a canonical absolute path under the root"""
    joined = target if target.startswith("/") else f"{cwd}/{target}"
    parts = split_path(posixpath.normpath(joined))
    if parts and parts[0] == tree.name:
        parts = parts[1:]
    return "/" + "/".join([tree.name] + parts)


def _anchor_to_root(tree: Node, session: TerminalSession) -> TerminalSession:
    """Move a cwd that lies outside the tree (e.g. the default after a root rename) to the root"""
    parts = split_path(session.cwd)
    if parts and parts[0] == tree.name:
        return session
    return replace(session, cwd=f"/{tree.name}")


# =============================================================================
# COMMANDS
# =============================================================================

def _help(tree, session, args):
    return [_output(line) for line in HELP_LINES], session


def _ls(tree, session, args):
    path = _resolve(tree, session.cwd, args[0]) if args else session.cwd
    node = find_or_none(tree, path)
    if node is None or not is_folder(node):
        return [_error("Directory not found")], session
    children = node.children or []
    if not children:
        return [_output("(empty directory)")], session
    return [
        _output(f"{'📁' if is_folder(child) else '📄'} {child.name}")
        for child in children
    ], session


def _pwd(tree, session, args):
    return [_output(session.cwd)], session


def _cd(tree, session, args):
    if not args:
        new_path = f"/{tree.name}"
    elif args[0] == "..":
        parts = split_path(session.cwd)
        if len(parts) <= 1:
            return [], session
        new_path = "/" + "/".join(parts[:-1])
    else:
        new_path = _resolve(tree, session.cwd, args[0])
        node = find_or_none(tree, new_path)
        if node is None or not is_folder(node):
            return [_error("Directory not found or not a folder")], session
    return [_output(f"Changed to {new_path}")], replace(session, cwd=new_path)


def _cat(tree, session, args):
    if not args:
        return [_error("Usage: cat <filename>")], session
    node = find_or_none(tree, _resolve(tree, session.cwd, args[0]))
    if node is None or not is_file(node):
        return [_error("File not found or not a file")], session
    content = node.content or "(empty file)"
    return [_output(line) for line in content.split("\n")], session


def _echo(tree, session, args):
    return [_output(" ".join(args))], session


def _date(tree, session, args):
    return [_output(datetime.now().strftime("%a %b %d %Y %H:%M:%S"))], session


def _tree(tree, session, args):
    return [_output(line) for line in render_tree(tree)], session


def _whoami(tree, session, args):
    return [_output(USER_NAME)], session


def _uname(tree, session, args):
    if args and args[0] == "-a":
        return [_output(SYSTEM_DESCRIPTION)], session
    return [_output(SYSTEM_NAME)], session


def _calc(tree, session, args):
    try:
        return [_output(f"Result: {calculate(' '.join(args))}")], session
    except ValueError:
        return [_error("Error: Invalid expression")], session


CommandHandler = Callable[[Node, TerminalSession, List[str]], Tuple[List[TerminalLine], TerminalSession]]

COMMANDS: Dict[str, CommandHandler] = {
    "help": _help,
    "ls": _ls,
    "pwd": _pwd,
    "cd": _cd,
    "cat": _cat,
    "echo": _echo,
    "date": _date,
    "tree": _tree,
    "whoami": _whoami,
    "uname": _uname,
    "calc": _calc,
}


def execute_command(tree: Node, session: TerminalSession, command: str) -> TerminalResult:
    """
    Run one command line against the tree

    Blank input produces no lines and leaves the session untouched. Every
    other input is appended to the session history, including unknown
    commands and `clear`.
    """
    trimmed = command.strip()
    if not trimmed:
        return TerminalResult(lines=[], session=session)

    session = _anchor_to_root(tree, replace(session, history=session.history + (trimmed,)))
    name, *args = trimmed.split()
    name = name.lower()

    if name == "clear":
        return TerminalResult(lines=[], session=session, clear=True)

    lines = [TerminalLine(LineType.COMMAND, f"$ {trimmed}")]
    handler = COMMANDS.get(name)
    if handler is None:
        lines.append(_error(f"bash: {name}: command not found"))
        lines.append(TerminalLine(LineType.INFO, "Type 'help' for available commands"))
        return TerminalResult(lines=lines, session=session)

    output, session = handler(tree, session, args)
    lines.extend(output)
    return TerminalResult(lines=lines, session=session)


def history_entry(session: TerminalSession, index: int, direction: str) -> Tuple[int, str]:
    """
    Step through the command history the way ArrowUp/ArrowDown do

    index is -1 while the user is typing a fresh line. Returns the new index
    and the text to place on the input line.
    """
    history = session.history
    if index >= len(history):
        index = -1
    if direction == "up":
        if not history:
            return -1, ""
        new_index = len(history) - 1 if index == -1 else max(0, index - 1)
        return new_index, history[new_index]

    if direction == "down":
        if index == -1 or index + 1 >= len(history):
            return -1, ""
        return index + 1, history[index + 1]

    raise ValueError(f"Unknown history direction: {direction}")
