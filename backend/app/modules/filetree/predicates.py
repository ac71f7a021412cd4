"""
File selection predicates for collect_by_predicate.

Each predicate takes (name, full_path, content).
"""

import re

_SOURCE_EXTENSION = re.compile(r"\.(jsx|js|tsx|ts)$")
_UTILITY_DIRS = ("utils", "helpers", "services")


def strip_extension(name: str) -> str:
    return _SOURCE_EXTENSION.sub("", name)


def is_documented_component(name: str, path: str, content: str) -> bool:
    """Any JavaScript source file shows up in the component docs"""
    return name.endswith(".jsx") or name.endswith(".js")


def is_component_file(name: str, path: str, content: str) -> bool:
    """JSX files, or plain JS files that look like a function component"""
    if name.endswith(".jsx"):
        return True
    return (
        name.endswith(".js")
        and "function " in (content or "")
        and "return" in (content or "")
    )


def is_utility_file(name: str, path: str, content: str) -> bool:
    """Non-test, non-JSX modules living under a utils/helpers/services folder"""
    if not name.endswith(".js") or name.endswith(".test.js") or name.endswith(".jsx"):
        return False
    parent_path = path.rsplit("/", 1)[0] if "/" in path else ""
    return any(folder in parent_path for folder in _UTILITY_DIRS)


def is_hook_file(name: str, path: str, content: str) -> bool:
    return name.startswith("use") and (name.endswith(".js") or name.endswith(".ts"))
