"""
Virtual File Tree Operations

Pure functions over the recursive node structure:
- path lookup (find_by_path, list_directory)
- traversal (iter_files, flatten, iter_nodes, collect_by_predicate)
- mutation on a deep copy (insert_child, replace_subtree, update_file_content,
  delete_node, rename_node)
- statistics (count_files, count_lines)
- text rendering (render_tree)

None of these functions modify the tree they receive. Mutations deep-copy the
whole tree, change the copy and return it.
"""

import copy
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from app.core.exceptions import NotAFolderError, PathNotFoundError, ValidationError
from app.modules.filetree.models import FileNode, FolderNode, Node, is_file, is_folder
from app.schemas.file_tree import is_safe_segment


# (name, full_path, content) -> bool
FilePredicate = Callable[[str, str, str], bool]


@dataclass(frozen=True)
class CollectedFile:
    """A file selected by collect_by_predicate"""
    name: str
    path: str
    content: str


# =============================================================================
# PATH RESOLUTION
# =============================================================================

def split_path(path: str) -> List[str]:
    """Split a slash-delimited path, dropping empty segments"""
    return [part for part in (path or "").split("/") if part]


def join_path(parent_path: str, name: str) -> str:
    return f"{parent_path}/{name}" if parent_path else name


def _children(node: Node) -> List[Node]:
    # Folders built from partial documents may carry children=None
    return getattr(node, "children", None) or []


def _relative_parts(tree: Node, path: str) -> List[str]:
    parts = split_path(path)
    if parts and parts[0] == tree.name:
        parts = parts[1:]
    return parts


def _find_child(folder: Node, name: str) -> Optional[Node]:
    # Duplicate sibling names are tolerated; the first match wins
    for child in _children(folder):
        if child.name == name:
            return child
    return None


def _walk(tree: Node, parts: List[str], path: str) -> Node:
    current = tree
    walked = [tree.name]
    for segment in parts:
        if not is_folder(current):
            raise NotAFolderError("/".join(walked))
        child = _find_child(current, segment)
        if child is None:
            raise PathNotFoundError(path, segment)
        current = child
        walked.append(segment)
    return current


def find_by_path(tree: Node, path: str) -> Node:
    """
    Resolve a slash-delimited path to a node.

    The first segment is skipped when it equals the root's name, so both
    "project-root/src/App.jsx" and "src/App.jsx" address the same file.

    Raises:
        PathNotFoundError: a segment is missing among a folder's children
        NotAFolderError: the walk tried to descend into a file
    """
    return _walk(tree, _relative_parts(tree, path), path)


def find_or_none(tree: Node, path: str) -> Optional[Node]:
    """Like find_by_path, but returns None when the path does not resolve"""
    try:
        return find_by_path(tree, path)
    except (PathNotFoundError, NotAFolderError):
        return None


def list_directory(tree: Node, path: str) -> List[Node]:
    """Return the children of the folder at path"""
    node = find_by_path(tree, path)
    if not is_folder(node):
        raise NotAFolderError(path)
    return list(_children(node))


# =============================================================================
# TRAVERSAL
# =============================================================================

def iter_files(node: Node, parent_path: str = "") -> Iterator[Tuple[str, str]]:
    """
    Yield (full_path, content) for every file, depth-first pre-order.

    Folders contribute their name to descendant paths; the root's own name is
    kept as the first path segment.
    """
    path = join_path(parent_path, node.name)
    if is_file(node):
        yield path, getattr(node, "content", None) or ""
    elif is_folder(node):
        for child in _children(node):
            yield from iter_files(child, path)


def flatten(tree: Node) -> Dict[str, str]:
    """Flat path -> content map"""
    return dict(iter_files(tree))


def iter_nodes(node: Node, parent_path: str = "") -> Iterator[Tuple[str, Node]]:
    """Yield (full_path, node) for every node, the root included"""
    path = join_path(parent_path, node.name)
    yield path, node
    if is_folder(node):
        for child in _children(node):
            yield from iter_nodes(child, path)


def expand_all_paths(tree: Node) -> List[str]:
    """Paths of every folder, for an explorer that starts fully expanded"""
    return [path for path, node in iter_nodes(tree) if is_folder(node)]


def collect_by_predicate(tree: Node, predicate: FilePredicate) -> List[CollectedFile]:
    """
    Collect every file whose (name, full_path, content) satisfies predicate.

    This single traversal backs the documentation generator's component
    listing and the test generator's component, utility and hook listings.
    """
    return [
        CollectedFile(name=path.rsplit("/", 1)[-1], path=path, content=content)
        for path, content in iter_files(tree)
        if predicate(path.rsplit("/", 1)[-1], path, content)
    ]


# =============================================================================
# STATISTICS
# =============================================================================

def count_files(tree: Node) -> int:
    return sum(1 for _ in iter_files(tree))


def count_lines(tree: Node, count_empty_files: bool = False) -> int:
    """
    Sum of line counts over all files, splitting content on "\\n".

    Empty files contribute zero lines. With count_empty_files=True they
    contribute one, the raw segment count of "".split("\\n").
    """
    total = 0
    for _, content in iter_files(tree):
        if not content and not count_empty_files:
            continue
        total += len(content.split("\n"))
    return total


# =============================================================================
# MUTATION (always on a deep copy)
# =============================================================================

def _parent_and_name(tree: Node, path: str) -> Tuple[List[str], str]:
    parts = _relative_parts(tree, path)
    if not parts:
        raise ValidationError("Path must address a node below the root", field="path")
    return parts[:-1], parts[-1]


def _resolve_folder(tree: Node, parts: List[str], path: str) -> FolderNode:
    parent = _walk(tree, parts, path)
    if not is_folder(parent):
        raise NotAFolderError("/".join([tree.name] + parts))
    if parent.children is None:
        parent.children = []
    return parent


def insert_child(tree: Node, parent_path: str, node: Node) -> Node:
    """
    Return a copy of tree with node appended to the folder at parent_path.

    Raises:
        PathNotFoundError: parent_path does not resolve
        NotAFolderError: parent_path resolves to a file
    """
    updated = copy.deepcopy(tree)
    parent = _walk(updated, _relative_parts(updated, parent_path), parent_path)
    if not is_folder(parent):
        raise NotAFolderError(parent_path)
    if parent.children is None:
        parent.children = []
    parent.children.append(copy.deepcopy(node))
    return updated


def replace_subtree(tree: Node, path: str, node: Node) -> Node:
    """
    Return a copy of tree where the node at path is replaced by node.

    The parent of the terminal segment must exist. If no child carries the
    terminal name, node is appended instead, which makes this the "add or
    update" primitive. Addressing the root returns a copy of node.
    """
    if not _relative_parts(tree, path):
        return copy.deepcopy(node)

    updated = copy.deepcopy(tree)
    parent_parts, name = _parent_and_name(updated, path)
    parent = _resolve_folder(updated, parent_parts, path)

    replacement = copy.deepcopy(node)
    for index, child in enumerate(parent.children):
        if child.name == name:
            parent.children[index] = replacement
            break
    else:
        parent.children.append(replacement)
    return updated


def update_file_content(tree: Node, path: str, content: str) -> Node:
    """Return a copy of tree with the file at path holding content (created if missing)"""
    existing = find_or_none(tree, path)
    if existing is not None and is_folder(existing):
        raise ValidationError(f"'{path}' is a folder, not a file", field="path")
    _, name = _parent_and_name(tree, path)
    return replace_subtree(tree, path, FileNode(name=name, content=content))


def delete_node(tree: Node, path: str) -> Node:
    """Return a copy of tree without the node at path"""
    updated = copy.deepcopy(tree)
    parent_parts, name = _parent_and_name(updated, path)
    parent = _resolve_folder(updated, parent_parts, path)

    for index, child in enumerate(parent.children):
        if child.name == name:
            del parent.children[index]
            return updated
    raise PathNotFoundError(path, name)


def rename_node(tree: Node, path: str, new_name: str) -> Node:
    """Return a copy of tree with the node at path renamed"""
    if not is_safe_segment(new_name):
        raise ValidationError("Name must be a single non-empty path segment other than '.' or '..'", field="name")

    if not _relative_parts(tree, path):
        updated = copy.deepcopy(tree)
        updated.name = new_name
        return updated

    updated = copy.deepcopy(tree)
    parent_parts, name = _parent_and_name(updated, path)
    parent = _resolve_folder(updated, parent_parts, path)
    target = _find_child(parent, name)
    if target is None:
        raise PathNotFoundError(path, name)
    target.name = new_name
    return updated


# =============================================================================
# RENDERING
# =============================================================================

def render_tree(tree: Node, icons: bool = True) -> List[str]:
    """Render the tree as `tree`-style lines using box-drawing connectors"""
    lines: List[str] = []

    def _render(node: Node, prefix: str, is_last: bool) -> None:
        connector = "└── " if is_last else "├── "
        label = node.name
        if icons:
            label = f"{'📁' if is_folder(node) else '📄'} {label}"
        lines.append(f"{prefix}{connector}{label}")

        if is_folder(node):
            children = _children(node)
            child_prefix = prefix + ("    " if is_last else "│   ")
            for index, child in enumerate(children):
                _render(child, child_prefix, index == len(children) - 1)

    _render(tree, "", True)
    return lines
