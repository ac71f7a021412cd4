"""
Virtual File Tree for ScaffoldAI

The single source of truth for a generated project's files. The editor,
preview, terminal and documentation/test generators all derive their views
from it.
"""

from app.modules.filetree.models import (
    DEFAULT_ROOT_NAME,
    FileNode,
    FolderNode,
    Node,
    NodeType,
    default_skeleton,
    is_file,
    is_folder,
)
from app.modules.filetree.operations import (
    CollectedFile,
    collect_by_predicate,
    count_files,
    count_lines,
    delete_node,
    expand_all_paths,
    find_by_path,
    find_or_none,
    flatten,
    insert_child,
    iter_files,
    iter_nodes,
    list_directory,
    rename_node,
    render_tree,
    replace_subtree,
    split_path,
    update_file_content,
)
from app.modules.filetree.entry import ENTRY_CANDIDATES, EntryFile, resolve_entry_file
from app.modules.filetree.serialization import egest, export_zip, ingest, ingest_json
from app.modules.filetree.languages import language_for_file

__all__ = [
    # Models
    'DEFAULT_ROOT_NAME',
    'FileNode',
    'FolderNode',
    'Node',
    'NodeType',
    'default_skeleton',
    'is_file',
    'is_folder',

    # Operations
    'CollectedFile',
    'collect_by_predicate',
    'count_files',
    'count_lines',
    'delete_node',
    'expand_all_paths',
    'find_by_path',
    'find_or_none',
    'flatten',
    'insert_child',
    'iter_files',
    'iter_nodes',
    'list_directory',
    'rename_node',
    'render_tree',
    'replace_subtree',
    'split_path',
    'update_file_content',

    # Entry resolution
    'ENTRY_CANDIDATES',
    'EntryFile',
    'resolve_entry_file',

    # Serialization
    'egest',
    'export_zip',
    'ingest',
    'ingest_json',

    'language_for_file',
]
