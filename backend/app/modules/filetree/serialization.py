"""
File Tree Serialization

Converts between the JSON tree document exchanged with the model / browser
and the internal node structure:

    {"name": "project-root", "type": "folder", "children": [
        {"name": "src", "type": "folder", "children": [
            {"name": "App.jsx", "type": "file", "content": "..."}
        ]}
    ]}

ingest() validates the shape and raises MalformedInputError on violations.
egest() writes the same shape back, always filling children / content.
"""

import io
import json
import zipfile
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import MalformedInputError, ValidationError
from app.modules.filetree.models import FileNode, FolderNode, Node, is_folder
from app.modules.filetree.operations import iter_files
from app.schemas.file_tree import FileTreeNodeSchema, is_safe_segment


def _to_node(schema: FileTreeNodeSchema) -> Node:
    if schema.type == "folder":
        return FolderNode(
            name=schema.name,
            children=[_to_node(child) for child in schema.children or []]
        )
    return FileNode(name=schema.name, content=schema.content or "")


def ingest(document: Any) -> Node:
    """
    Validate a tree document and convert it into nodes.

    Raises:
        MalformedInputError: missing name, unknown type, non-list children,
            non-string content, or a document that is not an object
    """
    if not isinstance(document, dict):
        raise MalformedInputError(
            f"File tree must be a JSON object, got {type(document).__name__}"
        )
    try:
        schema = FileTreeNodeSchema.model_validate(document)
    except PydanticValidationError as e:
        raise MalformedInputError(
            f"Malformed file tree: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False, include_context=False, include_input=False)
        ) from e
    return _to_node(schema)


def ingest_json(text: str) -> Node:
    """Decode a JSON string, then ingest it"""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"File tree is not valid JSON: {e.msg}") from e
    return ingest(document)


def egest(node: Node) -> Dict[str, Any]:
    """Serialize nodes back to the document shape"""
    if is_folder(node):
        return {
            "name": node.name,
            "type": "folder",
            "children": [egest(child) for child in node.children or []],
        }
    return {
        "name": node.name,
        "type": "file",
        "content": node.content or "",
    }


def export_zip(tree: Node) -> bytes:
    """
    Pack every file into an in-memory ZIP archive.

    Archive names drop the root folder, so the archive unpacks as the
    project's contents rather than a single wrapping folder.

    Raises:
        ValidationError: a node name would place an entry outside the archive
            root ('.', '..', backslashes)
    """
    buffer = io.BytesIO()
    prefix = f"{tree.name}/"
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zipf:
        for path, content in iter_files(tree):
            arcname = path[len(prefix):] if path.startswith(prefix) else path
            if not all(is_safe_segment(part) for part in arcname.split("/")):
                raise ValidationError(f"Unsafe file name in '{path}'", field="name")
            zipf.writestr(arcname, content)
    return buffer.getvalue()
