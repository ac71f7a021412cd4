"""
Virtual File Tree Models
Recursive file/folder nodes describing a generated project's layout and contents
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


DEFAULT_ROOT_NAME = "project-root"


class NodeType(str, Enum):
    """Node kinds accepted in a tree document"""
    FILE = "file"
    FOLDER = "folder"


@dataclass
class FileNode:
    """Leaf node holding source text"""
    name: str
    content: str = ""
    type: NodeType = field(default=NodeType.FILE, init=False)


@dataclass
class FolderNode:
    """Interior node; children keep insertion order"""
    name: str
    children: List["Node"] = field(default_factory=list)
    type: NodeType = field(default=NodeType.FOLDER, init=False)


Node = Union[FileNode, FolderNode]


def is_file(node: Node) -> bool:
    return node.type == NodeType.FILE


def is_folder(node: Node) -> bool:
    return node.type == NodeType.FOLDER


def default_skeleton(root_name: str = DEFAULT_ROOT_NAME) -> FolderNode:
    """Tree shown in the explorer before anything has been generated"""
    return FolderNode(
        name=root_name,
        children=[
            FolderNode(
                name="src",
                children=[
                    FileNode(
                        name="index.js",
                        content='// Your code here\nconst greeting = "Hello World";\nconsole.log(greeting);'
                    )
                ]
            ),
            FileNode(
                name="README.md",
                content="# Project README\n\nThis is a **sample** project."
            ),
        ]
    )
