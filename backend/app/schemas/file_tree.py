from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator
from typing import Dict, List, Literal, Optional, Any


# Names that would escape their folder once written to disk
RESERVED_NAMES = frozenset({".", ".."})
SEPARATORS = ("/", "\\", "\x00")


def is_safe_segment(name: str) -> bool:
    """True when name is a non-empty single path segment that stays inside its folder"""
    return bool(name) and name not in RESERVED_NAMES and not any(sep in name for sep in SEPARATORS)


class FileTreeNodeSchema(BaseModel):
    """Wire shape of a tree node: {name, type, children?, content?}"""
    name: StrictStr = Field(..., min_length=1)
    type: Literal["file", "folder"]
    children: Optional[List["FileTreeNodeSchema"]] = None
    content: Optional[StrictStr] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def name_is_single_segment(cls, v: str) -> str:
        if not is_safe_segment(v):
            raise ValueError("name must be a single path segment other than '.' or '..'")
        return v


FileTreeNodeSchema.model_rebuild()


class FlattenResponse(BaseModel):
    files: Dict[str, str]
    total_files: int
    total_lines: int


class PreviewRequest(BaseModel):
    file_tree: Dict[str, Any]


class PreviewResponse(BaseModel):
    html: str
    entry_path: str


class TerminalSessionSchema(BaseModel):
    cwd: str = "/project-root"
    history: List[str] = Field(default_factory=list)


class TerminalRequest(BaseModel):
    file_tree: Dict[str, Any]
    command: str
    session: TerminalSessionSchema = Field(default_factory=TerminalSessionSchema)


class TerminalLineSchema(BaseModel):
    type: str
    text: str


class TerminalResponse(BaseModel):
    lines: List[TerminalLineSchema]
    session: TerminalSessionSchema
    clear: bool = False


class FileTreeRequest(BaseModel):
    file_tree: Dict[str, Any]


class TerminalHistoryRequest(BaseModel):
    """ArrowUp/ArrowDown recall; index is -1 on a fresh input line"""
    session: TerminalSessionSchema = Field(default_factory=TerminalSessionSchema)
    index: int = Field(default=-1, ge=-1)
    direction: Literal["up", "down"]


class TerminalHistoryResponse(BaseModel):
    index: int
    text: str
