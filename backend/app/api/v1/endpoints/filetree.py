"""
File Tree Endpoints

Stateless views over a tree document sent by the client: flat map,
live preview, terminal commands and ZIP export.
"""

from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import Response

from app.core.logging_config import logger
from app.modules.filetree import count_files, count_lines, export_zip, flatten, ingest
from app.modules.preview import build_preview
from app.modules.terminal import TerminalSession, execute_command, history_entry
from app.schemas.file_tree import (
    FileTreeRequest,
    FlattenResponse,
    PreviewRequest,
    PreviewResponse,
    TerminalHistoryRequest,
    TerminalHistoryResponse,
    TerminalLineSchema,
    TerminalRequest,
    TerminalResponse,
    TerminalSessionSchema,
)

router = APIRouter(prefix="/filetree", tags=["File Tree"])


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback name plus the RFC 5987 UTF-8 name"""
    fallback = "".join(
        char if 32 <= ord(char) < 127 and char not in '"\\' else "_"
        for char in filename
    )
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"


@router.post("/flatten", response_model=FlattenResponse)
async def flatten_tree(body: FileTreeRequest):
    """Flatten the tree into a path → content map with totals"""
    tree = ingest(body.file_tree)
    return FlattenResponse(
        files=flatten(tree),
        total_files=count_files(tree),
        total_lines=count_lines(tree),
    )


@router.post("/preview", response_model=PreviewResponse)
async def preview_tree(body: PreviewRequest):
    """Build the live preview HTML from the tree's App component"""
    preview = build_preview(ingest(body.file_tree))
    logger.info(f"[FileTree API] Preview generated from {preview.entry_path}")
    return PreviewResponse(html=preview.html, entry_path=preview.entry_path)


@router.post("/terminal", response_model=TerminalResponse)
async def run_terminal_command(body: TerminalRequest):
    """Execute one terminal command and return the output with the next session"""
    tree = ingest(body.file_tree)
    session = TerminalSession(cwd=body.session.cwd, history=tuple(body.session.history))
    result = execute_command(tree, session, body.command)

    return TerminalResponse(
        lines=[TerminalLineSchema(type=line.type.value, text=line.text) for line in result.lines],
        session=TerminalSessionSchema(cwd=result.session.cwd, history=list(result.session.history)),
        clear=result.clear,
    )


@router.post("/terminal/history", response_model=TerminalHistoryResponse)
async def recall_terminal_history(body: TerminalHistoryRequest):
    """ArrowUp/ArrowDown recall from the session's command history"""
    session = TerminalSession(cwd=body.session.cwd, history=tuple(body.session.history))
    index, text = history_entry(session, body.index, body.direction)
    return TerminalHistoryResponse(index=index, text=text)


@router.post("/export")
async def export_tree(body: FileTreeRequest):
    """Download the tree as a ZIP archive"""
    tree = ingest(body.file_tree)
    return Response(
        content=export_zip(tree),
        media_type="application/zip",
        headers={"Content-Disposition": content_disposition(f"{tree.name}.zip")},
    )
